from __future__ import annotations

import pytest

from mydiary.cli import main


@pytest.fixture()
def cli_dir(tmp_path, monkeypatch):
    d = tmp_path / "cli-data"
    monkeypatch.setenv("MYDIARY_DATA_DIR", str(d))
    return d


def test_init_creates_database(cli_dir, capsys):
    assert main(["init"]) == 0
    out = capsys.readouterr().out
    assert "mydiary.db" in out
    assert "entries: 0" in out
    assert (cli_dir / "mydiary.db").exists()


def test_entry_commands(cli_dir, capsys):
    assert main(["add-user", "--email", "Cli@X.com"]) == 0
    assert "email = cli@x.com" in capsys.readouterr().out

    assert main(["new-entry", "--email", "cli@x.com", "--text", "first note"]) == 0
    out = capsys.readouterr().out
    assert "first note" in out and "[dirty]" in out

    assert main(["list", "--email", "cli@x.com"]) == 0
    assert "first note" in capsys.readouterr().out

    assert main(["edit", "--id", "1", "--text", "second"]) == 0
    assert "second" in capsys.readouterr().out

    assert main(["purge"]) == 0
    assert "deleted 1 entries" in capsys.readouterr().out

    assert main(["list"]) == 0
    assert "(empty)" in capsys.readouterr().out


def test_errors_return_nonzero(cli_dir, capsys):
    assert main(["show", "--id", "42"]) == 1
    assert "EntryNotFound" in capsys.readouterr().err

    assert main(["new-entry", "--email", "nobody@x.com"]) == 1
    assert "UserNotFound" in capsys.readouterr().err
