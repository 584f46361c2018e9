from __future__ import annotations

import pytest

from mydiary.domain.models import User
from mydiary.exceptions import CouldNotDeleteUser, DatabaseNotOpen, UserAlreadyExists, UserNotFound


def test_create_then_get_any_case(service):
    created = service.create_user("Alice@Example.com")
    assert created.email == "alice@example.com"

    for variant in ("alice@example.com", "ALICE@EXAMPLE.COM", "Alice@Example.com"):
        found = service.get_user(variant)
        assert found.id == created.id
        assert found.email == "alice@example.com"


def test_create_twice_fails(service):
    service.create_user("b@x.com")
    with pytest.raises(UserAlreadyExists):
        service.create_user("B@X.com")


def test_get_missing_user(service):
    with pytest.raises(UserNotFound):
        service.get_user("nobody@x.com")


def test_get_or_create(service):
    first = service.get_or_create_user("C@x.com")
    again = service.get_or_create_user("c@X.com")
    assert first == again
    assert first.id == again.id


def test_get_or_create_propagates_other_errors(service):
    service.close()
    with pytest.raises(DatabaseNotOpen):
        service.get_or_create_user("d@x.com")


def test_delete_user(service):
    service.create_user("e@x.com")
    service.delete_user("E@x.com")
    with pytest.raises(UserNotFound):
        service.get_user("e@x.com")


def test_delete_absent_user(service):
    with pytest.raises(CouldNotDeleteUser):
        service.delete_user("ghost@x.com")


def test_delete_user_keeps_entries(service):
    owner = service.create_user("f@x.com")
    entry = service.create_entry(owner)
    service.delete_user("f@x.com")
    assert service.get_entry(entry.id).user_id == owner.id


def test_user_equality_is_by_id():
    assert User(1, "a@x.com") == User(1, "other@x.com")
    assert User(1, "a@x.com") != User(2, "a@x.com")
    assert len({User(1, "a"), User(1, "b")}) == 1
    assert str(User(3, "z@x.com")) == "Person ID = 3, email = z@x.com"
