"""
Unit tests for the user service.
"""

import pytest
from sqlalchemy.exc import OperationalError

from bookstore.application.services import user_service
from bookstore.core.exceptions import InvalidInputException, StoreException
from bookstore.core.security import verify_password
from bookstore.domain.schemas.auth import UserWrite


def test_new_user_needs_a_password(users):
    with pytest.raises(InvalidInputException):
        user_service.save_user(users, UserWrite(email="ada@example.com"))


def test_edit_with_password_resets_the_credential(users, make_user):
    user = make_user()

    user_service.save_user(users, UserWrite(id=user.id, email=user.email, first_name="Jo", password="brand new"))

    stored = users.get_one(user.id)
    assert stored.first_name == "Jo"
    assert verify_password("brand new", stored.password)


def test_failed_password_reset_keeps_the_old_profile(users, make_user, monkeypatch):
    user = make_user()

    def store_down(password):
        raise OperationalError("UPDATE", {}, ConnectionError("store down"))

    monkeypatch.setattr("bookstore.infrastructure.repositories.user_repository.hash_password", store_down)

    with pytest.raises(StoreException):
        user_service.save_user(users, UserWrite(id=user.id, email=user.email, first_name="Changed", password="new"))

    stored = users.get_one(user.id)
    assert stored.first_name == "Jack"
    assert verify_password("secret", stored.password)


def test_default_admin_is_created_once(users):
    user_service.ensure_default_admin(users, "root@example.com", "pw")
    user_service.ensure_default_admin(users, "root@example.com", "other")

    assert [u.email for u in users.get_all()] == ["root@example.com"]
    assert verify_password("pw", users.get_by_email("root@example.com").password)
