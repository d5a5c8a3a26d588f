"""Tests for authentication service."""

import uuid

from devconnector.auth.models import User
from devconnector.auth.service import (
    authenticate_user,
    get_user_by_email,
    get_user_by_id,
    verify_password,
)


class TestVerifyPassword:
    def test_matching_password(self, make_hash):
        assert verify_password("hunter2", make_hash("hunter2"))

    def test_wrong_password_fails(self, make_hash):
        assert not verify_password("wrong_password", make_hash("correct_password"))

    def test_non_bcrypt_hash_fails(self):
        assert not verify_password("anything", "plain-text")


class TestGetUser:
    def test_finds_existing_user(self, db_session, test_user):
        user = get_user_by_email(db_session, "test@example.com")
        assert user is not None
        assert user.id == test_user.id

    def test_lookup_is_case_insensitive(self, db_session, test_user):
        assert get_user_by_email(db_session, "Test@Example.COM") is not None

    def test_returns_none_for_unknown(self, db_session):
        assert get_user_by_email(db_session, "unknown@example.com") is None

    def test_by_id(self, db_session, test_user):
        assert get_user_by_id(db_session, str(test_user.id)).email == "test@example.com"

    def test_by_malformed_id(self, db_session):
        assert get_user_by_id(db_session, "nope") is None


class TestAuthenticateUser:
    def test_valid_credentials(self, db_session, test_user, test_password):
        result = authenticate_user(db_session, "test@example.com", test_password)
        assert result is not None
        assert result.id == test_user.id

    def test_wrong_password(self, db_session, test_user):
        assert authenticate_user(db_session, "test@example.com", "wrongpassword") is None

    def test_nonexistent_user(self, db_session):
        assert authenticate_user(db_session, "nobody@test.com", "password") is None

    def test_second_user_isolated(self, db_session, test_user, test_password, make_hash):
        other = User(id=uuid.uuid4(), name="Other", email="other@test.com", password_hash=make_hash("pw-other"))
        db_session.add(other)
        db_session.commit()

        assert authenticate_user(db_session, "other@test.com", test_password) is None
        assert authenticate_user(db_session, "other@test.com", "pw-other").id == other.id
