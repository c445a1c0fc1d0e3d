import pytest

from digital_id.core.enums import Role
from digital_id.core.exceptions import AuthenticationError, ValidationError
from digital_id.users.model import User


def test_authenticate_success(container):
    s_user = container.auth_service.authenticate(" Admin@Example.com ", "admin123")

    assert s_user.user_id == 1
    assert s_user.role == Role.ADMIN


@pytest.mark.parametrize("email, password", [("admin@example.com", "nope"), ("ghost@example.com", "admin123")])
def test_authenticate_rejects_bad_credentials(container, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        container.auth_service.authenticate(email, password)


def test_authenticate_rejects_inactive_and_placeholder_hashes(container, repos):
    repos.users._users[5] = User(5, "Old", "old@example.com", "not-a-hash", Role.STAFF)
    repos.users._users[6] = User(6, "Gone", "gone@example.com", "not-a-hash", Role.STAFF, is_active=False)

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("old@example.com", "whatever")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("gone@example.com", "whatever")


def test_create_staff_account(container, repos):
    user_id = container.user_service.create_account(full_name="Door Scanner", email="Door@Example.com", password="secret1")

    user = repos.users.get_by_id(user_id)
    assert user.email == "door@example.com"
    assert user.role == Role.STAFF
    assert container.auth_service.authenticate("door@example.com", "secret1").user_id == user_id


@pytest.mark.parametrize(
    "kwargs, message",
    [
        (dict(full_name="", email="a@example.com", password="secret1"), "Full name is required"),
        (dict(full_name="A", email="not-an-email", password="secret1"), "Invalid email format"),
        (dict(full_name="A", email="a@example.com", password="short"), "at least 6 characters"),
        (dict(full_name="A", email="staff@example.com", password="secret1"), "already registered"),
        (dict(full_name="A", email="b@example.com", password="secret1", role=Role.ADMIN), "Admin accounts"),
    ],
)
def test_create_account_validation(container, kwargs, message):
    with pytest.raises(ValidationError, match=message):
        container.user_service.create_account(**kwargs)
