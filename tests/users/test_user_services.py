from __future__ import annotations

import pytest

from potw_system.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_authenticate_success(container, password):
    user = container.auth_service.authenticate("  BOB@usehorizon.ai ", password)

    assert user.user_id == 2
    assert user.is_admin is False


@pytest.mark.parametrize("email, pw", [("bob@usehorizon.ai", "wrong"), ("nobody@usehorizon.ai", "secret123")])
def test_authenticate_failures(container, email, pw):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(email, pw)


def test_authenticate_rejects_other_domains(container, password):
    with pytest.raises(AuthorizationError):
        container.auth_service.authenticate("mallory@gmail.com", password)


def test_register_provisions_member(container, users_repo):
    user = container.auth_service.register(email="Eve@usehorizon.ai", password="longenough")

    stored = users_repo.get_by_email("eve@usehorizon.ai")
    assert stored.user_id == user.user_id
    assert stored.name == "eve"
    assert stored.is_admin is False
    assert container.auth_service.authenticate("eve@usehorizon.ai", "longenough").user_id == user.user_id


def test_register_validation(container):
    with pytest.raises(ValidationError):
        container.auth_service.register(email="bob@usehorizon.ai", password="longenough")
    with pytest.raises(ValidationError):
        container.auth_service.register(email="new@usehorizon.ai", password="123")
    with pytest.raises(AuthorizationError):
        container.auth_service.register(email="new@example.com", password="longenough")


def test_refresh(container):
    assert container.auth_service.refresh(3).name == "Carol"
    assert container.auth_service.refresh(404) is None


def test_update_profile(container):
    profile = container.user_service.update_profile(2, name="  Robert ", avatar_url="https://img.example/b.png")

    assert profile.name == "Robert"
    assert profile.avatar_url == "https://img.example/b.png"

    with pytest.raises(ValidationError):
        container.user_service.update_profile(2, name="Robert", avatar_url="ftp://nope")
    with pytest.raises(NotFoundError):
        container.user_service.update_profile(404, name="Ghost")


def test_set_admin_rules(container, users_repo):
    with pytest.raises(AuthorizationError):
        container.user_service.set_admin(current_user_id=2, user_id=3, is_admin=True)
    with pytest.raises(ValidationError):
        container.user_service.set_admin(current_user_id=1, user_id=1, is_admin=False)

    container.user_service.set_admin(current_user_id=1, user_id=3, is_admin=True)
    assert users_repo.get_by_id(3).is_admin is True
