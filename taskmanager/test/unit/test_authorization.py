# taskmanager/test/unit/test_authorization.py

# Para rodar o arquivo
# pytest taskmanager/test/unit/test_authorization.py -v

"""
Testes das regras de autorização por papel (AuthService).
"""

from uuid import uuid4

import pytest

from taskmanager.domain.exceptions import (
    ERROR_STATUS,
    ErrorKind,
    PermissionDeniedException,
    UnauthenticatedException,
)
from taskmanager.domain.models.user import Role, User
from taskmanager.domain.services.auth_service import AuthService


def make_user(role_id: int, role_name: str) -> User:
    return User(id=uuid4(), email="someone@example.com", password_hash=None,
                role_id=role_id, role=Role(id=role_id, name=role_name))


def test_authorize_allows_listed_role():
    user = make_user(2, "USER")
    assert AuthService.authorize(user, ["USER", "ADMIN"]) is user


def test_authorize_without_user_is_unauthenticated():
    with pytest.raises(UnauthenticatedException) as exc_info:
        AuthService.authorize(None, ["ADMIN"])
    assert exc_info.value.status_code == 401


def test_authorize_with_other_role_is_forbidden():
    with pytest.raises(PermissionDeniedException) as exc_info:
        AuthService.authorize(make_user(2, "USER"), ["ADMIN"])
    assert exc_info.value.status_code == 403
    assert exc_info.value.internal_code == "FORBIDDEN"


def test_authorize_with_empty_allowed_list_denies_everyone():
    with pytest.raises(PermissionDeniedException):
        AuthService.authorize(make_user(1, "ADMIN"), [])


def test_is_admin_compares_role_id():
    assert AuthService.is_admin(make_user(1, "ADMIN"), admin_role_id=1) is True
    assert AuthService.is_admin(make_user(2, "USER"), admin_role_id=1) is False


def test_every_error_kind_has_a_status():
    """Cada tipo de erro do domínio mapeia para um status HTTP."""
    assert set(ERROR_STATUS) == set(ErrorKind)
