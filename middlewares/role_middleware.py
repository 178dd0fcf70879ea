from fastapi import HTTPException, Depends, status
from typing import Any, Dict, Iterable, Union

from api.user.user_model import UserRole
from middlewares.auth_middleware import auth_middleware


def _role_key(role: Union[UserRole, str]) -> str:
    return str(getattr(role, "value", role)).lower()


def role_middleware(required_roles: Iterable[Union[UserRole, str]] = ()):
    """Dependency factory: the caller must hold at least one of `required_roles`."""
    allowed = {_role_key(r) for r in required_roles}

    def dependency(user: Dict[str, Any] = Depends(auth_middleware)):
        # auth_middleware has already rejected bad tokens and inactive users
        held = {_role_key(r) for r in user.get("roles", [])}
        if allowed and allowed.isdisjoint(held):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden: requires one of roles {sorted(allowed)}"
            )
        return user

    return dependency


admin_required = role_middleware(required_roles=[UserRole.admin])
