"""Bearer-token authentication and policy dependencies."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fornecedor_api.core.config import Settings, get_settings
from fornecedor_api.core.exceptions import AuthorizationDeniedError, NotAuthenticatedError
from fornecedor_api.core.security import decode_access_token
from fornecedor_api.identity.tokens import RESERVED_CLAIMS, ROLE_CLAIM
from fornecedor_api.web.policies import get_policy

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class UserClaims:
    """
    Caller identity extracted from the JWT.

    No database lookup: the token is the whole identity.
    """
    id: UUID
    email: str
    claims: dict[str, list[str]] = field(default_factory=dict)
    roles: list[str] = field(default_factory=list)

    def has_claim(self, claim_type: str) -> bool:
        return claim_type in self.claims


def _as_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


def claims_from_payload(payload: dict[str, Any]) -> Optional[UserClaims]:
    """Build UserClaims from a decoded token payload, or None if it lacks sub/email."""
    user_id: Optional[str] = payload.get("sub")
    email: Optional[str] = payload.get("email")
    if not user_id or not email:
        return None

    try:
        uid = UUID(user_id)
    except ValueError:
        return None

    claims = {
        claim_type: _as_list(value)
        for claim_type, value in payload.items()
        if claim_type not in RESERVED_CLAIMS
    }
    roles = _as_list(payload[ROLE_CLAIM]) if ROLE_CLAIM in payload else []
    return UserClaims(id=uid, email=email, claims=claims, roles=roles)


async def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> UserClaims:
    """Require any authenticated caller. Fails closed with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise NotAuthenticatedError()

    payload = decode_access_token(credentials.credentials, settings)
    if payload is None:
        raise NotAuthenticatedError("Token inválido ou expirado")

    user = claims_from_payload(payload)
    if user is None:
        raise NotAuthenticatedError("Token inválido ou expirado")
    return user


def require_policy(name: str) -> Callable[..., Any]:
    """
    Dependency factory gating a route behind a named policy.

    Unknown names raise KeyError when the route is declared.
    """
    policy = get_policy(name)

    async def dependency(user: UserClaims = Depends(require_user)) -> UserClaims:
        if not policy.evaluate(user.claims):
            logger.warning(
                "Authorization denied",
                extra={"user_id": str(user.id), "policy": policy.name},
            )
            raise AuthorizationDeniedError(f"Acesso negado: política '{policy.name}' não atendida")
        return user

    return dependency
