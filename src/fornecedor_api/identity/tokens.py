"""
Token issuance.

One signed JWT per successful register/login, aggregating the standard
claims, the user's own claims and one "role" claim per role.
"""

from datetime import timedelta
from typing import Any
from uuid import uuid4

from fornecedor_api.core.config import Settings
from fornecedor_api.core.security import create_access_token
from fornecedor_api.models.user import User
from fornecedor_api.schemas.auth import ClaimOut, UserResponse, UserToken

ROLE_CLAIM = "role"

# Registered/standard names a user claim may not overwrite
RESERVED_CLAIMS = frozenset({"sub", "email", "jti", "iss", "aud", "iat", "nbf", "exp", ROLE_CLAIM})


def collect_user_claims(user: User) -> dict[str, Any]:
    """
    Group user claims by type.

    A type with a single value maps to that value; repeated types map to
    the list of their values.
    """
    grouped: dict[str, list[str]] = {}
    for claim in user.claims:
        if claim.claim_type in RESERVED_CLAIMS:
            continue
        grouped.setdefault(claim.claim_type, []).append(claim.claim_value or "")
    return {
        claim_type: values[0] if len(values) == 1 else values
        for claim_type, values in grouped.items()
    }


def build_claims(user: User) -> dict[str, Any]:
    claims: dict[str, Any] = {
        "sub": str(user.id),
        "email": user.email,
        "jti": str(uuid4()),
    }
    claims.update(collect_user_claims(user))
    roles = sorted(r.role for r in user.roles)
    if roles:
        claims[ROLE_CLAIM] = roles
    return claims


def build_user_response(user: User, settings: Settings) -> UserResponse:
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(build_claims(user), expires_delta=expires_delta, settings=settings)

    visible_claims = [
        ClaimOut(type=c.claim_type, value=c.claim_value or "")
        for c in user.claims
        if c.claim_type not in RESERVED_CLAIMS
    ]
    visible_claims.extend(ClaimOut(type=ROLE_CLAIM, value=r.role) for r in user.roles)

    return UserResponse(
        access_token=access_token,
        expires_in=int(expires_delta.total_seconds()),
        user_token=UserToken(id=user.id, email=user.email, claims=visible_claims),
    )
