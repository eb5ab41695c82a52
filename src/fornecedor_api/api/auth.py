"""Registration and login endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from fornecedor_api.core.config import Settings, get_settings
from fornecedor_api.core.database import get_db
from fornecedor_api.core.exceptions import AuthenticationFailedError, IdentityError
from fornecedor_api.identity.service import IdentityService, SignInResult
from fornecedor_api.schemas.auth import LoginUser, RegisterUser, UserResponse
from fornecedor_api.validation import validate_or_raise

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["Usuario"])

INVALID_CREDENTIALS_MESSAGE = "Usuário ou senha inválidos"
LOCKED_OUT_MESSAGE = "Usuário temporariamente bloqueado por tentativas inválidas"


def get_identity_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> IdentityService:
    return IdentityService(db, settings)


@auth_router.post(
    "/registro",
    name="RegistroUsuario",
    response_model=UserResponse,
    responses={400: {"description": "Validation problem or identity errors"}},
)
def registro(
    payload: Any = Body(...),
    identity: IdentityService = Depends(get_identity_service),
):
    """Create an account (e-mail confirmed by default) and return its token."""
    data = validate_or_raise(RegisterUser, payload)

    result = identity.create_user(data.email, data.password)
    if not result.succeeded:
        raise IdentityError(result.errors)

    return identity.issue_token(data.email)


@auth_router.post(
    "/login",
    name="LoginUsuario",
    response_model=UserResponse,
    responses={400: {"description": "Validation problem, invalid credentials or locked account"}},
)
def login(
    payload: Any = Body(...),
    identity: IdentityService = Depends(get_identity_service),
):
    """Check credentials (with lockout) and return a fresh token."""
    data = validate_or_raise(LoginUser, payload)

    result = identity.verify_credentials(data.email, data.password)
    if result == SignInResult.LOCKED_OUT:
        raise AuthenticationFailedError(LOCKED_OUT_MESSAGE)
    if result != SignInResult.SUCCESS:
        logger.info("Login failed")
        raise AuthenticationFailedError(INVALID_CREDENTIALS_MESSAGE)

    return identity.issue_token(data.email)
