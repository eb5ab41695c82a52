"""Auth request and token response models."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from fornecedor_api.core.security import BCRYPT_MAX_PASSWORD_BYTES


class Credentials(BaseModel):
    email: EmailStr = Field(..., description="Account e-mail")
    password: str = Field(..., min_length=1, max_length=100, description="Account password")

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_many_bytes",
                "A senha pode ter no máximo {max_bytes} bytes",
                {"max_bytes": BCRYPT_MAX_PASSWORD_BYTES},
            )
        return value


class RegisterUser(Credentials):
    """Body of POST /registro."""


class LoginUser(Credentials):
    """Body of POST /login."""


class ClaimOut(BaseModel):
    type: str
    value: str


class UserToken(BaseModel):
    id: UUID
    email: str
    claims: list[ClaimOut] = Field(default_factory=list)


class UserResponse(BaseModel):
    """Token issued on successful register/login. Not persisted."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user_token: UserToken
