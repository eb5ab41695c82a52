from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from fornecedor_api.core.config import Settings, get_settings

# bcrypt only looks at the first 72 bytes and current releases reject longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login password against the stored users.password_hash."""
    password = plain_password.encode("utf-8")
    if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        # no stored hash was made from a longer password
        return False
    if isinstance(hashed_password, str):
        hashed_password = hashed_password.encode("utf-8")
    return bcrypt.checkpw(password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a new account password for users.password_hash (bcrypt, 12 rounds)."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12))
    return hashed.decode("utf-8")


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Sign a JWT carrying `data` plus the registered claims.

    iss, aud, iat, nbf and exp are filled from settings; keys already in
    `data` are kept as given.
    """
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    to_encode.update(data)
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings | None = None) -> dict | None:
    """Decode and verify a JWT. Returns None for any invalid or expired token."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
        return payload
    except JWTError:
        return None
