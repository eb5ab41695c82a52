"""
Identity service.

Creates accounts, checks credentials with lockout and manages the claims
and roles that end up in issued tokens. The account store is the users /
user_claims / user_roles tables.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from sqlalchemy.orm import Session

from fornecedor_api.core.config import Settings, get_settings
from fornecedor_api.core.exceptions import PersistenceFailedError
from fornecedor_api.core.security import BCRYPT_MAX_PASSWORD_BYTES, get_password_hash, verify_password
from fornecedor_api.identity.tokens import build_user_response
from fornecedor_api.models.user import User, UserClaim, UserRole
from fornecedor_api.persistence.repo import commit_unit_of_work
from fornecedor_api.schemas.auth import UserResponse

logger = logging.getLogger(__name__)


class SignInResult(str, Enum):
    """Outcome of a credential check."""

    SUCCESS = "success"
    LOCKED_OUT = "locked_out"
    FAILED = "failed"


@dataclass
class IdentityResult:
    succeeded: bool
    errors: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: dict[str, str]) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors))


def _error(code: str, description: str) -> dict[str, str]:
    return {"code": code, "description": description}


def _duplicate_email(email: str) -> dict[str, str]:
    return _error("DuplicateEmail", f"O e-mail '{email}' já está em uso.")


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands timestamps back naive
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_email(email: str) -> str:
    return email.strip().lower()


def check_password_policy(password: str, required_length: int) -> list[dict[str, str]]:
    """Return every password policy violation, in a stable order."""
    errors = []
    if len(password) < required_length:
        errors.append(_error(
            "PasswordTooShort",
            f"A senha deve ter pelo menos {required_length} caracteres.",
        ))
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        errors.append(_error(
            "PasswordTooLong",
            f"A senha pode ter no máximo {BCRYPT_MAX_PASSWORD_BYTES} bytes.",
        ))
    if not any(ch.isdigit() for ch in password):
        errors.append(_error("PasswordRequiresDigit", "A senha deve ter pelo menos um dígito ('0'-'9')."))
    if not any(ch.islower() for ch in password):
        errors.append(_error("PasswordRequiresLower", "A senha deve ter pelo menos uma letra minúscula ('a'-'z')."))
    if not any(ch.isupper() for ch in password):
        errors.append(_error("PasswordRequiresUpper", "A senha deve ter pelo menos uma letra maiúscula ('A'-'Z')."))
    if all(ch.isalnum() for ch in password):
        errors.append(_error("PasswordRequiresNonAlphanumeric", "A senha deve ter pelo menos um caractere especial."))
    return errors


class IdentityService:
    """Account store operations used by /registro, /login and the CLI."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # =========================================================================
    # Users
    # =========================================================================

    def find_by_email(self, email: str) -> User | None:
        return (
            self.db.query(User)
            .filter(User.normalized_email == normalize_email(email))
            .first()
        )

    def create_user(self, email: str, password: str) -> IdentityResult:
        """
        Create an account with a confirmed e-mail.

        Returns a failed IdentityResult listing every reason when the e-mail
        is taken or the password breaks the policy.
        """
        errors = []
        if self.find_by_email(email) is not None:
            errors.append(_duplicate_email(email))
        errors.extend(check_password_policy(password, self.settings.PASSWORD_REQUIRED_LENGTH))
        if errors:
            return IdentityResult.failed(*errors)

        user = User(
            email=email.strip(),
            normalized_email=normalize_email(email),
            password_hash=get_password_hash(password),
            email_confirmed=True,
            lockout_enabled=True,
            access_failed_count=0,
        )
        self.db.add(user)
        try:
            commit_unit_of_work(self.db)
        except PersistenceFailedError:
            # A concurrent registration took the e-mail after the lookup above
            if self.find_by_email(email) is not None:
                return IdentityResult.failed(_duplicate_email(email))
            raise
        logger.info("User registered", extra={"user_id": str(user.id)})
        return IdentityResult.success()

    # =========================================================================
    # Sign in
    # =========================================================================

    def is_locked_out(self, user: User) -> bool:
        lockout_end = _as_utc(user.lockout_end)
        return bool(
            user.lockout_enabled
            and lockout_end is not None
            and lockout_end > datetime.now(timezone.utc)
        )

    def verify_credentials(self, email: str, password: str) -> SignInResult:
        """
        Check credentials, applying the lockout policy.

        Each wrong password counts as a failed attempt; reaching
        LOCKOUT_MAX_FAILED_ATTEMPTS locks the account for LOCKOUT_MINUTES.
        While locked, even the right password reports LOCKED_OUT.
        """
        user = self.find_by_email(email)
        if user is None:
            return SignInResult.FAILED

        if self.is_locked_out(user):
            logger.warning("Login attempt on locked account", extra={"user_id": str(user.id)})
            return SignInResult.LOCKED_OUT

        if verify_password(password, user.password_hash):
            if user.access_failed_count or user.lockout_end is not None:
                user.access_failed_count = 0
                user.lockout_end = None
                commit_unit_of_work(self.db)
            return SignInResult.SUCCESS

        if not user.lockout_enabled:
            return SignInResult.FAILED

        user.access_failed_count = (user.access_failed_count or 0) + 1
        result = SignInResult.FAILED
        if user.access_failed_count >= self.settings.LOCKOUT_MAX_FAILED_ATTEMPTS:
            user.lockout_end = datetime.now(timezone.utc) + timedelta(minutes=self.settings.LOCKOUT_MINUTES)
            user.access_failed_count = 0
            result = SignInResult.LOCKED_OUT
            logger.warning("Account locked out", extra={"user_id": str(user.id)})
        commit_unit_of_work(self.db)
        return result

    # =========================================================================
    # Claims and roles
    # =========================================================================

    def add_claim(self, email: str, claim_type: str, claim_value: str = "") -> IdentityResult:
        user = self.find_by_email(email)
        if user is None:
            return IdentityResult.failed(_error("UserNotFound", f"Usuário '{email}' não encontrado."))
        if any(c.claim_type == claim_type and c.claim_value == claim_value for c in user.claims):
            return IdentityResult.success()

        user.claims.append(UserClaim(claim_type=claim_type, claim_value=claim_value))
        commit_unit_of_work(self.db)
        logger.info("Claim granted", extra={"user_id": str(user.id), "claim_type": claim_type})
        return IdentityResult.success()

    def add_role(self, email: str, role: str) -> IdentityResult:
        user = self.find_by_email(email)
        if user is None:
            return IdentityResult.failed(_error("UserNotFound", f"Usuário '{email}' não encontrado."))
        if any(r.role == role for r in user.roles):
            return IdentityResult.success()

        user.roles.append(UserRole(role=role))
        commit_unit_of_work(self.db)
        logger.info("Role granted", extra={"user_id": str(user.id), "role": role})
        return IdentityResult.success()

    def issue_token(self, email: str) -> UserResponse:
        """Issue a signed token for an existing account."""
        user = self.find_by_email(email)
        if user is None:
            raise LookupError(f"User not found: {email}")
        return build_user_response(user, self.settings)
