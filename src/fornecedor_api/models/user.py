"""
Identity models.

Users own their claims and roles. Claims are free-form (type, value)
pairs copied into issued tokens; authorization policies only check that a
claim type is present.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from fornecedor_api.core.database import Base
from fornecedor_api.models.base import BaseModelMixin


class User(Base, BaseModelMixin):
    __tablename__ = "users"

    email = Column(String(255), nullable=False)
    normalized_email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email_confirmed = Column(Boolean, nullable=False, default=True)
    lockout_enabled = Column(Boolean, nullable=False, default=True)
    access_failed_count = Column(Integer, nullable=False, default=0)
    lockout_end = Column(DateTime(timezone=True), nullable=True)

    claims = relationship("UserClaim", back_populates="user", cascade="all, delete-orphan", lazy="selectin")
    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", lazy="selectin")

    def __repr__(self):
        return f"<User {self.email}>"


class UserClaim(Base, BaseModelMixin):
    __tablename__ = "user_claims"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    claim_type = Column(String(255), nullable=False)
    claim_value = Column(String(1024), nullable=False, default="")

    user = relationship("User", back_populates="claims")

    __table_args__ = (
        UniqueConstraint("user_id", "claim_type", "claim_value", name="uq_user_claims_user_type_value"),
    )


class UserRole(Base, BaseModelMixin):
    __tablename__ = "user_roles"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(100), nullable=False)

    user = relationship("User", back_populates="roles")

    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
