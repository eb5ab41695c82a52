from .fornecedor import Fornecedor
from .user import User, UserClaim, UserRole

__all__ = ["Fornecedor", "User", "UserClaim", "UserRole"]
