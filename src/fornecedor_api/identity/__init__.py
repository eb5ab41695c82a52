from fornecedor_api.identity.service import IdentityResult, IdentityService, SignInResult
from fornecedor_api.identity.tokens import build_user_response

__all__ = ["IdentityResult", "IdentityService", "SignInResult", "build_user_response"]
