from fornecedor_api.api.auth import auth_router
from fornecedor_api.api.fornecedor import fornecedor_router

__all__ = ["auth_router", "fornecedor_router"]
