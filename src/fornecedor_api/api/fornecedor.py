"""
Fornecedor endpoints.

Each handler is one pass: authorization (dependency), existence check,
validation, one repository operation, one commit, status mapping. Bodies
are taken raw so the existence check runs before validation.
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.orm import Session

from fornecedor_api.core.database import get_db
from fornecedor_api.core.exceptions import NotFoundError, PersistenceNoOpError
from fornecedor_api.models.fornecedor import Fornecedor
from fornecedor_api.persistence.repo import FornecedorRepository
from fornecedor_api.schemas.fornecedor import FornecedorCreate, FornecedorOut, FornecedorUpdate
from fornecedor_api.validation import validate_or_raise
from fornecedor_api.web.deps import UserClaims, require_policy, require_user
from fornecedor_api.web.policies import EXCLUIR_FORNECEDOR

logger = logging.getLogger(__name__)

fornecedor_router = APIRouter(prefix="/fornecedor", tags=["Fornecedor"])

NOT_FOUND_MESSAGE = "Fornecedor não encontrado"

VALIDATION_PROBLEM = {400: {"description": "Validation problem or nothing persisted"}}
NOT_FOUND = {404: {"description": "Fornecedor not found"}}
UNAUTHORIZED = {401: {"description": "Missing or invalid bearer token"}}


def get_repository(db: Session = Depends(get_db)) -> FornecedorRepository:
    return FornecedorRepository(db)


def _get_or_404(repo: FornecedorRepository, fornecedor_id: UUID) -> Fornecedor:
    fornecedor = repo.get_by_id(fornecedor_id)
    if fornecedor is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return fornecedor


def _commit_or_fail(repo: FornecedorRepository) -> int:
    affected = repo.commit()
    if affected <= 0:
        raise PersistenceNoOpError()
    return affected


@fornecedor_router.get(
    "",
    name="GetFornecedor",
    response_model=list[FornecedorOut],
)
def get_fornecedores(repo: FornecedorRepository = Depends(get_repository)):
    """List every fornecedor."""
    return repo.list()


@fornecedor_router.get(
    "/{fornecedor_id}",
    name="GetFornecedorPorId",
    response_model=FornecedorOut,
    responses=NOT_FOUND,
)
def get_fornecedor_por_id(
    fornecedor_id: UUID,
    repo: FornecedorRepository = Depends(get_repository),
):
    """Get one fornecedor by id."""
    return _get_or_404(repo, fornecedor_id)


@fornecedor_router.post(
    "",
    name="PostFornecedor",
    status_code=201,
    response_model=FornecedorOut,
    responses={**VALIDATION_PROBLEM, **UNAUTHORIZED},
)
def post_fornecedor(
    request: Request,
    response: Response,
    payload: Any = Body(...),
    user: UserClaims = Depends(require_user),
    repo: FornecedorRepository = Depends(get_repository),
):
    """Create a fornecedor. Location points at GET /fornecedor/{id}."""
    data = validate_or_raise(FornecedorCreate, payload)

    fornecedor = repo.add(Fornecedor(nome=data.nome, documento=data.documento, ativo=data.ativo))
    _commit_or_fail(repo)

    logger.info(
        "Fornecedor created",
        extra={"fornecedor_id": str(fornecedor.id), "user_id": str(user.id)},
    )
    response.headers["Location"] = str(
        request.app.url_path_for("GetFornecedorPorId", fornecedor_id=str(fornecedor.id))
    )
    return fornecedor


@fornecedor_router.put(
    "/{fornecedor_id}",
    name="PutFornecedor",
    status_code=204,
    response_class=Response,
    responses={**VALIDATION_PROBLEM, **NOT_FOUND, **UNAUTHORIZED},
)
def put_fornecedor(
    fornecedor_id: UUID,
    payload: Any = Body(...),
    user: UserClaims = Depends(require_user),
    repo: FornecedorRepository = Depends(get_repository),
):
    """Full replace of a fornecedor. The id in the path wins and never changes."""
    fornecedor = _get_or_404(repo, fornecedor_id)

    data = validate_or_raise(FornecedorUpdate, payload, context={"route_id": fornecedor_id})

    repo.update(fornecedor, nome=data.nome, documento=data.documento, ativo=data.ativo)
    _commit_or_fail(repo)

    logger.info(
        "Fornecedor updated",
        extra={"fornecedor_id": str(fornecedor_id), "user_id": str(user.id)},
    )
    return Response(status_code=204)


@fornecedor_router.delete(
    "/{fornecedor_id}",
    name="DeleteFornecedor",
    status_code=204,
    response_class=Response,
    responses={
        **NOT_FOUND,
        **UNAUTHORIZED,
        400: {"description": "Nothing persisted"},
        403: {"description": f"Missing {EXCLUIR_FORNECEDOR} claim"},
    },
)
def delete_fornecedor(
    fornecedor_id: UUID,
    user: UserClaims = Depends(require_policy(EXCLUIR_FORNECEDOR)),
    repo: FornecedorRepository = Depends(get_repository),
):
    """Delete a fornecedor. Requires the ExcluirFornecedor claim."""
    fornecedor = _get_or_404(repo, fornecedor_id)

    repo.remove(fornecedor)
    _commit_or_fail(repo)

    logger.info(
        "Fornecedor removed",
        extra={"fornecedor_id": str(fornecedor_id), "user_id": str(user.id)},
    )
    return Response(status_code=204)
