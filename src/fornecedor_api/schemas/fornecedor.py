"""
Fornecedor schemas.

Request bodies are validated by these models before any persistence
attempt; output uses FornecedorOut.
"""

import re
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from fornecedor_api.models.fornecedor import NOME_MAX_LENGTH

NOME_MIN_LENGTH = 2

# CPF has 11 digits, CNPJ has 14; ASCII digits only, no punctuation
DOCUMENTO_PATTERN = re.compile(r"[0-9]{11}|[0-9]{14}")


class FornecedorBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    nome: str = Field(
        ...,
        min_length=NOME_MIN_LENGTH,
        max_length=NOME_MAX_LENGTH,
        description="Supplier name",
    )
    documento: str = Field(..., description="CPF (11 digits) or CNPJ (14 digits)")
    ativo: bool = Field(True, description="Whether the supplier is active")

    @field_validator("nome")
    @classmethod
    def nome_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("nome_blank", "O campo Nome é obrigatório")
        return value

    @field_validator("documento")
    @classmethod
    def documento_format(cls, value: str) -> str:
        if not DOCUMENTO_PATTERN.fullmatch(value):
            raise PydanticCustomError(
                "documento_format",
                "O campo Documento precisa ter 11 (CPF) ou 14 (CNPJ) dígitos numéricos",
            )
        return value


class FornecedorCreate(FornecedorBase):
    """Body of POST /fornecedor. The id is always generated server-side."""


class FornecedorUpdate(FornecedorBase):
    """
    Body of PUT /fornecedor/{id}.

    A body id, when sent, must match the route id passed in the validation
    context as `route_id`.
    """

    id: UUID | None = None

    @field_validator("id")
    @classmethod
    def id_matches_route(cls, value: UUID | None, info: ValidationInfo) -> UUID | None:
        route_id = (info.context or {}).get("route_id")
        if value is not None and route_id is not None and value != route_id:
            raise PydanticCustomError("id_mismatch", "O id do corpo difere do id da rota")
        return value


class FornecedorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nome: str
    documento: str
    ativo: bool
