"""Fornecedor (supplier) model."""

from sqlalchemy import Boolean, Column, String

from fornecedor_api.core.database import Base
from fornecedor_api.models.base import BaseModelMixin

NOME_MAX_LENGTH = 200
DOCUMENTO_MAX_LENGTH = 14


class Fornecedor(Base, BaseModelMixin):
    """Supplier identified by CPF (11 digits) or CNPJ (14 digits)."""

    __tablename__ = "fornecedores"

    nome = Column(String(NOME_MAX_LENGTH), nullable=False)
    documento = Column(String(DOCUMENTO_MAX_LENGTH), unique=True, nullable=False, index=True)
    ativo = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Fornecedor {self.documento} {self.nome}>"
