"""
Persistence gateway for fornecedores.

Mutating methods only stage work on the session; commit() flushes the unit
of work and reports how many objects it touched, so callers can tell an
effective write from a no-op.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fornecedor_api.core.exceptions import PersistenceFailedError
from fornecedor_api.models.fornecedor import Fornecedor

logger = logging.getLogger(__name__)


def commit_unit_of_work(db: Session) -> int:
    """
    Commit pending work and return the number of affected objects.

    Counts new, deleted and actually modified objects before committing.
    Rolls back and raises PersistenceFailedError if the database rejects it.
    """
    affected = (
        len(db.new)
        + len(db.deleted)
        + sum(1 for obj in db.dirty if db.is_modified(obj))
    )
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(
            "Commit failed",
            extra={"error_type": type(e).__name__, "pending": affected},
        )
        raise PersistenceFailedError() from e
    return affected


class FornecedorRepository:
    """Repository for the fornecedores table."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> list[Fornecedor]:
        """Get all fornecedores ordered by name."""
        return self.db.query(Fornecedor).order_by(Fornecedor.nome, Fornecedor.id).all()

    def get_by_id(self, fornecedor_id: UUID) -> Fornecedor | None:
        """Get fornecedor by id. Returns None when absent."""
        return self.db.get(Fornecedor, fornecedor_id)

    def add(self, fornecedor: Fornecedor) -> Fornecedor:
        self.db.add(fornecedor)
        return fornecedor

    def update(self, fornecedor: Fornecedor, nome: str, documento: str, ativo: bool) -> Fornecedor:
        """Full replace of the mutable fields. The id never changes."""
        fornecedor.nome = nome
        fornecedor.documento = documento
        fornecedor.ativo = ativo
        # A replace always counts as a write, even when nothing differs
        fornecedor.updated_at = datetime.utcnow()
        return fornecedor

    def remove(self, fornecedor: Fornecedor) -> None:
        self.db.delete(fornecedor)

    def commit(self) -> int:
        return commit_unit_of_work(self.db)
