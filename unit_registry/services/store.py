# unit_registry/services/store.py
"""
Record store facade over SQLAlchemy.

One RecordStore per collection. Reads support fetch-by-id, full scan,
equality / null filters and one ordering with an optional limit. Writes are
create (id assigned here), field-level merge update and delete. Any
SQLAlchemyError is rolled back and re-raised as StoreAccessError; there is
no retry and no optimistic locking, the last writer wins.
"""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unit_registry.errors import RecordNotFound, StoreAccessError
from unit_registry.models import COLLECTIONS
from unit_registry.services.query import Constraint, Op
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)

# collection -> (plural label for messages, not-found message)
LABELS = {
    "vehicles": ("veículos", "Veículo não encontrado"),
    "assets": ("patrimônios", "Patrimônio não encontrado"),
    "events": ("ordens de serviço", "Ordem de serviço não encontrada"),
}


class RecordStore:
    def __init__(self, db: Session, collection: str):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        self.db = db
        self.collection = collection
        self.model = COLLECTIONS[collection]
        self.label, self.not_found_message = LABELS[collection]

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None:
            raise ValueError(f"{self.collection} has no field '{field}'")
        return column

    def _error(self, verb: str, exc: Exception) -> StoreAccessError:
        self.db.rollback()
        logger.error(f"[STORE] {verb} {self.collection} failed: {exc}")
        return StoreAccessError(f"Erro ao {verb} {self.label}")

    # ── Reads ────────────────────────────────────────────────────────────
    def get(self, record_id: str):
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as exc:
            raise self._error("buscar", exc) from exc

    def require(self, record_id: str):
        record = self.get(record_id)
        if record is None:
            raise RecordNotFound(self.not_found_message)
        return record

    def find(self, constraints: Iterable[Constraint] = (), limit: Optional[int] = None) -> List[Any]:
        q = self.db.query(self.model)
        ordering = None
        for c in constraints:
            column = self._column(c.field)
            if c.op == Op.EQ:
                q = q.filter(column == c.value)
            elif c.op == Op.IS_NULL:
                q = q.filter(column.is_(None))
            elif c.op == Op.NOT_NULL:
                q = q.filter(column.isnot(None))
            elif c.is_ordering:
                if ordering is not None:
                    raise ValueError("The store accepts a single ordering")
                ordering = column.desc() if c.op == Op.ORDER_DESC else column.asc()
            else:
                raise ValueError(f"{c.op} cannot be evaluated by the store")
        if ordering is not None:
            q = q.order_by(ordering)
        if limit:
            q = q.limit(limit)
        try:
            return q.all()
        except SQLAlchemyError as exc:
            raise self._error("buscar", exc) from exc

    # ── Writes ───────────────────────────────────────────────────────────
    def create(self, **fields):
        record = self.model(**fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._error("salvar", exc) from exc
        logger.info(f"[STORE] {self.collection}: created {record.id}")
        return record

    def update(self, record, fields: Dict[str, Any]):
        """Merge the given fields into the record in one commit."""
        for name, value in fields.items():
            self._column(name)
            setattr(record, name, value)
        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._error("salvar", exc) from exc
        logger.info(f"[STORE] {self.collection}: updated {record.id} ({', '.join(fields)})")
        return record

    def delete(self, record):
        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._error("excluir", exc) from exc
        logger.info(f"[STORE] {self.collection}: deleted {record.id}")
