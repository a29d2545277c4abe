# backend/utils/gateway.py
from contextlib import contextmanager
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.errors import TransactionError

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class Gateway:
    """Row-oriented access to the single database session.

    Outside an atomic block every write is committed as soon as it succeeds.
    Inside ``atomic()`` writes accumulate until the block exits; any error
    rolls all of them back. Work already pending in the session when the block
    starts belongs to the block too.
    """

    def __init__(self, db: Session):
        self.db = db
        self._in_transaction = False

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def query_rows(self, sql: str, params: Dict[str, Any] = None) -> List[List[Optional[str]]]:
        result = self.db.execute(text(sql), params or {})
        return [[_as_str(v) for v in row] for row in result]

    def execute_write(self, sql: str, params: Dict[str, Any] = None) -> int:
        try:
            result = self.db.execute(text(sql), params or {})
        except SQLAlchemyError:
            if not self._in_transaction:
                self.db.rollback()
            raise
        if not self._in_transaction:
            self.db.commit()
        return result.rowcount

    def begin(self):
        # Nothing is committed here; open work commits or rolls back with the block
        self._in_transaction = True

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    @contextmanager
    def atomic(self):
        self.begin()
        try:
            yield self.db
            self.db.flush()
            self.commit()
        except SQLAlchemyError as e:
            self.rollback()
            logger.warning("Transaction rolled back: %s", e)
            raise TransactionError(str(getattr(e, "orig", None) or e)) from e
        except Exception:
            self.rollback()
            raise
        finally:
            self._in_transaction = False
