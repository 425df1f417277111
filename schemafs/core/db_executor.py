# schemafs/core/db_executor.py
from __future__ import annotations
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from schemafs.core.errors import ExecutionError

logger = logging.getLogger(__name__)


def _json_safe(v: Any) -> Any:
    """Coerce DB types into JSON-serializable values."""
    if isinstance(v, Decimal):
        return float(v)
    if isinstance(v, (date, datetime, time)):
        return v.isoformat()
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).hex()
    return v


class SqlExecutor:
    """Runs statements as given. Policy checks happen in QueryGateway."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def execute(self, sql: str) -> List[Dict[str, Any]]:
        logger.info("[SQL] Executing: %s", sql)
        try:
            with self.engine.begin() as conn:
                result = conn.exec_driver_sql(sql)
                if not result.returns_rows:
                    out = [{"affectedRows": result.rowcount}]
                else:
                    out = [{k: _json_safe(v) for k, v in dict(r).items()} for r in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error("SQL execution failed: %s", e)
            raise ExecutionError(str(getattr(e, "orig", None) or e)) from e
        logger.info("[SQL] Result: %d rows", len(out))
        return out
