# schemafs/core/query_gateway.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Protocol

import sqlglot
from sqlglot.errors import SqlglotError
from sqlglot.tokens import TokenType

from schemafs.core.errors import RejectedStatement

logger = logging.getLogger(__name__)


class Executor(Protocol):
    def execute(self, sql: str) -> List[Dict[str, Any]]:
        ...


def is_select(sql: str, dialect: str = "mysql") -> bool:
    """
    True when the first keyword of `sql` is SELECT. Comments and whitespace are
    skipped by the tokenizer; nothing past the first token is inspected.
    """
    try:
        tokens = sqlglot.tokenize(sql, read=dialect)
    except SqlglotError:
        return False
    return bool(tokens) and tokens[0].token_type == TokenType.SELECT


class QueryGateway:
    def __init__(self, executor: Executor, allow_writes: bool = False, dialect: str = "mysql"):
        self.executor = executor
        self.allow_writes = allow_writes
        self.dialect = dialect

    def check(self, sql: str, allow_writes: bool | None = None) -> None:
        writes = self.allow_writes if allow_writes is None else allow_writes
        if not writes and not is_select(sql, self.dialect):
            logger.warning("Non-SELECT query rejected: %s", sql)
            raise RejectedStatement("Only SELECT queries are allowed in read-only mode.")

    def execute(self, sql: str, allow_writes: bool | None = None) -> List[Dict[str, Any]]:
        """Raises RejectedStatement before execution, ExecutionError from it."""
        self.check(sql, allow_writes)
        return self.executor.execute(sql)
