# schemafs/core/tools.py
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from schemafs.core.errors import (
    CapabilityUnavailable, ClassificationError, ExecutionError, InvalidArguments, PathNotFound,
    RejectedStatement, TableNotFound, UnknownTool,
)
from schemafs.core.language_model import LanguageModel
from schemafs.core.navigator import describe_table, list_path
from schemafs.core.query_gateway import QueryGateway, is_select
from schemafs.core.sql_writer import SqlWriter
from schemafs.core.tree_service import TreeService
from schemafs.core.models import ToolResult

logger = logging.getLogger(__name__)

EXPLORE_FIRST = (
    " IMPORTANT: You MUST use the `schema_ls` tool to explore the database structure"
    " and find relevant tables BEFORE running any queries."
)


def _dumps(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _required_str(arguments: Dict[str, Any], key: str) -> str:
    v = arguments.get(key)
    if not isinstance(v, str) or not v.strip():
        raise InvalidArguments(f"Missing required argument '{key}'")
    return v


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ToolExecuter:
    """
    Dispatches {name, arguments} tool calls.

    Collaborators are passed as zero-argument providers so a tool only
    touches the database or model it actually needs.
    """

    def __init__(
        self,
        trees: Callable[[], TreeService],
        gateway: Callable[[], QueryGateway],
        writer: Callable[[], SqlWriter],
        model: Callable[[], LanguageModel],
        allow_writes: bool = False,
    ):
        self._trees = trees
        self._gateway = gateway
        self._writer = writer
        self._model = model
        self.allow_writes = allow_writes
        self._handlers: Dict[str, Callable[[Dict[str, Any]], ToolResult]] = {
            "schema_ls": self.schema_ls,
            "get_table_schema": self.get_table_schema,
            "query_database": self.query_database,
            "get_current_time": self.get_current_time,
            "ask_database": self.ask_database,
        }

    # === catalogue of tools ===
    def describe(self) -> List[Dict[str, Any]]:
        query_desc = (
            "Execute a SQL query against the database."
            if self.allow_writes
            else "Execute a read-only SQL query (SELECT only) against the database."
        )
        tools: List[Dict[str, Any]] = [
            {
                "name": "query_database",
                "description": query_desc + EXPLORE_FIRST,
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "sql": {
                            "type": "string",
                            "description": "The SQL statement to execute" if self.allow_writes
                            else "The SQL SELECT statement to execute",
                        },
                    },
                    "required": ["sql"],
                },
            },
            {
                "name": "schema_ls",
                "description": (
                    "List the contents of the virtual file system for the database schema. "
                    "This is the entry point for database exploration. Use this tool first to "
                    "understand the data structure."
                ),
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": 'The path to list (e.g., "/" or "/Billing"). Defaults to root.',
                        },
                    },
                },
            },
            {
                "name": "get_table_schema",
                "description": "Get the schema (columns and types) of a specific table.",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "tableName": {"type": "string", "description": "The name of the table to inspect."},
                    },
                    "required": ["tableName"],
                },
            },
            {
                "name": "get_current_time",
                "description": (
                    "Get the current system time. Always use this tool first when the query involves "
                    'relative time (e.g., "today", "last month") to ensure accurate SQL generation.'
                ),
                "inputSchema": {"type": "object", "properties": {}},
            },
        ]
        if self._model().available:
            tools.append({
                "name": "ask_database",
                "description": (
                    "Ask a natural language question about the data. "
                    "The system will generate a SELECT statement and return its results."
                ),
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "question": {"type": "string", "description": "The natural language question."},
                    },
                    "required": ["question"],
                },
            })
        return tools

    # === dispatch ===
    def call(self, name: str, arguments: Dict[str, Any] | None = None) -> ToolResult:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownTool(name)
        logger.info("Tool call: %s %s", name, arguments or {})
        return handler(arguments or {})

    # === tools ===
    def schema_ls(self, arguments: Dict[str, Any]) -> ToolResult:
        path = arguments.get("path") or "/"
        if not isinstance(path, str):
            raise InvalidArguments("'path' must be a string")
        try:
            listing = list_path(self._trees().get_or_build(), path)
        except (PathNotFound, ExecutionError) as e:
            logger.error("Schema ls failed: %s", e)
            return ToolResult.error(f"Error: {e}")
        return ToolResult.text(_dumps(listing))

    def get_table_schema(self, arguments: Dict[str, Any]) -> ToolResult:
        table_name = _required_str(arguments, "tableName")
        try:
            columns = describe_table(self._trees().get_or_build(), table_name)
        except (TableNotFound, ExecutionError) as e:
            logger.error("Get table schema failed: %s", e)
            return ToolResult.error(f"Error: {e}")
        return ToolResult.text(_dumps(columns))

    def query_database(self, arguments: Dict[str, Any]) -> ToolResult:
        sql = _required_str(arguments, "sql")
        try:
            rows = self._gateway().execute(sql, self.allow_writes)
        except ExecutionError as e:
            return ToolResult.error(f"Error executing SQL: {e}")
        logger.info("query_database completed: %d rows", len(rows))
        return ToolResult.text(_dumps(rows))

    def get_current_time(self, arguments: Dict[str, Any]) -> ToolResult:
        return ToolResult.text(now_iso())

    def ask_database(self, arguments: Dict[str, Any]) -> ToolResult:
        question = _required_str(arguments, "question")
        if not self._model().available:
            raise CapabilityUnavailable("Natural language queries need GEMINI_API_KEY to be configured")
        gateway = self._gateway()
        try:
            sql = self._writer().write(self._trees().get_or_build(), question)
            logger.info("Generated SQL from natural language: %s", sql)
            if not is_select(sql, gateway.dialect):
                logger.error("LLM generated non-SELECT SQL: %s", sql)
                return ToolResult.error(f"LLM generated non-SELECT SQL: {sql}")
            rows = gateway.execute(sql, allow_writes=False)
        except (ClassificationError, ExecutionError, RejectedStatement) as e:
            logger.error("Natural language processing failed: %s", e)
            return ToolResult.error(f"Error processing request: {e}")
        return ToolResult.text(f"Generated SQL: {sql}\n\nResults:\n{_dumps(rows)}")
