# schemafs/core/sql_writer.py
from __future__ import annotations
import re
from typing import List

from schemafs.core.language_model import LanguageModel
from schemafs.core.models import VirtualTree
from schemafs.prompts.versioned.v1.sql_writer import SQL_WRITER_PROMPT, SQL_WRITER_SYSTEM

MAX_TABLES = 50
MAX_COLUMNS = 20

FENCE = re.compile(r"^```(?:sql)?\s*|\s*```$", re.I)


def tree_schema_text(tree: VirtualTree) -> str:
    parts: List[str] = []
    for name, table in list(tree.tables.items())[:MAX_TABLES]:
        cols = ", ".join(f"{c.name}:{c.data_type}" for c in table.columns[:MAX_COLUMNS])
        parts.append(f"{name}({cols}) - {table.description or table.comment or ''}")
    return "\n".join(parts)


class SqlWriter:
    """Turns a natural-language question into one SELECT statement."""

    def __init__(self, model: LanguageModel, dialect: str = "mysql"):
        self.model = model
        self.dialect = dialect

    def write(self, tree: VirtualTree, question: str) -> str:
        system = SQL_WRITER_SYSTEM.format(DIALECT=self.dialect, SCHEMA=tree_schema_text(tree))
        completion = self.model.complete(system, SQL_WRITER_PROMPT.format(QUESTION=question))
        sql = FENCE.sub("", completion.strip()).strip()
        return sql.rstrip(";").strip()
