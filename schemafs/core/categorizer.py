# schemafs/core/categorizer.py
from __future__ import annotations
import logging
from typing import Dict, List

from schemafs.core.errors import ClassificationError
from schemafs.core.json_extract import extract_json
from schemafs.core.language_model import LanguageModel
from schemafs.core.models import Table
from schemafs.prompts.versioned.v1.categorizer import CATEGORIZER_PROMPT, CATEGORIZER_SYSTEM

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"


def schema_summary(tables: List[Table]) -> str:
    parts: List[str] = []
    for t in tables:
        cols = ", ".join(f"{c.name}:{c.data_type}" for c in t.columns)
        parts.append(f"Table: {t.name}\n  Columns: {cols}\n  Comment: {t.comment or '(none)'}")
    return "\n\n".join(parts)


class Categorizer:
    def __init__(self, model: LanguageModel):
        self.model = model

    def classify(self, tables: List[Table]) -> int:
        """
        Ask the model for {table, category, description} records and merge them
        onto `tables` in place by exact name. Returns how many tables were matched.
        Raises ClassificationError when the model is unavailable or unparsable.
        """
        prompt = CATEGORIZER_PROMPT.format(SCHEMA_SUMMARY=schema_summary(tables))
        response = self.model.complete(CATEGORIZER_SYSTEM, prompt)

        records = extract_json(response, list)
        if records is None:
            raise ClassificationError("Classifier response did not contain a JSON array")

        by_name: Dict[str, Table] = {t.name: t for t in tables}
        matched = 0
        for item in records:
            if not isinstance(item, dict) or not isinstance(item.get("table"), str):
                continue
            tbl = by_name.get(item["table"])
            if tbl is None:
                continue
            category = item.get("category")
            description = item.get("description")
            if isinstance(category, str) and category.strip():
                tbl.category = category.strip()
            if isinstance(description, str) and description.strip():
                tbl.description = description.strip()
            matched += 1
        return matched

    def categorize(self, tables: List[Table]) -> List[Table]:
        """Non-fatal wrapper: on any classification failure the input comes back unchanged."""
        if not self.model.available:
            logger.info("No classifier configured; all %d tables go to '%s'", len(tables), DEFAULT_CATEGORY)
            return tables
        try:
            logger.info("Using LLM to categorize %d tables...", len(tables))
            matched = self.classify(tables)
            logger.info("Categorized %d of %d tables", matched, len(tables))
        except ClassificationError as e:
            logger.warning("Table categorization failed, falling back to '%s': %s", DEFAULT_CATEGORY, e)
        return tables
