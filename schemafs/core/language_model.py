from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from schemafs.core.errors import CapabilityUnavailable


@runtime_checkable
class LanguageModel(Protocol):
    """What categorization, organization and ask_database need from an LLM."""

    available: bool

    def complete(self, system: str, prompt: str) -> str:
        ...


@dataclass
class UnavailableModel:
    """Stand-in used when no model credential is configured."""

    reason: str = "GEMINI_API_KEY is not set"
    available: bool = False

    def complete(self, system: str, prompt: str) -> str:
        raise CapabilityUnavailable(self.reason)
