# schemafs/core/errors.py
from __future__ import annotations


class SchemaFSError(Exception):
    pass


class ConfigurationError(SchemaFSError):
    """A required setting (database target, credentials) is missing."""


class RejectedStatement(SchemaFSError):
    pass


class PathNotFound(SchemaFSError):
    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Path not found: {path}")


class TableNotFound(SchemaFSError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' not found")


class NotInitialized(SchemaFSError):
    def __init__(self, message: str = "Virtual file system not initialized"):
        super().__init__(message)


class OrganizationError(SchemaFSError):
    pass


class ClassificationError(SchemaFSError):
    pass


class CapabilityUnavailable(ClassificationError):
    """Raised by the language model variant used when no credential is configured."""


class ExecutionError(SchemaFSError):
    pass


class InvalidArguments(SchemaFSError):
    pass


class UnknownTool(SchemaFSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
