from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    data_type: str
    # "primary" | "unique" | "index" | "none"
    key: str = "none"


class ForeignKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    column: str
    referenced_table: str
    referenced_column: str


class Table(BaseModel):
    name: str
    comment: str = ""
    columns: List[Column] = Field(default_factory=list)
    category: Optional[str] = None
    description: Optional[str] = None


class FileNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["file"] = "file"
    name: str
    path: str = ""
    table_name: str = Field(alias="tableName")
    description: Optional[str] = None


class DirectoryNode(BaseModel):
    type: Literal["directory"] = "directory"
    name: str
    path: str = ""
    children: List["PathNode"] = Field(default_factory=list)


PathNode = Annotated[Union[DirectoryNode, FileNode], Field(discriminator="type")]
DirectoryNode.model_rebuild()


class VirtualTree(BaseModel):
    database: str
    categories: Dict[str, List[Table]] = Field(default_factory=dict)
    tables: Dict[str, Table] = Field(default_factory=dict)
    root: Optional[DirectoryNode] = None

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class CatalogSnapshot(BaseModel):
    # schema name as reported by the catalog (may differ in case from the requested one)
    database: Optional[str] = None
    tables: List[Table] = Field(default_factory=list)
    foreign_keys: List[ForeignKey] = Field(default_factory=list)


# --- tool surface ---

class ToolCall(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent] = Field(default_factory=list)
    is_error: Optional[bool] = Field(default=None, alias="isError")

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=True)
