# schemafs/routers/tools.py
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from schemafs.core.models import ToolCall
from schemafs.core.tools import ToolExecuter
from schemafs.deps import tool_executer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", summary="List the tools an agent may call")
def list_tools(tools: ToolExecuter = Depends(tool_executer)) -> Dict[str, Any]:
    described = tools.describe()
    logger.info("Tools listed: %d", len(described))
    return {"tools": described}


@router.post("/call", summary="Call a tool by name")
def call_tool(call: ToolCall, tools: ToolExecuter = Depends(tool_executer)) -> Dict[str, Any]:
    result = tools.call(call.name, call.arguments)
    return result.model_dump(by_alias=True, exclude_none=True)
