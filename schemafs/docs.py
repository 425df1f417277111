# schemafs/docs.py
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from typing import Any, Dict, List

from schemafs.settings import Settings

TAGS_METADATA: List[Dict[str, Any]] = [
    {
        "name": "health",
        "description": "Liveness & readiness checks.",
    },
    {
        "name": "tools",
        "description": (
            "Tool-call surface for agents: browse the schema tree (`schema_ls`), inspect a table "
            "(`get_table_schema`), run SQL (`query_database`, read-only unless configured otherwise)."
        ),
    },
    {
        "name": "resources",
        "description": "The full virtual schema tree as JSON, and an explicit refresh.",
    },
]


def create_app(settings: Settings, **kwargs: Any) -> FastAPI:
    """
    Central place for Swagger/OpenAPI metadata and docs URLs.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Browsable, semantically organized view of a relational database catalog for "
            "LLM agents. Tables are grouped by **Gemini** into a virtual directory tree, "
            "cached on disk, and queried through a **read-only by default** SQL gateway."
        ),
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        **kwargs,
    )

    app.openapi_tags = TAGS_METADATA

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
            tags=TAGS_METADATA,
        )
        schema["servers"] = [
            {"url": f"http://127.0.0.1:{settings.PORT}", "description": "Local dev"},
        ]
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi
    return app
