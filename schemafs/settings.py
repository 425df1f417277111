# schemafs/settings.py
from __future__ import annotations
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Database ---
    DB_URL: Optional[str] = Field(default=None, validation_alias=AliasChoices("DB_URL", "DATABASE_URL"))
    # schema/database to introspect; defaults to the URL database on MySQL, else the connection default schema
    DB_DATABASE: Optional[str] = None
    SQL_DIALECT: str = "mysql"
    ALLOW_NON_SELECT_QUERIES: bool = Field(default=False, validation_alias=AliasChoices("ALLOW_NON_SELECT_QUERIES", "ALLOW_WRITES"))

    # --- Gemini (categorization / organization) ---
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-pro"
    GEMINI_FALLBACK_MODEL: str = "gemini-1.5-flash"

    # --- Schema tree cache ---
    SCHEMA_CACHE_FILE: str = "schema-cache.json"
    SCHEMA_BUILD_ON_STARTUP: bool = True

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    APP_NAME: str = "schemafs"
    APP_VERSION: str = "0.1.0"
