"""Runtime settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .routing.rules import DEFAULT_DEPLOYMENT_DOC_TOKENS, DEFAULT_REFUSAL_PHRASES


class Settings(BaseSettings):
    """Application settings, prefixed with ``ASSIST_`` in the environment."""

    model_config = SettingsConfigDict(
        env_prefix="ASSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="ai-assist", description="Service name used in logs")
    log_level: str = Field(default="INFO", description="Root logging level")
    log_json: bool = Field(default=True, description="Emit JSON log lines")

    # Completion provider
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ASSIST_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="API key for the OpenAI-compatible endpoint",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Alternate OpenAI-compatible endpoint, e.g. a local Ollama server",
    )
    chat_model: str = Field(default="gpt-4o-mini")
    embedding_model: str = Field(default="text-embedding-3-large")
    provider_label: str = Field(default="openai", description="Telemetry label for the provider")

    # Retrieval
    store_dir: str = Field(default="data/store", description="Vector store directory")
    vectorstore_label: str = Field(default="numpy", description="Telemetry label for the store")

    # Ticket tool
    ticket_dir: str = Field(default="data/tickets", description="Ledger directory for local tickets")
    ticket_api_url: Optional[str] = Field(
        default=None,
        description="Remote ticket service endpoint; local ledger when unset",
    )
    ticket_api_timeout: float = Field(default=10.0, gt=0, le=120)

    # Routing heuristics
    refusal_phrases: List[str] = Field(default_factory=lambda: list(DEFAULT_REFUSAL_PHRASES))
    docs_keywords_extra: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DEPLOYMENT_DOC_TOKENS),
        description="Deployment-specific tokens that signal a documentation lookup",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
