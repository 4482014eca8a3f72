"""Build the router and its collaborators from :class:`Settings`."""

from __future__ import annotations

from typing import Optional

from .chat.llm import OpenAIChatModel, OpenAIEmbedder
from .config import Settings
from .routing.router import AssistRouter
from .routing.rules import RoutingRules
from .storage.vector_store import VectorStore
from .telemetry import ObservationRegistry
from .tools.tickets import build_ticket_tool


def build_store(settings: Settings) -> VectorStore:
    embedder = OpenAIEmbedder(
        model=settings.embedding_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
    return VectorStore(settings.store_dir, embedder=embedder)


def build_router(
    settings: Settings,
    *,
    store: Optional[VectorStore] = None,
    telemetry: Optional[ObservationRegistry] = None,
) -> AssistRouter:
    chat_model = OpenAIChatModel(
        model=settings.chat_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
    return AssistRouter(
        chat_model,
        store or build_store(settings),
        build_ticket_tool(settings),
        rules=RoutingRules.from_settings(settings),
        telemetry=telemetry,
        provider_label=settings.provider_label,
        vectorstore_label=settings.vectorstore_label,
    )
