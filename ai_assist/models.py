"""Core domain models for the AI Assist router."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Route(str, Enum):
    """Handling path chosen for a single request."""

    TOOL = "tool"
    RAG = "rag"
    CHAT = "chat"


@dataclass
class RetrievedPassage:
    """A ranked passage returned by the similarity store."""

    text: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    score: float = 0.0

    @property
    def source(self) -> str:
        """Return the ``source`` metadata value, ``"unknown"`` when absent."""

        value = self.metadata.get("source", "unknown")
        return "" if value is None else str(value)


@dataclass(frozen=True)
class RagAnswered:
    """Retrieval produced a usable, grounded answer."""

    text: str
    citations: List[str]


@dataclass(frozen=True)
class RagUnavailable:
    """Retrieval could not answer; ``reason`` is one of the class constants."""

    reason: str

    NO_RESULTS = "no_results"
    THIN_CONTEXT = "thin_context"
    REFUSAL = "refusal"


RagOutcome = Union[RagAnswered, RagUnavailable]


@dataclass
class AssistResponse:
    route: Route
    answer: str
    citations: List[str] = field(default_factory=list)
    ticket_id: Optional[str] = None
    ticket_title: Optional[str] = None

    @classmethod
    def chat(cls, answer: str) -> "AssistResponse":
        return cls(route=Route.CHAT, answer=answer or "")

    @classmethod
    def rag(cls, outcome: RagAnswered) -> "AssistResponse":
        return cls(route=Route.RAG, answer=outcome.text, citations=list(outcome.citations))

    @classmethod
    def tool(cls, ticket_id: str, title: str) -> "AssistResponse":
        answer = f"Created ticket: {ticket_id}\nTitle: {title}"
        return cls(route=Route.TOOL, answer=answer, ticket_id=ticket_id, ticket_title=title)
