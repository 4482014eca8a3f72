"""Lexical heuristics that pick a handling path for a message.

Every function here is pure: it looks at the message text and returns a
decision. None of them talks to a collaborator, so the heuristics can change
without touching the orchestration in :mod:`ai_assist.routing.router`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

DEFAULT_TICKET_TITLE = "User Request"

REFUSAL_SENTENCE = "I don't have enough information in the documents."

TICKET_TRIGGERS: Tuple[str, ...] = (
    "create ticket",
    "open a ticket",
    "raise a ticket",
    "file a ticket",
    "submit a ticket",
    "log a ticket",
)

SMALL_TALK_MAX_LENGTH = 20
SMALL_TALK_EXACT: Tuple[str, ...] = ("hi", "hello", "hey", "ok", "okay")
SMALL_TALK_PREFIXES: Tuple[str, ...] = ("thanks", "thank you")

DOCS_KEYWORDS: Tuple[str, ...] = (
    "in the docs",
    "from the docs",
    "documentation",
    "handbook",
    "policy",
    "procedure",
)
DEFAULT_DEPLOYMENT_DOC_TOKENS: Tuple[str, ...] = ("north_docs", "qdrant")

QUESTION_KEYWORDS: Tuple[str, ...] = (
    "how do i",
    "how to",
    "what is",
    "where is",
    "explain",
    "?",
)

LONG_MESSAGE_LENGTH = 60

DEFAULT_REFUSAL_PHRASES: Tuple[str, ...] = (
    REFUSAL_SENTENCE.lower().rstrip("."),
    "not enough information in the documents",
    "not in the context",
    "only the provided context",
)


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)


def looks_like_ticket_request(lower: str) -> bool:
    """Return ``True`` when the lower-cased message asks for a support ticket."""

    return _contains_any(lower, TICKET_TRIGGERS)


def extract_quoted_title(message: str) -> Optional[str]:
    """Return the stripped text between the first pair of double quotes.

    ``create ticket "VPN not working"`` yields ``"VPN not working"``. Returns
    ``None`` when the message has fewer than two quote characters.
    """

    first = message.find('"')
    if first < 0:
        return None
    second = message.find('"', first + 1)
    if second < 0:
        return None
    return message[first + 1 : second].strip()


def resolve_ticket_title(message: str) -> str:
    return extract_quoted_title(message) or DEFAULT_TICKET_TITLE


def is_small_talk(msg: str) -> bool:
    if len(msg) > SMALL_TALK_MAX_LENGTH:
        return False
    return msg in SMALL_TALK_EXACT or msg.startswith(SMALL_TALK_PREFIXES)


@dataclass(frozen=True)
class RoutingRules:
    """Keyword sets that tune retrieval eligibility and refusal detection."""

    deployment_doc_tokens: Tuple[str, ...] = DEFAULT_DEPLOYMENT_DOC_TOKENS
    refusal_phrases: Tuple[str, ...] = DEFAULT_REFUSAL_PHRASES

    @classmethod
    def from_settings(cls, settings) -> "RoutingRules":
        return cls(
            deployment_doc_tokens=tuple(t.lower() for t in settings.docs_keywords_extra),
            refusal_phrases=tuple(p.lower() for p in settings.refusal_phrases),
        )

    @property
    def docs_keywords(self) -> Tuple[str, ...]:
        return DOCS_KEYWORDS + self.deployment_doc_tokens

    def should_attempt_rag(self, lower: str) -> bool:
        """Decide whether a similarity search is worth paying for.

        Short social messages never reach the store. Explicit documentation
        requests, question-like phrasing and long messages do. The first
        matching rule decides.
        """

        msg = (lower or "").strip()
        if not msg:
            return False
        if is_small_talk(msg):
            return False
        if _contains_any(msg, self.docs_keywords):
            return True
        if _contains_any(msg, QUESTION_KEYWORDS):
            return True
        return len(msg) >= LONG_MESSAGE_LENGTH

    def is_refusal(self, answer: Optional[str]) -> bool:
        """Return ``True`` when a context-bound answer declined to answer."""

        if answer is None or not answer.strip():
            return True
        return _contains_any(answer.lower(), self.refusal_phrases)


DEFAULT_RULES = RoutingRules()


def should_attempt_rag(lower: str) -> bool:
    return DEFAULT_RULES.should_attempt_rag(lower)


def is_rag_refusal(answer: Optional[str]) -> bool:
    return DEFAULT_RULES.is_refusal(answer)
