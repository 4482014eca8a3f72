"""Retrieval-augmented answering with refusal detection."""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence

from ..models import RagAnswered, RagOutcome, RagUnavailable, RetrievedPassage
from ..routing.rules import DEFAULT_RULES, REFUSAL_SENTENCE, RoutingRules
from ..telemetry import ObservationRegistry
from ..utils.logging import get_logger
from .llm import CompletionProvider

logger = get_logger(__name__)

RETRIEVAL_TOP_K = 5
MIN_CONTEXT_CHARS = 40

RAG_SYSTEM_PROMPT = (
    "You answer using ONLY the provided context.\n"
    f'If the answer isn\'t in the context, say: "{REFUSAL_SENTENCE}"\n'
)


class Retriever(Protocol):
    def search(self, query: str, top_k: int = RETRIEVAL_TOP_K) -> Sequence[RetrievedPassage]:  # pragma: no cover - interface
        ...


def build_context(passages: Iterable[RetrievedPassage]) -> str:
    return "\n".join(f"- {passage.text or ''}" for passage in passages)


def build_user_content(context: str, question: str) -> str:
    return f"CONTEXT:\n{context}\n\nQUESTION:\n{question}\n"


def extract_citations(passages: Iterable[RetrievedPassage]) -> List[str]:
    """Distinct, non-blank ``source`` values in order of first appearance."""

    citations: List[str] = []
    seen = set()
    for passage in passages:
        source = passage.source
        if not source.strip() or source in seen:
            continue
        seen.add(source)
        citations.append(source)
    return citations


class RagEngine:
    """Glue together retrieval and context-bound generation.

    :meth:`answer` never falls back on its own. It reports
    :class:`RagUnavailable` when there is nothing to answer from or when the
    model refused, and leaves the fallback decision to the router.
    """

    def __init__(
        self,
        retriever: Retriever,
        completion: CompletionProvider,
        *,
        rules: RoutingRules = DEFAULT_RULES,
        telemetry: Optional[ObservationRegistry] = None,
        provider_label: str = "openai",
        vectorstore_label: str = "numpy",
    ) -> None:
        self.rules = rules
        self.telemetry = telemetry or ObservationRegistry()
        self._search = self.telemetry.observed(
            "rag.retrieve", vectorstore=vectorstore_label, topK=RETRIEVAL_TOP_K
        )(retriever.search)
        self._complete = self.telemetry.observed(
            "llm.call", provider=provider_label, mode="rag"
        )(completion.complete)

    def ask(self, question: str) -> RagAnswered:
        """Context-bound completion returned as is, with no gates or refusal check."""

        passages = list(self._search(question, RETRIEVAL_TOP_K) or [])
        answer = self._complete(RAG_SYSTEM_PROMPT, build_user_content(build_context(passages), question))
        return RagAnswered(text=answer or "", citations=extract_citations(passages))

    def answer(self, question: str) -> RagOutcome:
        passages = list(self._search(question, RETRIEVAL_TOP_K) or [])
        if not passages:
            logger.debug("Retrieval returned no passages")
            return RagUnavailable(RagUnavailable.NO_RESULTS)

        context = build_context(passages)
        if len(context.strip()) < MIN_CONTEXT_CHARS:
            logger.debug("Context too thin", extra={"passages": len(passages)})
            return RagUnavailable(RagUnavailable.THIN_CONTEXT)

        answer = self._complete(RAG_SYSTEM_PROMPT, build_user_content(context, question))
        citations = extract_citations(passages)

        if self.rules.is_refusal(answer):
            logger.debug("Context-bound answer was a refusal")
            return RagUnavailable(RagUnavailable.REFUSAL)
        return RagAnswered(text=answer, citations=citations)
