"""Per-request routing between the ticket tool, retrieval and plain chat."""

from __future__ import annotations

from typing import Optional

from ..chat.engine import RagEngine, Retriever
from ..chat.llm import CompletionProvider
from ..models import AssistResponse, RagAnswered, Route
from ..telemetry import ObservationRegistry
from ..tools.tickets import TicketTool
from ..utils.logging import get_logger
from .rules import DEFAULT_RULES, RoutingRules, looks_like_ticket_request, resolve_ticket_title

logger = get_logger(__name__)

CHAT_SYSTEM_PROMPT = "You are a helpful assistant. Keep answers concise."


def normalize_message(message: Optional[str]) -> str:
    return (message or "").strip()


class AssistRouter:
    """Pick one handling path per message and run it to completion.

    The tool path is terminal and never falls back. The retrieval path falls
    back to plain chat only when :class:`RagEngine` reports the outcome as
    unavailable. Collaborator errors propagate unchanged.
    """

    def __init__(
        self,
        completion: CompletionProvider,
        retriever: Retriever,
        tickets: TicketTool,
        *,
        rules: RoutingRules = DEFAULT_RULES,
        telemetry: Optional[ObservationRegistry] = None,
        provider_label: str = "openai",
        vectorstore_label: str = "numpy",
    ) -> None:
        self.rules = rules
        self.telemetry = telemetry or ObservationRegistry()
        self.vectorstore_label = vectorstore_label
        self.engine = RagEngine(
            retriever,
            completion,
            rules=rules,
            telemetry=self.telemetry,
            provider_label=provider_label,
            vectorstore_label=vectorstore_label,
        )
        observed = self.telemetry.observed
        self._chat = observed("llm.call", provider=provider_label, mode="chat")(completion.complete)
        self._chat_fallback = observed("llm.call", provider=provider_label, mode="chat_fallback")(
            completion.complete
        )
        self._create_ticket = observed("tool.call.ticket.create", tool="TicketTool")(tickets.create_ticket)

    # ------------------------------------------------------------------
    def assist(self, message: Optional[str]) -> AssistResponse:
        msg = normalize_message(message)
        lower = msg.lower()

        if looks_like_ticket_request(lower):
            with self.telemetry.observe("router.tool.ticket", tool="TicketTool"):
                return self.handle_ticket(msg)

        if not self.rules.should_attempt_rag(lower):
            logger.info("Routing to chat", extra={"route": Route.CHAT.value, "reason": "rag_ineligible"})
            return AssistResponse.chat(self._chat(CHAT_SYSTEM_PROMPT, msg))

        with self.telemetry.observe("rag.flow", vectorstore=self.vectorstore_label):
            outcome = self.engine.answer(msg)

        if isinstance(outcome, RagAnswered):
            logger.info("Answered from documents", extra={"route": Route.RAG.value})
            return AssistResponse.rag(outcome)

        logger.info("Falling back to chat", extra={"route": Route.CHAT.value, "reason": outcome.reason})
        return AssistResponse.chat(self._chat_fallback(CHAT_SYSTEM_PROMPT, msg))

    def agent(self, message: Optional[str]) -> AssistResponse:
        """Tool or plain chat, never retrieval."""

        msg = normalize_message(message)
        if looks_like_ticket_request(msg.lower()):
            with self.telemetry.observe("router.tool.ticket", tool="TicketTool"):
                return self.handle_ticket(msg)
        return AssistResponse.chat(self._chat(CHAT_SYSTEM_PROMPT, msg))

    def chat(self, message: Optional[str]) -> str:
        return self._chat(CHAT_SYSTEM_PROMPT, normalize_message(message))

    # ------------------------------------------------------------------
    def handle_ticket(self, msg: str) -> AssistResponse:
        title = resolve_ticket_title(msg)
        ticket_id = self._create_ticket(title, msg)
        logger.info("Created ticket", extra={"route": Route.TOOL.value, "ticket_id": ticket_id})
        return AssistResponse.tool(ticket_id, title)
