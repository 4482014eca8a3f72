"""Shared fixtures: scripted stand-ins for the router's collaborators."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pytest

from ai_assist.models import RetrievedPassage
from ai_assist.routing.router import AssistRouter
from ai_assist.telemetry import ObservationRegistry

LONG_PASSAGE = "To reset your VPN token, open the self-service portal and choose Reset."


class FakeCompletion:
    """Returns scripted answers in order and records every call."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers) or ["chat answer"]
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system_instruction: str, user_content: str) -> str:
        self.calls.append((system_instruction, user_content))
        if len(self.answers) > 1:
            return self.answers.pop(0)
        return self.answers[0]


class FailingCompletion:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    def complete(self, system_instruction: str, user_content: str) -> str:
        self.calls += 1
        raise self.error


class FakeRetriever:
    def __init__(self, passages: Sequence[RetrievedPassage] = ()) -> None:
        self.passages = list(passages)
        self.queries: List[Tuple[str, int]] = []

    def search(self, query: str, top_k: int = 5) -> List[RetrievedPassage]:
        self.queries.append((query, top_k))
        return self.passages[:top_k]


class FakeTicketTool:
    def __init__(self, ticket_id: str = "TCK-0001") -> None:
        self.ticket_id = ticket_id
        self.created: List[Tuple[str, str]] = []

    def create_ticket(self, title: str, body: str) -> str:
        self.created.append((title, body))
        return self.ticket_id


class KeywordEmbedder:
    """Deterministic bag-of-keywords embeddings for vector store tests."""

    model_name = "keyword-test"
    vocabulary = ("vpn", "password", "holiday", "expense", "laptop")

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        rows = []
        for text in texts:
            lower = text.lower()
            rows.append([float(lower.count(word)) + 0.01 for word in self.vocabulary])
        return np.asarray(rows, dtype=np.float32)


def passage(text: str, source: str | None = "handbook.md") -> RetrievedPassage:
    metadata = {} if source is None else {"source": source}
    return RetrievedPassage(text=text, metadata=metadata, score=0.9)


@pytest.fixture
def completion() -> FakeCompletion:
    return FakeCompletion("grounded answer", "chat answer")


@pytest.fixture
def retriever() -> FakeRetriever:
    return FakeRetriever([passage(LONG_PASSAGE)])


@pytest.fixture
def tickets() -> FakeTicketTool:
    return FakeTicketTool()


@pytest.fixture
def telemetry() -> ObservationRegistry:
    return ObservationRegistry()


@pytest.fixture
def router(completion, retriever, tickets, telemetry) -> AssistRouter:
    return AssistRouter(completion, retriever, tickets, telemetry=telemetry)
