"""Wrappers around the OpenAI API for embedding and chat models."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import numpy as np
from openai import OpenAI, OpenAIError

from ..exceptions import CompletionError, RetrievalError
from ..storage.vector_store import EmbeddingBackend


class CompletionProvider(Protocol):
    """Anything that turns a system instruction and user content into text."""

    def complete(self, system_instruction: str, user_content: str) -> str:  # pragma: no cover - interface
        ...


def _client(api_key: Optional[str], base_url: Optional[str]) -> OpenAI:
    return OpenAI(api_key=api_key, base_url=base_url)


class OpenAIEmbedder(EmbeddingBackend):
    """Thin wrapper around OpenAI's embedding endpoint."""

    def __init__(
        self,
        *,
        model: str = "text-embedding-3-large",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.client = _client(api_key, base_url)
        self.model_name = model

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        try:
            response = self.client.embeddings.create(model=self.model_name, input=list(texts))
        except OpenAIError as exc:
            raise RetrievalError(f"Embedding request failed: {exc}") from exc
        vectors = [item.embedding for item in response.data]
        return np.asarray(vectors, dtype=np.float32)


class OpenAIChatModel:
    """Wrapper around OpenAI's Chat Completions API."""

    def __init__(
        self,
        *,
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.client = _client(api_key, base_url)
        self.model = model

    def generate(self, messages: Sequence[dict]) -> str:
        try:
            response = self.client.chat.completions.create(model=self.model, messages=list(messages))
        except OpenAIError as exc:
            raise CompletionError(str(exc), details={"model": self.model}) from exc
        choice = response.choices[0]
        return choice.message.content or ""

    def complete(self, system_instruction: str, user_content: str) -> str:
        return self.generate(
            [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_content},
            ]
        )
