"""A lightweight vector store backed by NumPy."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..exceptions import ConfigurationError
from ..models import RetrievedPassage
from ..utils.chunking import DEFAULT_CHUNK_SIZE, chunk_text, enumerate_chunks
from ..utils.logging import get_logger

logger = get_logger(__name__)


class EmbeddingBackend:
    """Protocol for embedding providers."""

    model_name: str

    def embed(self, texts: Sequence[str]) -> np.ndarray:  # pragma: no cover - interface
        raise NotImplementedError


class VectorStore:
    """Persist embeddings and their passages on disk and rank them by cosine similarity."""

    def __init__(
        self,
        storage_dir: str | Path = "data/store",
        *,
        embedder: Optional[EmbeddingBackend] = None,
    ) -> None:
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.embedder = embedder
        self._vectors_path = self.storage_dir / "vectors.npy"
        self._meta_path = self.storage_dir / "metadata.json"
        self._passages: List[Dict[str, Any]] = []
        self._embeddings: np.ndarray | None = None
        self._embedding_model: str | None = None
        self._lock = threading.Lock()
        self._load()

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    def _load(self) -> None:
        if self._meta_path.exists() and self._vectors_path.exists():
            with self._meta_path.open("r", encoding="utf-8") as fh:
                meta = json.load(fh)
            self._passages = meta.get("passages", [])
            self._embedding_model = meta.get("embedding_model")
            self._embeddings = np.load(self._vectors_path)

    def _save(self) -> None:
        payload = {
            "passages": self._passages,
            "embedding_model": self._embedding_model,
        }
        with self._meta_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        if self._embeddings is not None:
            np.save(self._vectors_path, self._embeddings)

    def _require_embedder(self) -> EmbeddingBackend:
        if self.embedder is None:
            raise ConfigurationError("VectorStore needs an embedder to ingest or search")
        return self.embedder

    # ------------------------------------------------------------------
    def add_text(
        self,
        text: str,
        *,
        source: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> int:
        """Chunk ``text``, embed the chunks and persist them. Returns the chunk count."""

        chunks = chunk_text(text, chunk_size=chunk_size)
        if not chunks:
            return 0

        embedder = self._require_embedder()
        embeddings = np.asarray(embedder.embed(chunks), dtype=np.float32)
        if embeddings.ndim != 2 or embeddings.shape[0] != len(chunks):
            raise ValueError("Embeddings must be a 2D array with one row per chunk")

        chunk_ids = enumerate_chunks(chunks, prefix=source)
        new_passages = [
            {"id": chunk_id, "text": content, "metadata": {"source": source, "chunk": idx}}
            for idx, (chunk_id, content) in enumerate(zip(chunk_ids, chunks))
        ]

        with self._lock:
            if self._embeddings is None:
                self._embeddings = embeddings
                self._passages = new_passages
            else:
                if embeddings.shape[1] != self._embeddings.shape[1]:
                    raise ValueError("Embedding dimension mismatch")
                self._embeddings = np.vstack([self._embeddings, embeddings])
                self._passages.extend(new_passages)

            self._embedding_model = embedder.model_name
            self._save()

        logger.info("Stored %d chunks", len(chunks), extra={"source": source})
        return len(chunks)

    # ------------------------------------------------------------------
    def search(self, query: str, top_k: int = 5) -> List[RetrievedPassage]:
        """Return the ``top_k`` most relevant passages for ``query``.

        An empty store yields an empty list, which callers treat as "no results".
        """

        with self._lock:
            passages = list(self._passages)
            doc_vectors = self._embeddings

        if not passages or doc_vectors is None:
            return []

        query_vec = np.asarray(self._require_embedder().embed([query]), dtype=np.float32)
        if query_vec.ndim != 2 or query_vec.shape[0] != 1:
            raise ValueError("Query embedding must be a 2D array with a single row")
        query_vec = query_vec[0]

        # Cosine similarity
        doc_norms = np.linalg.norm(doc_vectors, axis=1) + 1e-10
        query_norm = np.linalg.norm(query_vec) + 1e-10
        similarities = (doc_vectors @ query_vec) / (doc_norms * query_norm)

        top_indices = similarities.argsort()[::-1][:top_k]
        return [
            RetrievedPassage(
                text=passages[idx].get("text") or "",
                metadata=dict(passages[idx].get("metadata") or {}),
                score=float(similarities[idx]),
            )
            for idx in top_indices
        ]

    # ------------------------------------------------------------------
    @property
    def chunk_count(self) -> int:
        return len(self._passages)

    @property
    def embedding_dimension(self) -> int | None:
        if self._embeddings is None:
            return None
        return int(self._embeddings.shape[1])
