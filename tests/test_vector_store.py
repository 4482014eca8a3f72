import pytest

from ai_assist.exceptions import ConfigurationError
from ai_assist.storage.vector_store import VectorStore
from ai_assist.utils.chunking import chunk_text, enumerate_chunks

from .conftest import KeywordEmbedder


def test_chunk_text_uses_fixed_windows():
    chunks = chunk_text("a" * 1700)
    assert [len(chunk) for chunk in chunks] == [800, 800, 100]
    assert chunk_text("") == []


def test_chunk_text_with_overlap():
    assert chunk_text("abcdefgh", chunk_size=4, chunk_overlap=2) == ["abcd", "cdef", "efgh"]
    with pytest.raises(ValueError):
        chunk_text("abc", chunk_size=2, chunk_overlap=2)


def test_enumerate_chunks():
    assert enumerate_chunks(["x", "y"], prefix="doc") == ["doc-0001", "doc-0002"]


def test_empty_store_returns_no_results(tmp_path):
    store = VectorStore(tmp_path, embedder=KeywordEmbedder())
    assert store.search("vpn") == []
    assert store.chunk_count == 0


def test_add_and_search_ranks_by_similarity(tmp_path):
    store = VectorStore(tmp_path, embedder=KeywordEmbedder())
    assert store.add_text("Reset your VPN from the portal. VPN tokens expire.", source="vpn.md") == 1
    assert store.add_text("Holiday requests go through HR.", source="holiday.md") == 1

    results = store.search("vpn help", top_k=5)

    assert [r.source for r in results] == ["vpn.md", "holiday.md"]
    assert results[0].metadata == {"source": "vpn.md", "chunk": 0}
    assert results[0].score >= results[1].score
    assert store.embedding_dimension == len(KeywordEmbedder.vocabulary)


def test_top_k_limits_results(tmp_path):
    store = VectorStore(tmp_path, embedder=KeywordEmbedder())
    store.add_text("laptop " * 300, source="laptops.md", chunk_size=100)
    assert len(store.search("laptop", top_k=5)) == 5


def test_store_persists_between_instances(tmp_path):
    VectorStore(tmp_path, embedder=KeywordEmbedder()).add_text("expense report policy", source="fin.md")

    reloaded = VectorStore(tmp_path, embedder=KeywordEmbedder())

    assert reloaded.chunk_count == 1
    assert reloaded.search("expense")[0].text == "expense report policy"


def test_search_without_embedder_fails_once_populated(tmp_path):
    VectorStore(tmp_path, embedder=KeywordEmbedder()).add_text("password rules", source="sec.md")
    with pytest.raises(ConfigurationError):
        VectorStore(tmp_path).search("password")
