import pytest

from ai_assist.telemetry import ObservationRegistry


def test_observed_records_labels_and_returns_result():
    registry = ObservationRegistry()

    @registry.observed("llm.call", provider="openai", mode="chat")
    def call(x):
        return x * 2

    assert call(21) == 42
    [observation] = registry.observations
    assert observation.name == "llm.call"
    assert observation.labels == {"provider": "openai", "mode": "chat"}
    assert observation.duration_ms >= 0
    assert observation.error is None


def test_observe_reraises_and_records_error_type():
    registry = ObservationRegistry()

    with pytest.raises(KeyError):
        with registry.observe("rag.retrieve", topK=5):
            raise KeyError("missing")

    [observation] = registry.observations
    assert observation.error == "KeyError"
    assert observation.labels == {"topK": "5"}


def test_registry_is_bounded():
    registry = ObservationRegistry(max_records=2)
    for name in ("a", "b", "c"):
        with registry.observe(name):
            pass
    assert registry.names() == ["b", "c"]
    registry.clear()
    assert registry.observations == []


def test_labels_named_like_record_attributes_keep_the_result(caplog):
    caplog.set_level("INFO")
    registry = ObservationRegistry()

    @registry.observed("rag.retrieve", module="rag", lineno=3)
    def search():
        return "ok"

    assert search() == "ok"
    [record] = [r for r in caplog.records if r.name == "ai_assist.telemetry"]
    assert record.labels == {"module": "rag", "lineno": "3"}
    assert record.operation == "rag.retrieve"


def test_labels_named_like_record_attributes_keep_the_error(caplog):
    caplog.set_level("INFO")
    registry = ObservationRegistry()

    with pytest.raises(TimeoutError):
        with registry.observe("llm.call", process="rag", message="x"):
            raise TimeoutError("provider")

    assert registry.observations[0].error == "TimeoutError"
