import json
import logging

from ai_assist.utils.logging import AssistJsonFormatter


def _format(formatter, **extra):
    record = logging.LogRecord("ai_assist.test", logging.INFO, __file__, 1, "routed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_json_lines_carry_service_name_and_timestamp():
    formatter = AssistJsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s", service="ai-assist")

    line = _format(formatter, route="rag")

    assert line["service"] == "ai-assist"
    assert line["message"] == "routed"
    assert line["route"] == "rag"
    assert line["timestamp"]


def test_api_keys_are_redacted():
    formatter = AssistJsonFormatter("%(message)s")
    line = _format(formatter, openai_api_key="sk-secret")
    assert line["openai_api_key"] == "***REDACTED***"
    assert "service" not in line
