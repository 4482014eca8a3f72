"""Ticket-creation tools invoked on the ``tool`` route."""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

import requests

from ..exceptions import TicketToolError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {"User-Agent": "AI-Assist/1.0", "Accept": "application/json"}


class TicketTool(Protocol):
    def create_ticket(self, title: str, body: str) -> str:  # pragma: no cover - interface
        ...


class FileTicketTool:
    """Append tickets to a JSON-lines ledger on disk."""

    def __init__(self, ticket_dir: str | Path = "data/tickets") -> None:
        self.ticket_dir = Path(ticket_dir)
        self.ticket_dir.mkdir(parents=True, exist_ok=True)
        self._ledger_path = self.ticket_dir / "tickets.jsonl"
        self._lock = threading.Lock()

    def create_ticket(self, title: str, body: str) -> str:
        ticket_id = f"TCK-{uuid.uuid4().hex[:8].upper()}"
        record = {
            "id": ticket_id,
            "title": title,
            "body": body,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            with self._lock, self._ledger_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(record) + "\n")
        except OSError as exc:
            raise TicketToolError(f"Could not write ticket ledger: {exc}") from exc
        logger.info("Created ticket %s", ticket_id)
        return ticket_id


class HttpTicketTool:
    """Create tickets through a remote JSON endpoint.

    The endpoint receives ``{"title": ..., "body": ...}`` and must answer with a
    JSON object carrying the new ticket identifier under ``id`` (or
    ``ticket_id``).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.http = session or requests.Session()

    def create_ticket(self, title: str, body: str) -> str:
        try:
            response = self.http.post(
                self.url,
                json={"title": title, "body": body},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise TicketToolError("Ticket service returned invalid JSON", details={"url": self.url}) from exc
        except requests.RequestException as exc:
            raise TicketToolError(str(exc), details={"url": self.url}) from exc

        ticket_id = None
        if isinstance(payload, dict):
            ticket_id = payload.get("id") or payload.get("ticket_id")
        if not ticket_id:
            raise TicketToolError("Ticket service response has no ticket id", details={"url": self.url})
        return str(ticket_id)


def build_ticket_tool(settings) -> TicketTool:
    if settings.ticket_api_url:
        return HttpTicketTool(settings.ticket_api_url, timeout=settings.ticket_api_timeout)
    return FileTicketTool(settings.ticket_dir)
