"""Exceptions raised by the AI Assist router and its collaborators.

Only the semantic fallbacks of the router (no results, thin context, detected
refusal, ineligible for retrieval) change the route. Everything else surfaces
as one of these exceptions and reaches the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AssistError(Exception):
    """Base exception for all AI Assist errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(AssistError):
    """Settings are missing or inconsistent."""


class ExternalServiceError(AssistError):
    """A collaborator service failed."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class CompletionError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Completion provider", message, details)


class RetrievalError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Vector store", message, details)


class TicketToolError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Ticket tool", message, details)
