"""AI Assist: route a user message to a ticket tool, document retrieval or plain chat."""

from .models import AssistResponse, Route
from .routing.router import AssistRouter

__all__ = ["AssistResponse", "AssistRouter", "Route"]
__version__ = "1.0.0"
