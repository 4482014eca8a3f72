"""FastAPI application exposing the assist router over HTTP."""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..config import Settings, get_settings
from ..exceptions import AssistError, ExternalServiceError
from ..models import AssistResponse, Route
from ..routing.router import AssistRouter
from ..storage.vector_store import VectorStore
from ..utils.logging import get_logger

logger = get_logger(__name__)


class MessageRequest(BaseModel):
    """Request payload carrying a free-text user message."""

    message: Optional[str] = Field(default=None, description="User message; missing means empty")


class AskRequest(BaseModel):
    question: str = Field(..., description="Question answered from the documents only")


class IngestRequest(BaseModel):
    source: str = Field(..., min_length=1, description="Citation label stored with every chunk")
    text: str = Field(..., description="Raw text to chunk and embed")


class AssistResponsePayload(BaseModel):
    """Response payload for the assist endpoint.

    ``citations`` is only populated on the ``rag`` route and the ticket fields
    only on the ``tool`` route.
    """

    route: Route
    answer: str
    citations: List[str] = Field(default_factory=list)
    ticket_id: Optional[str] = None
    ticket_title: Optional[str] = None

    @classmethod
    def from_response(cls, response: AssistResponse) -> "AssistResponsePayload":
        return cls(
            route=response.route,
            answer=response.answer,
            citations=response.citations,
            ticket_id=response.ticket_id,
            ticket_title=response.ticket_title,
        )


class AskResponsePayload(BaseModel):
    answer: str
    citations: List[str]


class IngestResponsePayload(BaseModel):
    chunks_stored: int
    source: str


def create_app(
    *,
    settings: Optional[Settings] = None,
    router: Optional[AssistRouter] = None,
    store: Optional[VectorStore] = None,
) -> FastAPI:
    """Instantiate the FastAPI app with shared dependencies."""

    if router is None:
        from ..factory import build_router, build_store

        settings = settings or get_settings()
        store = store or build_store(settings)
        router = build_router(settings, store=store)

    app = FastAPI(title="AI Assist", version="1.0.0")

    @app.exception_handler(AssistError)
    async def assist_error_handler(request: Request, exc: AssistError) -> JSONResponse:
        status_code = 502 if isinstance(exc, ExternalServiceError) else 500
        logger.error("Request failed: %s", exc.message, extra={"path": request.url.path})
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/healthz")
    def healthcheck() -> dict:
        return {"status": "ok", "chunks": store.chunk_count if store is not None else 0}

    @app.post("/api/assist", response_model=AssistResponsePayload)
    def assist_endpoint(payload: MessageRequest) -> AssistResponsePayload:
        return AssistResponsePayload.from_response(router.assist(payload.message))

    @app.post("/api/chat", response_class=PlainTextResponse)
    def chat_endpoint(payload: MessageRequest) -> str:
        return router.chat(payload.message)

    @app.post("/api/agent", response_class=PlainTextResponse)
    def agent_endpoint(payload: MessageRequest) -> str:
        return router.agent(payload.message).answer

    @app.post("/api/ask", response_model=AskResponsePayload)
    def ask_endpoint(payload: AskRequest) -> AskResponsePayload:
        """Answer from the documents only; the model's reply is returned unfiltered."""
        question = payload.question.strip()
        if not question:
            raise HTTPException(status_code=400, detail="Question cannot be empty.")
        result = router.engine.ask(question)
        return AskResponsePayload(answer=result.text, citations=result.citations)

    @app.post("/api/ingest", response_model=IngestResponsePayload)
    def ingest_endpoint(payload: IngestRequest) -> IngestResponsePayload:
        if store is None:
            raise HTTPException(status_code=503, detail="No vector store configured.")
        stored = store.add_text(payload.text, source=payload.source)
        return IngestResponsePayload(chunks_stored=stored, source=payload.source)

    return app
