"""Command line interface for AI Assist."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from .config import get_settings
from .models import Route
from .storage.vector_store import VectorStore
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _load_config(path: Path | None) -> Dict[str, Any]:
    if path is None:
        return {}
    if not path.exists():  # pragma: no cover - CLI guard
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _ingest_file(store: VectorStore, path: Path, source: str, chunk_size: int) -> int:
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return store.add_text(path.read_text(encoding="utf-8"), source=source, chunk_size=chunk_size)


def _ingest_from_config(config: Dict[str, Any], store: VectorStore) -> int:
    chunk_size = config.get("chunk_size", 800)
    total = 0
    for entry in config.get("files", []):
        path = Path(entry["path"])
        total += _ingest_file(store, path, entry.get("source", path.name), chunk_size)
    return total


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI Assist CLI")
    parser.add_argument(
        "--store-dir",
        help="Directory used to persist the vector store (default: ASSIST_STORE_DIR or data/store)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a JSON configuration file listing documents to ingest",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest_parser = subparsers.add_parser("ingest", help="Chunk, embed and store documents")
    ingest_parser.add_argument(
        "--file",
        type=Path,
        help="Single text or Markdown file to ingest (overrides configuration file)",
    )
    ingest_parser.add_argument(
        "--source",
        help="Citation label for --file (default: the file name)",
    )
    ingest_parser.add_argument(
        "--chunk-size",
        type=int,
        default=800,
        help="Characters per chunk when using --file",
    )

    subparsers.add_parser("assist", help="Start an interactive assist session")

    web_parser = subparsers.add_parser("web", help="Launch the HTTP API")
    web_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface for the web server (default: 127.0.0.1)",
    )
    web_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the web server (default: 8000)",
    )

    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.store_dir:
        settings = settings.model_copy(update={"store_dir": args.store_dir})
    setup_logging(settings.log_level, json_format=settings.log_json, service=settings.app_name)

    from .factory import build_router, build_store

    store = build_store(settings)

    if args.command == "ingest":
        if args.file:
            stored = _ingest_file(store, args.file, args.source or args.file.name, args.chunk_size)
        else:
            stored = _ingest_from_config(_load_config(args.config), store)
        if stored:
            print(f"Stored {stored} chunks in the vector store.")
        else:
            print("No documents found. Nothing to ingest.")

    elif args.command == "assist":
        router = build_router(settings, store=store)
        print("Enter your messages. Press Ctrl+C or Ctrl+D to exit.\n")
        try:
            while True:
                message = input("?> ").strip()
                if not message:
                    continue
                response = router.assist(message)
                print(f"\n[{response.route.value}] {response.answer}\n")
                if response.route is Route.RAG and response.citations:
                    print("Sources:")
                    for citation in response.citations:
                        print(f"- {citation}")
                    print()
        except (KeyboardInterrupt, EOFError):  # pragma: no cover - interactive session
            print("\nGoodbye!")

    elif args.command == "web":
        import uvicorn

        from .web import create_app

        app = create_app(settings=settings, store=store)
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
