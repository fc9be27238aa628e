#!/usr/bin/env python3
"""
glasses-context command line.

Usage:
    # Run the ingestion server (POST /media)
    glasses-context serve --port 3000

    # Ask a question against everything captured so far
    glasses-context query "What did I discuss this morning?"

    # Ingest artifacts by hand
    glasses-context ingest-transcript "Remember to call the dentist"
    glasses-context ingest-image photo.jpg

Environment:
    ANTHROPIC_API_KEY         - required for query and ingest-image
    ANTHROPIC_MODEL           - optional model override
    PORT                      - optional, defaults to 3000
    GLASSES_CONTEXT_DATA_DIR  - where transcripts/ and images/ live
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import sys
from pathlib import Path
from typing import Any

from .artifact_store import ArtifactStore, media_type_for_extension
from .config import AppConfig
from .errors import ContextQueryError
from .ingestion import IngestionService
from .llm_client import ReasoningClient
from .logging_setup import configure_logging
from .response_composer import to_content
from .tool import ContextQueryTool


def build_ingestion(config: AppConfig) -> IngestionService:
    store = ArtifactStore(config.storage.data_path)
    return IngestionService(store, ReasoningClient(config=config.reasoning))


def cmd_serve(config: AppConfig, args: argparse.Namespace) -> int:
    import uvicorn

    from .server import create_app

    app = create_app(build_ingestion(config))
    host = args.host or config.server.host
    port = args.port or config.server.port
    print(f"Listening on http://{host}:{port}/media", file=sys.stderr)
    uvicorn.run(app, host=host, port=port)
    return 0


def cmd_query(config: AppConfig, args: argparse.Namespace) -> int:
    tool = ContextQueryTool.from_config(config)
    parts = asyncio.run(tool.context_query(args.question))
    content = to_content(parts)

    if args.json:
        print(json.dumps(content, indent=2))
        return 0

    for part in content["content"]:
        if part["type"] == "image":
            print(f"[image {part['mimeType']}, {len(part['data'])} base64 chars]")
        else:
            print(part["text"])
    return 0


def cmd_ingest_transcript(config: AppConfig, args: argparse.Namespace) -> int:
    result = build_ingestion(config).ingest_transcript(args.text)
    print(json.dumps(result.to_dict()))
    return 0


def cmd_ingest_image(config: AppConfig, args: argparse.Namespace) -> int:
    path = Path(args.path)
    media_type = args.media_type or media_type_for_extension(path.suffix)
    image_b64 = base64.b64encode(path.read_bytes()).decode("ascii")
    result = asyncio.run(build_ingestion(config).ingest_image(image_b64, media_type))
    print(json.dumps(result.to_dict()))
    return 0


COMMANDS: dict[str, Any] = {
    "serve": cmd_serve,
    "query": cmd_query,
    "ingest-transcript": cmd_ingest_transcript,
    "ingest-image": cmd_ingest_image,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glasses-context",
        description="Capture log ingestion and natural-language queries",
    )
    parser.add_argument("--config", type=Path, help="Path to JSON config file")
    parser.add_argument("--data-dir", help="Override the artifact directory")
    parser.add_argument("--logs-dir", help="Override the log directory")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the ingestion HTTP server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    query = sub.add_parser("query", help="Ask a question about captured context")
    query.add_argument("question")
    query.add_argument("--json", action="store_true", help="Print the raw content parts")

    transcript = sub.add_parser("ingest-transcript", help="Store a transcript")
    transcript.add_argument("text")

    image = sub.add_parser("ingest-image", help="Store an image and its description")
    image.add_argument("path")
    image.add_argument("--media-type", help="Defaults to the type implied by the extension")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = AppConfig.load(args.config)
    if args.data_dir:
        config.storage.data_dir = args.data_dir
    if args.logs_dir:
        config.storage.logs_dir = args.logs_dir
    configure_logging(config.storage.logs_path)

    try:
        return COMMANDS[args.command](config, args)
    except ContextQueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
