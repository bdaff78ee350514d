"""
Command-line entry point for the transcript acquisition service.

Runs one pipeline operation from a shell, or starts the API server.
"""

import argparse
import json
import sys
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

from transcript_service.config import config
from transcript_service.core.pipeline import build_pipeline
from transcript_service.db.database import SessionLocal, init_db
from transcript_service.utils.error_handling import TranscriptServiceError, log_pipeline_failure


def run(command: str, reference: str) -> dict:
    """Run one pipeline operation and return its JSON-ready payload."""
    init_db()
    db = SessionLocal()
    try:
        pipeline = build_pipeline(db)
        if command == "transcript":
            result = pipeline.acquire_transcript(reference)
        elif command == "summary":
            result = pipeline.generate_summary(reference)
        elif command == "notes":
            result = pipeline.generate_notes(reference)
        else:
            result = pipeline.get_transcript(reference)
        return result.model_dump(mode="json", by_alias=True)
    finally:
        db.close()


def serve(host: str, port: int, reload: bool = False) -> None:
    """Start the FastAPI server with uvicorn."""
    config.initialize()
    print(f"Starting {config.APP_NAME} API server v{config.APP_VERSION} on {host}:{port}")

    uvicorn.run(
        "transcript_service.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=config.LOG_LEVEL.lower(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="YouTube Transcript Service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in [
        ("transcript", "Acquire the transcript of a video"),
        ("get", "Show a stored transcript"),
        ("summary", "Get or generate the summary of a stored transcript"),
        ("notes", "Generate study notes for a video"),
    ]:
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("reference", help="YouTube URL, video ID, or record ID")

    server = subparsers.add_parser("serve", help="Run the API server")
    server.add_argument("--host", default=config.API_HOST, help="Host to bind the server to")
    server.add_argument("--port", type=int, default=config.API_PORT, help="Port to bind the server to")
    server.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main function to run the application from command line."""
    args = build_parser().parse_args(argv)

    # Load environment variables
    load_dotenv()

    if args.command == "serve":
        serve(args.host, args.port, args.reload)
        return

    try:
        payload = run(args.command, args.reference)
    except TranscriptServiceError as e:
        log_pipeline_failure(e, {"command": args.command, "reference": args.reference})
        sys.exit(1)

    if args.command == "notes":
        print(payload["notes"])
    elif args.command == "summary":
        print(payload["summary"])
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
