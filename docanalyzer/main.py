import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from docanalyzer.config.exceptions import ConfigurationError
from docanalyzer.config.settings import Settings
from docanalyzer.database.connection import close_pool, init_pool, init_schema
from docanalyzer.extraction.exceptions import ExtractionError
from docanalyzer.llm.exceptions import ResponseError
from docanalyzer.llm.models import SummarizeOptions
from docanalyzer.logging.logger import Log
from docanalyzer.processor.document_service import DocumentService, build_document_service
from docanalyzer.processor.exceptions import ProcessorError
from docanalyzer.processor.models import UploadedFile
from docanalyzer.processor.payloads import (
    analysis_payload,
    document_payload,
    summary_payload,
    upload_payload,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docanalyzer",
        description="Extract text from documents and analyze it with a language model.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    summarize = commands.add_parser("summarize", help="Summarize a file without storing it")
    summarize.add_argument("file", type=Path)
    summarize.add_argument("--length", choices=["short", "medium", "long"], default=None)
    summarize.add_argument("--max-keywords", type=int, default=None)
    summarize.add_argument("--mime-type", default=None)

    upload = commands.add_parser("upload", help="Store a file and extract its text")
    upload.add_argument("file", type=Path)
    upload.add_argument("--mime-type", default=None)

    analyze = commands.add_parser("analyze", help="Analyze a stored document")
    analyze.add_argument("document_id")

    get = commands.add_parser("get", help="Show a stored document")
    get.add_argument("document_id")

    commands.add_parser("init-db", help="Create the documents table")
    return parser


def run_command(service: DocumentService, args: argparse.Namespace) -> dict[str, Any]:
    """Dispatch one parsed command and return its JSON payload."""
    if args.command == "summarize":
        result = service.summarize_and_extract(
            _read_upload(args.file, args.mime_type),
            SummarizeOptions(desired_length=args.length, max_keywords=args.max_keywords),
        )
        return summary_payload(result)
    if args.command == "upload":
        return upload_payload(service.upload(_read_upload(args.file, args.mime_type)))
    if args.command == "analyze":
        return analysis_payload(service.analyze(args.document_id))
    if args.command == "get":
        return document_payload(service.get(args.document_id))
    raise ValueError(f"Unknown command: {args.command}")


def _read_upload(path: Path, mime_type: str | None) -> UploadedFile | None:
    if not path.is_file():
        return None
    return UploadedFile.from_path(path, mime_type)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run one command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    uses_database = settings.document_store.lower() == "postgres"
    if uses_database:
        init_pool(settings)

    try:
        if args.command == "init-db":
            if not uses_database:
                Log.error("init-db requires DOCUMENT_STORE=postgres")
                return 2
            init_schema()
            Log.info("Database schema ready")
            return 0

        try:
            service = build_document_service(settings)
        except ConfigurationError as exc:
            Log.error(f"Configuration error: {exc}")
            return 2

        try:
            payload = run_command(service, args)
        except (ProcessorError, ExtractionError, ResponseError) as exc:
            print(json.dumps({"error": type(exc).__name__, "message": str(exc)}), file=sys.stderr)
            return 1

        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    finally:
        if uses_database:
            close_pool()


if __name__ == "__main__":
    sys.exit(main())
