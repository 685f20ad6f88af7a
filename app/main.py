import argparse
import json
import sys

from app.config.settings import Settings
from app.documents.exceptions import InvalidDocumentError
from app.documents.models import Document
from app.logging.logger import Log
from app.processor.models import ProcessingOptions
from app.recognition.exceptions import RecognitionError
from app.recognition.models import BackendPolicy
from app.service import build_service


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract text and fields from a receipt.")
    parser.add_argument("path", help="receipt image or PDF")
    parser.add_argument(
        "--policy",
        default=None,
        help="local, remote or auto (default: DEFAULT_BACKEND_POLICY setting)",
    )
    parser.add_argument("--no-clean", action="store_true", help="skip text cleanup")
    parser.add_argument(
        "--no-structured", action="store_true", help="skip AI field extraction"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build service -> process one file -> print JSON."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.app_env, stream=sys.stderr)

    try:
        options = ProcessingOptions(
            backend_policy=BackendPolicy.parse(args.policy or settings.default_backend_policy),
            extract_structured=not args.no_structured,
            clean_text=not args.no_clean,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    service = build_service(settings)
    try:
        result = service.process(Document.from_path(args.path), options)
    except (InvalidDocumentError, RecognitionError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
