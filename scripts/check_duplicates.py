#!/usr/bin/env python3
"""
Duplicate Check CLI Tool

Screens a JSON file of candidate questions against a JSON export of the
question bank and prints the import decisions.
"""

import sys
import json
import asyncio
import argparse
from pathlib import Path
from typing import Any, Dict, List

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dupcheck.config import get_settings
from dupcheck.logging_config import setup_logging
from dupcheck.models.question_models import Question
from dupcheck.services.bulk_import_screener import BulkImportRequest
from dupcheck.services.completion_client import get_completion_client
from dupcheck.services.question_store import JsonFileQuestionStore
from dupcheck.services.service_factory import ServiceFactory
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)


def load_candidates(path: str) -> List[Question]:
    """Load candidate questions from a JSON list or {"questions": [...]} document."""
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        data = data.get("questions", [])
    return [Question.model_validate(item) for item in data]


async def run_check(args: argparse.Namespace) -> Dict[str, Any]:
    settings = get_settings()
    store = JsonFileQuestionStore(args.existing)
    request = BulkImportRequest(
        questions=load_candidates(args.candidates),
        skip_duplicate_check=args.skip_duplicate_check,
        similarity_threshold=args.threshold
    )

    client = None if args.no_ai else get_completion_client(settings)
    try:
        screener = ServiceFactory(settings).create_bulk_import_screener(
            store, completion_client=client, use_ai=client is not None
        )
        response = await screener.screen(request)
    finally:
        if client is not None:
            await client.close()
    return response.model_dump(mode="json")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Question Duplicate Check CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Screen candidate questions for duplicates")
    check_parser.add_argument("candidates", help="JSON file containing candidate questions")
    check_parser.add_argument("existing", help="JSON export of existing questions")
    check_parser.add_argument("--threshold", type=float, default=get_settings().DUPLICATE_SIMILARITY_THRESHOLD,
                              help="Similarity threshold between 0.5 and 1.0")
    check_parser.add_argument("--skip-duplicate-check", action="store_true", help="Mark every question as safe to save")
    check_parser.add_argument("--no-ai", action="store_true", help="Use lexical similarity only")

    # Statistics command
    stats_parser = subparsers.add_parser("stats", help="Show question bank statistics")
    stats_parser.add_argument("existing", help="JSON export of existing questions")

    return parser


def main():
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        if args.command == "check":
            result = asyncio.run(run_check(args))
            print(json.dumps(result, indent=2))

        elif args.command == "stats":
            stats = JsonFileQuestionStore(args.existing).stats()
            print(f"📊 Question Bank Statistics: {json.dumps(stats, indent=2)}")

    except Exception as e:
        logger.error(f"❌ Command failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
