"""Entry point: remove near-duplicate questions from a saved JSON batch.

Reads a list of questions (or ``{"questions": [...]}``) and writes
``{"questions": [...], "stats": {...}}`` with the surviving questions.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from examdedup.config import get_settings
from examdedup.logging_config import setup_logging
from pipeline.base import StageResult
from pipeline.stages.dedup import DeduplicationStage


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove near-duplicate exam questions.")
    parser.add_argument("input", type=Path, help="JSON file with the generated questions")
    parser.add_argument("-o", "--output", type=Path, help="write the result here instead of stdout")
    parser.add_argument("--question-length", choices=["short", "medium", "long"])
    parser.add_argument("--difficulty")
    parser.add_argument("--model-strength", choices=["weak", "medium", "strong"])
    parser.add_argument("--model", help="generator model id; used to derive --model-strength")
    parser.add_argument("--num-questions", type=int)
    parser.add_argument("--requested", type=int, help="number of questions originally requested")
    parser.add_argument("--by-domain", action="store_true", help="deduplicate per domain, then globally")
    parser.add_argument(
        "--accepted", type=Path, help="JSON file with questions already kept; the input tops them up"
    )
    return parser.parse_args(argv)


def load_questions(path: Path) -> list:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("questions", [])
    return payload


def stage_config(args: argparse.Namespace) -> dict:
    config = {
        "question_length": args.question_length,
        "difficulty": args.difficulty,
        "model_strength": args.model_strength,
        "model": args.model,
        "num_questions": args.num_questions,
        "requested": args.requested,
        "by_domain": args.by_domain,
    }
    return {k: v for k, v in config.items() if v is not None}


async def run(questions: list, config: dict) -> StageResult:
    return await DeduplicationStage().process(questions, config)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(level=settings.log_level, log_dir=settings.log_dir)

    config = stage_config(args)
    path = args.input
    try:
        questions = load_questions(path)
        if args.accepted:
            path = args.accepted
            config["accepted"] = load_questions(path)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Could not read questions from {path}: {exc}")
        return 1

    result = asyncio.run(run(questions, config))
    if not result.success:
        for error in result.errors:
            logger.error(error)
        return 1

    output = json.dumps({"questions": result.data, "stats": result.stats}, indent=2, default=str)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Wrote {len(result.data)} questions to {args.output}")
    else:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
