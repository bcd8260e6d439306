"""
seed_recipes.py — Load catalog recipes from a JSON file into the database.

The API has no recipe write path; this script is how the catalog gets filled.

Input format: a JSON array of
    {"title": ..., "mood_tags": [...], "dietary_tags": [...],
     "ingredients": [...], "instructions": ...}

Example:
    python scripts/seed_recipes.py --input-json data/recipes.json
    python scripts/seed_recipes.py --input-json data/recipes.json \
        --database-url postgresql://user:pw@localhost/moodrecipe
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from moodrecipe.core.config import get_settings
from moodrecipe.core.database import build_engine, build_session_factory, init_db
from moodrecipe.core.logging import configure_logging, get_logger
from moodrecipe.services.recipes import seed_catalog

logger = get_logger(__name__)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Load recipes from a JSON file into the recipe catalog"
    )
    parser.add_argument(
        "--input-json",
        type=str,
        default="data/recipes.json",
        help="JSON file with an array of recipes (default: data/recipes.json)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL (default: DATABASE_URL from settings)",
    )

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    input_path = Path(args.input_json)
    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        return 1

    with input_path.open("r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        logger.error("Expected a JSON array of recipes in %s", input_path)
        return 1

    engine = build_engine(args.database_url or settings.DATABASE_URL)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        count = seed_catalog(session, records)
    finally:
        session.close()
        engine.dispose()

    print(f"Loaded {count} recipes from {input_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
