#!/usr/bin/env python3
"""
Seed the scheme catalog

Usage:
    python -m scheme_finder.seed [--file schemes.json] [--replace]

Reads a JSON list of schemes (camelCase keys, as served by the API),
normalizes the eligibility criteria and inserts every scheme whose name
is not in the catalog yet.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from scheme_finder.config import settings
from scheme_finder.models.scheme import SchemeCreate, SchemeUpdate
from scheme_finder.services.mongo_service import MongoService
from scheme_finder.utils.validators import normalize_categories, normalize_states

logger = logging.getLogger(__name__)

SAMPLE_SCHEMES_PATH = Path(__file__).resolve().parent / "data" / "sample_schemes.json"


def normalize_scheme_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Clean up the criteria of a raw scheme record before validation"""
    record = dict(record)
    criteria = dict(record.get("eligibilityCriteria") or {})
    criteria["categories"] = normalize_categories(criteria.get("categories", []))
    criteria["states"] = normalize_states(criteria.get("states", []))
    if not criteria.get("gender"):
        criteria["gender"] = "Any"
    record["eligibilityCriteria"] = criteria
    return record


def load_schemes(path: Optional[Path] = None) -> List[SchemeCreate]:
    """
    Load scheme records from a JSON file

    Args:
        path: JSON file holding a list of schemes (defaults to the bundled sample)

    Returns:
        Validated SchemeCreate objects
    """
    path = Path(path) if path else SAMPLE_SCHEMES_PATH
    with open(path, encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON list of schemes")

    return [SchemeCreate(**normalize_scheme_record(record)) for record in records]


async def seed_schemes(store, schemes: List[SchemeCreate], replace: bool = False) -> Dict[str, int]:
    """
    Insert schemes into the catalog, matching existing ones by name

    Returns:
        Counts of inserted, updated and skipped schemes
    """
    counts = {"inserted": 0, "updated": 0, "skipped": 0}

    for scheme in schemes:
        existing = await store.get_scheme_by_name(scheme.name)
        if existing is None:
            await store.create_scheme(scheme)
            counts["inserted"] += 1
            logger.info(f"Inserted: {scheme.name}")
        elif replace:
            await store.update_scheme(existing.id, SchemeUpdate(**scheme.model_dump(by_alias=False)))
            counts["updated"] += 1
            logger.info(f"Replaced: {scheme.name}")
        else:
            counts["skipped"] += 1
            logger.info(f"Skipping (exists): {scheme.name}")

    return counts


async def _run(args) -> Dict[str, int]:
    schemes = load_schemes(args.file)
    store = MongoService()
    await store.connect()
    try:
        return await seed_schemes(store, schemes, replace=args.replace)
    finally:
        await store.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the government scheme catalog")
    parser.add_argument("--file", type=Path, default=None, help="JSON list of schemes to load")
    parser.add_argument("--replace", action="store_true", help="Overwrite schemes that already exist")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    try:
        counts = asyncio.run(_run(args))
    except Exception as e:
        logger.error(f"Seed failed: {e}")
        return 1

    logger.info(
        f"Seeding complete: {counts['inserted']} inserted, "
        f"{counts['updated']} updated, {counts['skipped']} skipped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
