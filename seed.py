"""Load movie documents from a JSON file into the myFlix database.

Usage: python seed.py movies.json [--drop]
"""
import argparse
import json
import logging
from pathlib import Path
from typing import List

from pymongo.database import Database

from config import load_settings
from db import connect, ensure_indexes
from models import MovieIn

logger = logging.getLogger(__name__)


def read_movies(path: Path) -> List[MovieIn]:
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of movies")
    return [MovieIn.model_validate(entry) for entry in raw]


def seed_movies(db: Database, movies: List[MovieIn], drop: bool = False) -> int:
    if drop:
        db.movies.delete_many({})
    if not movies:
        return 0
    result = db.movies.insert_many([movie.model_dump() for movie in movies])
    return len(result.inserted_ids)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Seed the movies collection")
    parser.add_argument("path", type=Path, help="JSON array of movie documents")
    parser.add_argument("--drop", action="store_true", help="remove existing movies first")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level)

    client = connect(settings.mongo_uri)
    try:
        db = client[settings.mongo_db]
        ensure_indexes(db)
        count = seed_movies(db, read_movies(args.path), drop=args.drop)
        logger.info("Inserted %d movies into %s", count, settings.mongo_db)
    finally:
        client.close()


if __name__ == "__main__":
    main()
