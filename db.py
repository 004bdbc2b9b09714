# db.py
import logging
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)


def connect(mongo_uri: str) -> MongoClient:
    logger.info("Connecting to MongoDB")
    return MongoClient(mongo_uri)


def ensure_indexes(db: Database) -> None:
    # Signup and rename rely on this index to reject duplicate usernames atomically
    db.users.create_index([("Username", ASCENDING)], unique=True, name="username_unique")
    db.movies.create_index([("Title", ASCENDING)], name="title")
    db.movies.create_index([("Genre.Name", ASCENDING)], name="genre_name")
    db.movies.create_index([("Director.Name", ASCENDING)], name="director_name")


def get_db(request: Request) -> Database:
    return request.app.state.db


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=422, detail=f"'{value}' is not a valid movie id")


def birthday_to_datetime(birthday: Optional[date]) -> Optional[datetime]:
    """BSON has no date type, so birthdays are stored at midnight."""
    if birthday is None:
        return None
    return datetime.combine(birthday, time.min)


def user_document(username: str, hashed_password: str, email: str, birthday: Optional[date]) -> Dict[str, Any]:
    doc = {
        "Username": username,
        "Password": hashed_password,
        "Email": email,
        "FavouriteMovies": [],
    }
    if birthday is not None:
        doc["Birthday"] = birthday_to_datetime(birthday)
    return doc
