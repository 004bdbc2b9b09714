# users.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from db import birthday_to_datetime, get_db, parse_object_id, user_document
from models import User, UserIn
from utils.auth_utils import get_current_user, hash_password

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["users"])


# Lookups of a missing user answer null; changes to one answer 404. The older
# myFlix API answered 400 when deleting an unknown user.
def _not_found(username: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{username} was not found")


# -----------------------------
# Reads
# -----------------------------

@users_router.get("", response_model=List[User], dependencies=[Depends(get_current_user)])
def get_all_users(db: Database = Depends(get_db)):
    return list(db.users.find())


@users_router.get("/{username}", response_model=Optional[User], dependencies=[Depends(get_current_user)])
def get_user(username: str, db: Database = Depends(get_db)):
    return db.users.find_one({"Username": username})


# -----------------------------
# Signup / profile
# -----------------------------

@users_router.post("", response_model=User, status_code=201)
def signup(user: UserIn, db: Database = Depends(get_db)):
    doc = user_document(user.Username, hash_password(user.Password), user.Email, user.Birthday)
    try:
        result = db.users.insert_one(doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail=f"{user.Username} already exists")
    logger.info("Registered user %s", user.Username)
    return {**doc, "_id": result.inserted_id}


@users_router.put("/{username}", response_model=User, dependencies=[Depends(get_current_user)])
def update_user(username: str, user: UserIn, db: Database = Depends(get_db)):
    changes = {
        "Username": user.Username,
        "Password": hash_password(user.Password),
        "Email": user.Email,
    }
    if user.Birthday is not None:
        changes["Birthday"] = birthday_to_datetime(user.Birthday)
    try:
        updated = db.users.find_one_and_update(
            {"Username": username},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail=f"{user.Username} already exists")
    if updated is None:
        raise _not_found(username)
    return updated


@users_router.delete("/{username}", response_class=PlainTextResponse, dependencies=[Depends(get_current_user)])
def delete_user(username: str, db: Database = Depends(get_db)):
    deleted = db.users.find_one_and_delete({"Username": username})
    if deleted is None:
        raise _not_found(username)
    logger.info("Deleted user %s", username)
    return f"{username} was deleted."


# -----------------------------
# Favourites
# -----------------------------

@users_router.put("/{username}/movies/{movie_id}", response_model=User, dependencies=[Depends(get_current_user)])
def add_favourite(username: str, movie_id: str, db: Database = Depends(get_db)):
    # Appends even when already present; ids are not checked against movies
    updated = db.users.find_one_and_update(
        {"Username": username},
        {"$push": {"FavouriteMovies": parse_object_id(movie_id)}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise _not_found(username)
    return updated


@users_router.delete("/{username}/movies/{movie_id}", response_model=User, dependencies=[Depends(get_current_user)])
def remove_favourite(username: str, movie_id: str, db: Database = Depends(get_db)):
    updated = db.users.find_one_and_update(
        {"Username": username},
        {"$pull": {"FavouriteMovies": parse_object_id(movie_id)}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise _not_found(username)
    return updated
