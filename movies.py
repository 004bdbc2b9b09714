# movies.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from db import get_db
from models import DirectorInfo, GenreInfo, Movie
from utils.auth_utils import get_current_user

# Movies are read-only here; lookups that match nothing answer null
movies_router = APIRouter(prefix="/movies", tags=["movies"], dependencies=[Depends(get_current_user)])


@movies_router.get("", response_model=List[Movie])
def get_all_movies(db: Database = Depends(get_db)):
    return list(db.movies.find())


@movies_router.get("/genres/{name}", response_model=Optional[GenreInfo])
def get_genre(name: str, db: Database = Depends(get_db)):
    movie = db.movies.find_one({"Genre.Name": name}, {"Genre": 1})
    return movie.get("Genre") if movie else None


@movies_router.get("/directors/{name}", response_model=Optional[DirectorInfo])
def get_director(name: str, db: Database = Depends(get_db)):
    movie = db.movies.find_one({"Director.Name": name}, {"Director": 1})
    return movie.get("Director") if movie else None


@movies_router.get("/{title}", response_model=Optional[Movie])
def get_movie_by_title(title: str, db: Database = Depends(get_db)):
    return db.movies.find_one({"Title": title})
