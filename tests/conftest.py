import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from utils.auth_utils import create_access_token, hash_password

MOVIES = [
    {
        "Title": "Inception",
        "Director": {"Name": "Christopher Nolan", "Bio": "British-American filmmaker.", "Birth": 1970},
        "ReleaseYear": 2010,
        "Genre": {"Name": "Science Fiction", "Description": "Speculative, technology-driven stories."},
        "Description": "A thief steals secrets through dream-sharing technology.",
        "ImageURL": "https://example.com/inception.jpg",
        "Featured": True,
        "Actors": ["Leonardo DiCaprio", "Elliot Page"],
    },
    {
        "Title": "Psycho",
        "Director": {"Name": "Alfred Hitchcock", "Bio": "Master of suspense.", "Birth": 1899, "Death": 1980},
        "ReleaseYear": 1960,
        "Genre": {"Name": "Thriller", "Description": "Suspense and tension."},
        "Description": "A secretary embezzles money and checks into a remote motel.",
        "Featured": False,
        "Actors": ["Anthony Perkins", "Janet Leigh"],
    },
]


@pytest.fixture
def settings():
    # mongomock clients share storage, so each test gets its own database
    return Settings(mongo_db=f"myflix_test_{uuid.uuid4().hex}", secret_key="test-secret")


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings, client=mongo_client)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    return app.state.db


@pytest.fixture
def movies(db):
    docs = [dict(movie) for movie in MOVIES]
    db.movies.insert_many(docs)
    return docs


@pytest.fixture
def user(db):
    doc = {
        "Username": "alice1",
        "Password": hash_password("wonderland"),
        "Email": "alice@example.com",
        "FavouriteMovies": [],
    }
    db.users.insert_one(doc)
    return doc


@pytest.fixture
def auth_headers(user, settings):
    token = create_access_token(user["Username"], settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def movie_payloads():
    return [dict(movie) for movie in MOVIES]
