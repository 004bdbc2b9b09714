# models.py
import re
from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9]+")

# Mongo ObjectIds leave the API as plain strings
ObjectIdStr = Annotated[str, BeforeValidator(str)]


# -----------------------------
# Movies
# -----------------------------

class DirectorInfo(BaseModel):
    Name: Optional[str] = None
    Bio: Optional[str] = None
    Birth: Optional[int] = None
    Death: Optional[int] = None


class GenreInfo(BaseModel):
    Name: Optional[str] = None
    Description: Optional[str] = None


class MovieIn(BaseModel):
    Title: str
    Director: Optional[DirectorInfo] = None
    ReleaseYear: Optional[int] = None
    Genre: Optional[GenreInfo] = None
    Description: str
    ImageURL: Optional[str] = None
    Featured: bool = False
    Actors: List[str] = Field(default_factory=list)


class Movie(MovieIn):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(alias="_id")


# -----------------------------
# Users
# -----------------------------

class UserIn(BaseModel):
    """Payload for signup and profile update."""

    Username: str = Field(..., min_length=5)
    Password: str = Field(..., min_length=1)
    Email: EmailStr
    Birthday: Optional[date] = None

    @field_validator("Username")
    @classmethod
    def username_alphanumeric(cls, value: str) -> str:
        if not USERNAME_PATTERN.fullmatch(value):
            raise ValueError("Username contains non alphanumeric characters - not allowed.")
        return value


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(alias="_id")
    Username: str
    Password: str
    Email: str
    Birthday: Optional[datetime] = None
    FavouriteMovies: List[ObjectIdStr] = Field(default_factory=list)


class UserLogin(BaseModel):
    Username: str
    Password: str


class LoginResponse(BaseModel):
    user: User
    token: str
    token_type: str = "bearer"
