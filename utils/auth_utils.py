import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext
from pymongo.database import Database

from config import Settings, get_settings
from db import get_db

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Fixed work factor; every call to hash() draws a fresh salt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def create_access_token(username: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({"sub": username, "exp": expire}, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str, settings: Settings) -> str:
    """Return the username a token was issued to."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise _unauthorized("Token expired")
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid token")
        raise _unauthorized("Invalid token")
    username = payload.get("sub")
    if not isinstance(username, str):
        raise _unauthorized("Invalid token")
    return username


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
    db: Database = Depends(get_db),
) -> dict:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    username = decode_token(credentials.credentials, settings)
    user = db.users.find_one({"Username": username})
    if user is None:
        logger.warning("Token subject %s no longer exists", username)
        raise _unauthorized("Invalid token")
    return user
