# auth.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from config import Settings, get_settings
from db import get_db
from models import LoginResponse, UserLogin
from utils.auth_utils import create_access_token, verify_password

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["auth"])


@auth_router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    db_user = db.users.find_one({"Username": credentials.Username})
    if not db_user or not verify_password(credentials.Password, db_user["Password"]):
        logger.warning("Failed login for %s", credentials.Username)
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token(db_user["Username"], settings)
    return {"user": db_user, "token": token}
