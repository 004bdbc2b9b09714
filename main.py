import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from auth import auth_router
from config import Settings, load_settings
from db import connect, ensure_indexes
from movies import movies_router
from users import users_router

logger = logging.getLogger(__name__)


# -------------------------------
# Error handlers
# -------------------------------

async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# -------------------------------
# App factory
# -------------------------------

def create_app(settings: Settings, client: Optional[MongoClient] = None) -> FastAPI:
    """Build the myFlix API.

    ``client`` lets callers hand in an already-constructed Mongo client; when
    omitted one is opened from ``settings.mongo_uri`` at startup and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        mongo = client if client is not None else connect(settings.mongo_uri)
        app.state.db = mongo[settings.mongo_db]
        ensure_indexes(app.state.db)
        logger.info("myFlix API ready (database %s)", settings.mongo_db)
        try:
            yield
        finally:
            if client is None:
                mongo.close()
            logger.info("myFlix API stopped")

    app = FastAPI(
        title="🎬 myFlix API",
        description="Movies and user profiles with favourite lists",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PyMongoError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    @app.get("/")
    def root():
        return {"message": "Welcome to myFlix!"}

    app.include_router(auth_router)
    app.include_router(movies_router)
    app.include_router(users_router)
    return app


settings = load_settings()
logging.basicConfig(level=settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
