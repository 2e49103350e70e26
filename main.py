import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import Settings, configure_logging, get_settings
from database import ensure_indexes, is_connected, open_client, utcnow
from errors import register_exception_handlers
from routers import auth, challenges, courses, dashboard, feedback, lecturers, ratings, reports, timetables
from seed import seed_defaults

logger = logging.getLogger(__name__)

SERVICES = ("challenges", "ratings", "lecturers", "courses", "timetables", "reports", "feedback")


def create_app(settings: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        mongo = client if client is not None else open_client(settings)
        app.state.client = mongo
        app.state.db = mongo[settings.database_name]
        try:
            ensure_indexes(app.state.db)
            if settings.seed_defaults:
                seed_defaults(app.state.db)
        except PyMongoError:
            logger.exception("Document store unavailable at startup; serving without indexes or seed data")
        logger.info("College API ready (%s)", settings.environment)
        try:
            yield
        finally:
            mongo.close()
            app.state.db = None
            logger.info("Document store connection closed")

    app = FastAPI(title="College Management API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def root():
        return {"message": "College Management API"}

    @app.get("/api/health")
    def health(request: Request):
        return {
            "status": "OK",
            "timestamp": utcnow().isoformat(),
            "database": "connected" if is_connected(request.app.state.db) else "disconnected",
            "services": {name: "active" for name in SERVICES},
        }

    for module in (auth, lecturers, challenges, ratings, courses, timetables, reports, feedback, dashboard):
        app.include_router(module.router)

    return app


settings = get_settings()
configure_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
