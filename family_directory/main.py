from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from family_directory import models  # noqa: F401  (registers tables)
from family_directory.config import Settings
from family_directory.core.bootstrap import seed_admin
from family_directory.database import Base, build_engine, build_session_factory
from family_directory.errors import register_error_handlers
from family_directory.logging import configure_logging, log_requests

# Routers
from family_directory.routers import (
    admin_router,
    auth_router,
    media_router,
    messages_router,
    people_router,
    relationships_router,
    user_router,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    # -----------------------
    # CREATE APP
    # -----------------------
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Backend API for the family directory: people, relationships, media and messages.",
        version="1.0.0",
    )

    # -----------------------
    # DATABASE (per app, never global)
    # -----------------------
    engine = build_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    Base.metadata.create_all(bind=engine)

    # -----------------------
    # MIDDLEWARE
    # -----------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_error_handlers(app)

    # -----------------------
    # ROUTES
    # -----------------------
    app.include_router(auth_router.router)
    app.include_router(user_router.router)
    app.include_router(people_router.router)
    app.include_router(relationships_router.router)
    app.include_router(media_router.router)
    app.include_router(admin_router.router)
    app.include_router(messages_router.router)

    # -----------------------
    # HEALTH CHECK
    # -----------------------
    @app.get("/")
    def root():
        return {"message": "Family Directory API is running!"}

    # -----------------------
    # BOOTSTRAP ADMIN
    # -----------------------
    db = app.state.session_factory()
    try:
        seed_admin(db, settings)
    finally:
        db.close()

    logger.info("{} ready ({})", settings.PROJECT_NAME, settings.ENV)
    return app


def run() -> None:
    import uvicorn

    uvicorn.run("family_directory.main:create_app", factory=True, host="0.0.0.0", port=8000)
