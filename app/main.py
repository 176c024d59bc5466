import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import Settings, get_settings
from app.errors import register_exception_handlers
from app.logging_config import setup_logging
from app.routers import health, resumes, upload
from app.services.gemini_service import GeminiService
from app.services.resume_store import ResumeStore, create_db_engine

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    resume_store: Optional[ResumeStore] = None,
    gemini_service: Optional[GeminiService] = None,
) -> FastAPI:
    """
    Build the application.

    Handles that are not passed in are constructed at startup from the
    settings and torn down at shutdown.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = resume_store or ResumeStore(create_db_engine(settings))
        if settings.db_create_schema:
            store.create_schema()
        app.state.settings = settings
        app.state.resume_store = store
        app.state.gemini_service = gemini_service or GeminiService.from_settings(settings)
        logger.info("Resume API ready, uploads stored in %s", upload_dir.resolve())
        try:
            yield
        finally:
            if resume_store is None:
                store.dispose()

    app = FastAPI(
        title="Resume Parser API",
        description="Upload PDF resumes, extract them with Gemini and browse the results.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(upload.router, prefix="/api", tags=["Upload"])
    app.include_router(resumes.router, prefix="/api", tags=["Resumes"])
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    @app.get("/")
    async def root():
        return {"message": "Resume Parser API is running. Use endpoints under /api/"}

    return app


# Local development runner
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
