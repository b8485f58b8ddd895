from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.analysis.factory import AnalysisClientFactory
from app.api import files, jobs
from app.api.errors import register_exception_handlers
from app.config.settings import Settings
from app.database.connection import Database
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.orchestrator.service import JobAnalysisService, build_job_service
from app.storage.file_store import FileStore


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the service graph on startup unless one was injected."""
    if app.state.job_service is not None:
        yield
        return

    settings: Settings = app.state.settings
    analysis_client = AnalysisClientFactory.create(settings)
    database = Database.from_settings(settings)
    try:
        database.open()
        job_repo = JobRepository(database)
        job_repo.ensure_schema()
        app.state.job_service = build_job_service(
            job_repo=job_repo,
            file_store=app.state.file_store,
            analysis_client=analysis_client,
        )
        Log.info(
            f"Service started: env={settings.app_env}, "
            f"provider={settings.analysis_provider}, uploads={settings.uploads_root}"
        )
        yield
    finally:
        app.state.job_service = None
        analysis_client.close()
        database.close()
        Log.info("Service stopped")


def create_app(
    settings: Settings | None = None,
    *,
    job_service: JobAnalysisService | None = None,
    file_store: FileStore | None = None,
) -> FastAPI:
    settings = settings or Settings()
    Log.configure(settings.log_level)
    app = FastAPI(title="Job Description Analysis API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.job_service = job_service
    app.state.file_store = file_store or FileStore(Path(settings.uploads_root))

    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(jobs.router, prefix="/api")
    app.include_router(files.router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


def main() -> None:
    """Entry point: load settings -> build the app -> serve it."""
    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
