from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intake_app.bot_submission_service.bot_submission_route import router as bot_submission_router
from intake_app.config import Config
from intake_app.infra.factory import Factory

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or Config.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info("Starting up application")
        logger.info("=" * 60)

        logger.info("1. Initializing database...")
        database = Factory.get_database(config)
        repository = Factory.get_repository(database)
        repository.init_db()
        logger.info("2. Database initialized")

        producer = Factory.get_producer(config)
        logger.info(f"3. Event producer ready (available: {producer.is_available()})")

        app.state.database = database
        app.state.producer = producer
        app.state.submission_service = Factory.get_service(config, repository, producer)
        logger.info("4. Submission service ready")
        logger.info("Application startup complete")

        try:
            yield
        finally:
            logger.info("Shutting down application")
            producer.close()
            database.dispose()
            logger.info("Storage connections closed")

    app = FastAPI(
        title="Bot Customization Intake API",
        description="API for submitting and tracking trading-signal bot customization requests",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(bot_submission_router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Unparseable bodies get the same 400 shape as schema failures
        errors = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "_root"
            errors.setdefault(field, error.get("msg", "Invalid request"))
        return JSONResponse(
            status_code=400,
            content={"detail": {"message": "Validation error", "errors": errors}},
        )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    config = Config.load()
    uvicorn.run("main:app", host=config.host, port=config.port)
