import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend_fastapi.api.routes.tasks import router as tasks_router
from infrastructure.config import configure_logging, load_settings
from infrastructure.container import build_task_service

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # main.run() hands over the settings it loaded; otherwise this process loads them.
    settings = getattr(app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        configure_logging(settings)
    service, database = build_task_service(settings)
    app.state.task_service = service
    logger.info("Task service ready")
    try:
        yield
    finally:
        if not database.is_closed():
            database.close()


app = FastAPI(title="Task Manager API", lifespan=lifespan)

# Configure CORS for frontend from environment variables
cors_origins = os.getenv("CORS_ORIGINS", "*")
if cors_origins == "*":
    origins = ["*"]
else:
    origins = [origin.strip() for origin in cors_origins.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true",
    allow_methods=os.getenv("CORS_ALLOW_METHODS", "*").split(","),
    allow_headers=os.getenv("CORS_ALLOW_HEADERS", "*").split(","),
)

app.include_router(tasks_router)
