"""Main FastAPI application"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from routes import router as expenses_router
from services.errors import StoreError
from services.expense_store import ExpenseStore
from services.expenses_service import ExpenseService
from utils.logging_config import configure_logging
from utils.settings import Settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/expenses"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    logger.warning(f"Malformed request to {request.url.path}: {messages}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "; ".join(messages)})


def create_limiter(settings: Settings) -> Limiter:
    default_limits = [settings.rate_limit] if settings.rate_limit else []
    return Limiter(key_func=get_remote_address, default_limits=default_limits, enabled=bool(settings.rate_limit))


def create_app(settings: Optional[Settings] = None, service: Optional[ExpenseService] = None) -> FastAPI:
    """
    Build the application.

    When ``service`` is given it is used as-is and no database connection is made;
    otherwise the lifespan connects to MongoDB and builds the service around the
    configured collection.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.expense_service is None:
            logger.info(f"Connecting to MongoDB at {settings.mongodb_uri}...")
            try:
                client = AsyncIOMotorClient(settings.mongodb_uri)
                await client.admin.command("ping")
                collection = client[settings.db_name].get_collection(settings.collection_name)
                store = ExpenseStore(collection)
                app.state.expense_service = ExpenseService(store)
                logger.info(f"Successfully connected to MongoDB database: {settings.db_name}")
                logger.info(f"Collection '{settings.collection_name}' holds {await store.count()} expenses.")
            except (PyMongoError, StoreError) as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                app.state.expense_service = None

        logger.info(f"Server running in {settings.environment} mode on port {settings.port}")
        yield

        if client is not None:
            logger.info("Closing MongoDB connection...")
            client.close()
            logger.info("MongoDB connection closed.")

    app = FastAPI(
        title="Expense Tracker API",
        description="API for recording, listing and deleting personal expenses.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.expense_service = service

    app.state.limiter = create_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Order matters: the last middleware added runs first.
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(expenses_router, prefix=API_PREFIX, tags=["expenses"])

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "API is running..."

    return app


def run() -> None:
    """Entry point for ``expense-api``."""
    import uvicorn

    settings = Settings.from_env()
    log_config = configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=log_config)


if __name__ == "__main__":
    run()
