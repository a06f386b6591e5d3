"""Mini README: FastAPI application exposing the Finance Tracker HTTP API.

Structure:
    * create_application - application factory wiring routes, middleware,
      exception handlers, and the transaction store.
    * get_store - dependency resolving the store owned by the application.

Each application owns one ``TransactionStore`` kept on ``app.state``; handlers
receive it through dependency injection rather than a module global. The
store is emptied when the application shuts down. Domain errors raised by the
store become JSON responses: validation failures are ``400 {"errors": [...]}``
and missing records are ``404 {"error": "..."}``. Unmatched routes, including
unsupported methods on known paths, answer ``404`` in the same shape.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..configuration import FinanceTrackerSettings, get_settings
from ..logging_utils import configure_root_logger, get_logger
from ..transactions import (
    TransactionNotFoundError,
    TransactionStore,
    TransactionValidationError,
)
from ..transactions.validation import BODY_NOT_OBJECT

LOGGER = get_logger(__name__)

ENDPOINTS = (
    ("GET", "/transactions"),
    ("POST", "/transactions"),
    ("GET", "/transactions/{id}"),
    ("PATCH", "/transactions/{id}"),
    ("DELETE", "/transactions/{id}"),
    ("GET", "/summary"),
)


def get_store(request: Request) -> TransactionStore:
    """Return the store owned by the application serving the request."""

    return request.app.state.transaction_store


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as error:
        raise TransactionValidationError([BODY_NOT_OBJECT]) from error


def create_application(
    store: Optional[TransactionStore] = None,
    settings: Optional[FinanceTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    transaction_store = store if store is not None else TransactionStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        LOGGER.info("Finance Tracker API ready. Endpoints:")
        for method, path in ENDPOINTS:
            LOGGER.info("  %-6s %s", method, path)
        yield
        app.state.transaction_store.clear()
        LOGGER.info("Finance Tracker API stopped")

    app = FastAPI(title="Finance Tracker API", version="1.0.0", lifespan=lifespan)
    app.state.transaction_store = transaction_store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TransactionValidationError)
    async def validation_failed(
        request: Request, error: TransactionValidationError
    ) -> JSONResponse:
        LOGGER.warning(
            "Rejected %s %s: %s", request.method, request.url.path, "; ".join(error.errors)
        )
        return JSONResponse({"errors": error.errors}, status_code=400)

    @app.exception_handler(TransactionNotFoundError)
    async def transaction_missing(
        request: Request, error: TransactionNotFoundError
    ) -> JSONResponse:
        LOGGER.warning("%s %s: %s", request.method, request.url.path, error)
        return JSONResponse({"error": str(error)}, status_code=404)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, error: StarletteHTTPException) -> JSONResponse:
        if error.status_code in (404, 405):
            LOGGER.debug("No route for %s %s", request.method, request.url.path)
            return JSONResponse(
                {"error": f"Route {request.method} {request.url.path} not found"},
                status_code=404,
            )
        return JSONResponse(
            {"error": error.detail},
            status_code=error.status_code,
            headers=error.headers,
        )

    @app.get("/transactions")
    async def list_transactions(
        store: TransactionStore = Depends(get_store),
    ) -> JSONResponse:
        """Return every transaction, newest date first."""

        transactions = store.list_transactions()
        LOGGER.debug("Listing %s transactions", len(transactions))
        return JSONResponse([transaction.as_dict() for transaction in transactions])

    @app.post("/transactions")
    async def create_transaction(
        request: Request,
        store: TransactionStore = Depends(get_store),
    ) -> JSONResponse:
        """Validate and record a new transaction."""

        payload = await _read_json_body(request)
        transaction = store.create_transaction(payload)
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.get("/transactions/{transaction_id}")
    async def get_transaction(
        transaction_id: str,
        store: TransactionStore = Depends(get_store),
    ) -> JSONResponse:
        """Return a single transaction."""

        return JSONResponse(store.get_transaction(transaction_id).as_dict())

    @app.patch("/transactions/{transaction_id}")
    async def update_transaction(
        transaction_id: str,
        request: Request,
        store: TransactionStore = Depends(get_store),
    ) -> JSONResponse:
        """Apply a partial update; ``id`` and ``createdAt`` are never changed."""

        store.get_transaction(transaction_id)
        payload = await _read_json_body(request)
        transaction = store.update_transaction(transaction_id, payload)
        return JSONResponse(transaction.as_dict())

    @app.delete("/transactions/{transaction_id}", status_code=204)
    async def delete_transaction(
        transaction_id: str,
        store: TransactionStore = Depends(get_store),
    ) -> Response:
        """Remove a transaction."""

        store.delete_transaction(transaction_id)
        return Response(status_code=204)

    @app.get("/summary")
    async def summary(store: TransactionStore = Depends(get_store)) -> JSONResponse:
        """Return income, expense, and net totals."""

        totals = store.summarise()
        LOGGER.debug("Summary requested: %s", totals)
        return JSONResponse(totals.as_dict())

    return app
