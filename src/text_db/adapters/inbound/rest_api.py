"""REST API adapter for the text table store.

This module exposes the TableDatabase operations over HTTP with FastAPI.

Endpoints:
    GET    /health                      Health check
    GET    /stats                       Database statistics
    GET    /tables                      List tables
    POST   /tables                      Create a table
    GET    /tables/{name}               Describe a table
    DELETE /tables/{name}               Drop a table
    POST   /tables/{name}/rows          Insert a row
    POST   /tables/{name}/select        Query a table
    POST   /transaction/{action}        begin / commit / rollback
    DELETE /database                    Drop the database

Errors come back as ``{"error": <kind>, "detail": <message>}`` with a
status derived from the error category.

Usage:
    from text_db.adapters.inbound.rest_api import create_app
    from text_db.application import TextDatabase

    app = create_app(TextDatabase("/path/to/store.tdb"))
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from text_db import __version__
from text_db.application import TextDatabase
from text_db.domain.exceptions import ErrorCategory, ErrorKind, TextDBError
from text_db.domain.services import query_engine, row_codec
from text_db.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ColumnModel(BaseModel):
    """A column definition."""

    name: str = Field(..., description="Column name")
    type: str = Field(..., description="Type token: Integer, Boolean or Text")


class CreateTableRequest(BaseModel):
    """Request model for table creation."""

    name: str = Field(..., description="Table name")
    columns: list[ColumnModel] = Field(..., description="Columns in order")


class InsertRequest(BaseModel):
    """Request model for row insertion."""

    values: list[str] = Field(..., description="One value per column, as text")


class SelectRequest(BaseModel):
    """Request model for a query."""

    columns: list[str] | None = Field(None, description="Columns to return (all if omitted)")
    where: dict[str, str] | None = Field(
        None, description="Equality conditions on returned columns"
    )
    order_by: str | None = Field(None, description="Column to order by")
    typed: bool = Field(False, description="Decode values to their column types")


class SelectResponse(BaseModel):
    """Response model for a query."""

    columns: list[str | None] = Field(default_factory=list, description="Returned columns")
    rows: list[list[Any]] = Field(default_factory=list, description="Result rows")
    count: int = Field(0, description="Number of rows")


class TableResponse(BaseModel):
    """Response model for a table description."""

    name: str = Field(..., description="Table name")
    columns: list[ColumnModel] = Field(default_factory=list, description="Columns")


class StatsResponse(BaseModel):
    """Response model for database statistics."""

    database_path: str = Field(..., description="Primary store path")
    in_transaction: bool = Field(..., description="Whether a transaction is open")
    tables: int = Field(..., description="Number of tables")
    transactions: dict[str, int] = Field(default_factory=dict, description="Transaction stats")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


class MessageResponse(BaseModel):
    message: str


class TransactionAction(str, Enum):
    BEGIN = "begin"
    COMMIT = "commit"
    ROLLBACK = "rollback"


def error_status(error: TextDBError) -> int:
    """HTTP status for an engine error."""
    if error.kind is ErrorKind.TABLE_NOT_FOUND:
        return 404
    if error.category is ErrorCategory.VALIDATION:
        return 400
    if error.category is ErrorCategory.STATE:
        return 409
    return 500


def create_app(db: TextDatabase) -> FastAPI:
    """Create a FastAPI application for the table store.

    Args:
        db: The database to serve.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Text DB API",
        description="REST API for a plain-text table store",
        version=__version__,
    )

    @app.exception_handler(TextDBError)
    async def handle_engine_error(request: Request, exc: TextDBError) -> JSONResponse:
        return JSONResponse(
            status_code=error_status(exc),
            content={"error": exc.kind.value, "detail": exc.message},
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy" if db.path.exists() else "unhealthy",
            version=__version__,
        )

    @app.get("/stats", response_model=StatsResponse, tags=["Stats"])
    async def get_stats() -> StatsResponse:
        return StatsResponse(**db.get_stats())

    @app.get("/tables", response_model=list[str], tags=["Tables"])
    async def list_tables() -> list[str]:
        return db.list_tables()

    @app.post("/tables", response_model=TableResponse, status_code=201, tags=["Tables"])
    async def create_table(request: CreateTableRequest) -> TableResponse:
        db.create_table(request.name, [(c.name, c.type) for c in request.columns])
        return _describe(db, request.name)

    @app.get("/tables/{name}", response_model=TableResponse, tags=["Tables"])
    async def describe_table(name: str) -> TableResponse:
        return _describe(db, name)

    @app.delete("/tables/{name}", response_model=MessageResponse, tags=["Tables"])
    async def drop_table(name: str) -> MessageResponse:
        db.drop_table(name)
        return MessageResponse(message=f"Table '{name}' dropped")

    @app.post(
        "/tables/{name}/rows", response_model=MessageResponse, status_code=201, tags=["Data"]
    )
    async def insert_row(name: str, request: InsertRequest) -> MessageResponse:
        db.insert_data(name, request.values)
        return MessageResponse(message="OK: 1 row inserted")

    @app.post("/tables/{name}/select", response_model=SelectResponse, tags=["Data"])
    async def select_rows(name: str, request: SelectRequest) -> SelectResponse:
        """Query a table.

        ``where`` keys must name returned columns; values are compared with
        the stored text exactly.
        """
        schema = db.describe_table(name)
        returned = request.columns if request.columns is not None else schema.column_names

        positions: list[tuple[int, str]] = []
        for column_name, expected in (request.where or {}).items():
            position = next(
                (i for i, n in enumerate(returned) if n.lower() == column_name.lower()),
                None,
            )
            if position is None:
                raise HTTPException(
                    status_code=400,
                    detail=f"where column '{column_name}' is not among the returned columns",
                )
            positions.append((position, expected))

        def predicate(row: list[str | None]) -> bool:
            return all(row[position] == expected for position, expected in positions)

        rows: list[list[Any]] = db.select(
            name,
            columns=request.columns,
            filter=predicate if positions else None,
            order_by=request.order_by,
        )

        projected = [
            schema.columns[index] if index is not None else None
            for index in query_engine.project(schema.columns, request.columns)
        ]
        if request.typed:
            rows = [row_codec.decode_row(projected, row) for row in rows]

        return SelectResponse(
            columns=[c.name if c is not None else None for c in projected],
            rows=rows,
            count=len(rows),
        )

    @app.post(
        "/transaction/{action}", response_model=MessageResponse, tags=["Transactions"]
    )
    async def transaction(action: TransactionAction) -> MessageResponse:
        if action is TransactionAction.BEGIN:
            db.begin_transaction()
            return MessageResponse(message="OK: Transaction started")
        if action is TransactionAction.COMMIT:
            db.commit_transaction()
            return MessageResponse(message="OK: Transaction committed")
        db.rollback_transaction()
        return MessageResponse(message="OK: Transaction rolled back")

    @app.delete("/database", response_model=MessageResponse, tags=["Database"])
    async def drop_database() -> MessageResponse:
        db.drop_database()
        return MessageResponse(message="OK: Database dropped")

    return app


def _describe(db: TextDatabase, name: str) -> TableResponse:
    schema = db.describe_table(name)
    return TableResponse(
        name=schema.name,
        columns=[ColumnModel(name=c.name, type=c.type.name.capitalize()) for c in schema.columns],
    )


def run_server(
    db: TextDatabase,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        db: The database.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(db)
    logger.info("rest_api_starting", host=host, port=port, database=str(db.path))
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    """Serve the database configured through TEXT_DB_* environment variables."""
    from text_db.infrastructure import get_config, setup_logging, setup_metrics, setup_tracing

    config = get_config()
    setup_logging(config.observability.log_level, config.observability.log_format)
    setup_tracing(config.observability.otel_service_name, config.observability.otel_endpoint)
    setup_metrics(config.server.metrics_port)

    with TextDatabase(config=config) as db:
        run_server(db, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
