"""FastAPI integration for PersonSpine.

Provides the synchronous ingestion path:
- Person create (enrich + persist) and read/update/delete by id
- GraphQL endpoint mirroring the REST operations
- Health check

Errors use the body shape ``{"error": "<message>"}``.

Example:
    >>> from personspine.api.fastapi import create_app
    >>> from personspine.service import PersonService
    >>> from personspine.storage.memory import MemoryPersonStore
    >>>
    >>> service = PersonService(store=MemoryPersonStore(), coordinator=coordinator)
    >>> app = create_app(service)
    >>>
    >>> # Run with: uvicorn --factory personspine.api.fastapi:create_app_from_settings
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from personspine.api.graphql import create_graphql_router
from personspine.core.exceptions import AttributeLookupError, DecodeError, PersistenceError
from personspine.ingest.decode import decode_model, decode_person
from personspine.models.person import PersonUpdate

if TYPE_CHECKING:
    from personspine.core.runtime import Runtime
    from personspine.service import PersonService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def create_app(
    service: PersonService,
    *,
    runtime: Runtime | None = None,
    title: str = "PersonSpine API",
    version: str = "0.1.0",
    description: str = "Person enrichment service",
) -> FastAPI:
    """Create a FastAPI application for PersonSpine.

    Args:
        service: Person service backing every endpoint.
        runtime: Optional runtime started and stopped with the app
            (backends and the queue consumer).
        title: API title for OpenAPI docs.
        version: API version.
        description: API description for docs.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if runtime is not None:
            await runtime.start()
        try:
            yield
        finally:
            if runtime is not None:
                await runtime.stop()

    app = FastAPI(
        title=title,
        version=version,
        description=description,
        lifespan=lifespan,
    )

    app.state.service = service
    app.state.runtime = runtime

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.get("/")
    async def root() -> dict[str, Any]:
        """API root with basic info."""
        return {
            "name": title,
            "version": version,
            "description": description,
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    # =========================================================================
    # People Endpoints
    # =========================================================================

    @app.post("/api/people", status_code=201)
    async def create_person(request: Request) -> Any:
        """Enrich and store a person."""
        try:
            raw = decode_person(await request.body())
        except DecodeError as e:
            logger.info(f"Rejected person body: {e}")
            return _error(400, "Invalid JSON format")

        try:
            person = await service.create_person(raw)
        except AttributeLookupError as e:
            logger.warning(f"Error enriching person data: {e}")
            return _error(500, "Error enriching person data")
        except PersistenceError as e:
            logger.error(f"Error creating person: {e}")
            return _error(500, "Error creating person")

        return person.model_dump(mode="json")

    @app.get("/api/people/{person_id}")
    async def get_person(person_id: str) -> Any:
        """Get a person by id."""
        pid = _parse_id(person_id)
        if pid is None:
            return _error(400, "Invalid person ID")

        try:
            person = await service.get_person(pid)
        except PersistenceError as e:
            logger.error(f"Error fetching person {pid}: {e}")
            return _error(500, "Error fetching person")

        if person is None:
            return _error(404, "Person not found")
        return person.model_dump(mode="json")

    @app.put("/api/people/{person_id}")
    async def update_person(person_id: str, request: Request) -> Any:
        """Replace all fields of a person. No enrichment is performed."""
        pid = _parse_id(person_id)
        if pid is None:
            return _error(400, "Invalid person ID")

        try:
            update = decode_model(await request.body(), PersonUpdate)
        except DecodeError as e:
            logger.info(f"Rejected update body for person {pid}: {e}")
            return _error(400, "Invalid JSON format")

        try:
            person = await service.update_person(pid, update)
        except PersistenceError as e:
            logger.error(f"Error updating person {pid}: {e}")
            return _error(500, "Error updating person")

        if person is None:
            return _error(404, "Person not found")
        return person.model_dump(mode="json")

    @app.delete("/api/people/{person_id}")
    async def delete_person(person_id: str) -> Any:
        """Delete a person."""
        pid = _parse_id(person_id)
        if pid is None:
            return _error(400, "Invalid person ID")

        try:
            deleted = await service.delete_person(pid)
        except PersistenceError as e:
            logger.error(f"Error deleting person {pid}: {e}")
            return _error(500, "Error deleting person")

        if not deleted:
            return _error(404, "Person not found")
        return {"message": "Person deleted successfully"}

    # =========================================================================
    # GraphQL
    # =========================================================================

    app.include_router(create_graphql_router(service), prefix="/graphql")

    return app


def create_app_from_settings() -> FastAPI:
    """Build the runtime from environment settings and wrap it in an app.

    Usage: ``uvicorn --factory personspine.api.fastapi:create_app_from_settings``
    """
    from personspine.core.config import get_settings
    from personspine.core.runtime import Runtime

    runtime = Runtime.from_settings(get_settings())
    return create_app(runtime.service, runtime=runtime)
