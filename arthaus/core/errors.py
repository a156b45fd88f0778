"""Catalog error taxonomy and its HTTP mapping.

Services raise these synchronously at the offending call. The API layer turns
them into JSON error responses; nothing in the core catches them.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from arthaus.shared.utils.response import ErrorResponse

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog errors."""

    code = "CATALOG_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, **self.context}


class ValidationError(CatalogError):
    """Malformed input: empty title, negative price, bad image payload..."""

    code = "VALIDATION_ERROR"
    status_code = 422  # Unprocessable Content


class NotFoundError(CatalogError):
    """An operation referenced an id that is not in the store."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} {entity_id} not found", entity=entity, id=entity_id)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    body = ErrorResponse(message=exc.message, data=exc.to_dict())
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def register_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(CatalogError, catalog_error_handler)
