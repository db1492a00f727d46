"""ASGI application for Mealwheel."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Annotated, Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from mealwheel import __version__, metrics
from mealwheel.config import get_settings
from mealwheel.grocery.service import GroceryListError, GroceryListService
from mealwheel.logging_utils import configure_logging
from mealwheel.models.grocery import ClearResult, GroceryCheckResult, GroceryList
from mealwheel.server import deps

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("mealwheel.access")

ItemKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class GroceryCheckRequest(BaseModel):
    """Body of ``POST /grocery-list/checks``; accepts ``itemKey`` or ``item_key``."""

    item_key: ItemKey
    checked: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _observe(method: str, path: str, status_code: int, seconds: float) -> None:
    metrics.REQUEST_COUNT.labels(method=method, path=path, status=str(status_code)).inc()
    metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(seconds)


def _unavailable(exc: GroceryListError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


async def _trace_request(request: Request, call_next) -> Response:
    """Tag the request with an ``X-Request-ID``, then log and time it."""

    request_id = request.headers.get("X-Request-ID") or uuid4().hex
    request.state.request_id = request_id
    method, path = request.method, request.url.path
    started = perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception:
        elapsed = perf_counter() - started
        access_logger.exception(
            "%s %s failed after %.1fms", method, path, elapsed * 1000, extra={"request_id": request_id}
        )
        _observe(method, path, 500, elapsed)
        raise

    elapsed = perf_counter() - started
    response.headers.setdefault("X-Request-ID", request_id)
    access_logger.info(
        "%s %s -> %s in %.1fms",
        method,
        path,
        response.status_code,
        elapsed * 1000,
        extra={"request_id": request_id, "user_id": getattr(request.state, "user_id", None)},
    )
    _observe(method, path, response.status_code, elapsed)
    return response


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: list[Any] = jsonable_encoder(exc.errors(), custom_encoder={Exception: repr})
    logger.warning(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        errors,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": errors})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.api_token or ""])

    application = FastAPI(title="Mealwheel", version=__version__)
    if settings.log_requests:
        application.middleware("http")(_trace_request)
    application.add_exception_handler(RequestValidationError, _validation_error)

    @application.get("/health")
    def health_check() -> dict:
        return {"status": "ok", "service": "mealwheel", "version": __version__}

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @application.get(
        "/grocery-list",
        response_model=GroceryList,
        summary="Aggregated grocery list for the selected rotation weeks",
    )
    def grocery_list(
        weeks: Optional[str] = Query(default=None, description="Comma-separated weeks, e.g. 1,3"),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_current_user_id),
        service: GroceryListService = Depends(deps.get_grocery_service),
    ) -> GroceryList:
        try:
            return service.get_grocery_list(user_id, weeks)
        except GroceryListError as exc:
            raise _unavailable(exc) from exc

    @application.post(
        "/grocery-list/checks",
        response_model=GroceryCheckResult,
        summary="Check or uncheck a grocery row",
    )
    def grocery_check(
        payload: GroceryCheckRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_current_user_id),
        service: GroceryListService = Depends(deps.get_grocery_service),
    ) -> GroceryCheckResult:
        try:
            return service.set_grocery_check(user_id, payload.item_key, payload.checked)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        except GroceryListError as exc:
            raise _unavailable(exc) from exc

    @application.delete(
        "/grocery-list/checks",
        response_model=ClearResult,
        summary="Clear every grocery check for the user",
    )
    def grocery_checks_clear(
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_current_user_id),
        service: GroceryListService = Depends(deps.get_grocery_service),
    ) -> ClearResult:
        try:
            return service.clear_grocery_checks(user_id)
        except GroceryListError as exc:
            raise _unavailable(exc) from exc

    logger.debug("Application created (log level %s)", settings.log_level)
    return application


app = create_app()

__all__ = ["app", "create_app"]
