"""
HTTP layer.

`create_app()` builds the FastAPI application around an `EventService`.
Routes stay thin: decode input, call the service, wrap the result.
Errors are turned into responses in two places only:
- `CalendarError` subclasses are mapped by `ErrorKind` in one handler
- anything else is caught by the request middleware and becomes a 500
"""

import logging
import time

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errors import CalendarError, ErrorKind, InternalError, ValidationError
from models import CreateEventOut, ErrorOut, EventDeleteIn, EventIn, EventsOut, ResultOut
from service_events import EventService

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
    ErrorKind.BUSINESS: 503,
}


def error_response(err: CalendarError) -> JSONResponse:
    body = ErrorOut(error=err.kind.value, message=str(err))
    if isinstance(err, ValidationError):
        body.details = {err.field: err.message}
    return JSONResponse(status_code=STATUS_BY_KIND[err.kind], content=body.model_dump(exclude_none=True))


def build_router(svc: EventService) -> APIRouter:
    router = APIRouter(prefix="/api/v1")

    @router.post("/create_event", response_model=CreateEventOut)
    def create_event(body: EventIn):
        event_id = svc.create_event(body)
        return CreateEventOut(result="Event created successfully", id=event_id)

    @router.post("/update_event", response_model=ResultOut)
    def update_event(body: EventIn):
        svc.update_event(body)
        return ResultOut(result="Event updated successfully")

    @router.post("/delete_event", response_model=ResultOut)
    def delete_event(body: EventDeleteIn):
        svc.delete_event(body.event_id)
        return ResultOut(result="Event deleted successfully")

    @router.get("/events_for_day", response_model=EventsOut)
    def events_for_day(user_id: str = Query(""), date: str = Query("")):
        return EventsOut(events=svc.get_events_for_day(user_id, date))

    @router.get("/events_for_week", response_model=EventsOut)
    def events_for_week(user_id: str = Query(""), date: str = Query("")):
        return EventsOut(events=svc.get_events_for_week(user_id, date))

    @router.get("/events_for_month", response_model=EventsOut)
    def events_for_month(user_id: str = Query(""), date: str = Query("")):
        return EventsOut(events=svc.get_events_for_month(user_id, date))

    return router


def create_app(svc: EventService) -> FastAPI:
    app = FastAPI(title="Calendar Events")

    @app.middleware("http")
    async def log_and_contain(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Internal server error: %s %s", request.method, request.url.path)
            response = error_response(InternalError())
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.exception_handler(CalendarError)
    async def handle_calendar_error(request: Request, exc: CalendarError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        logger.debug("rejected request body: %s", exc.errors())
        return error_response(ValidationError("request_body", "invalid JSON format"))

    @app.get("/health")
    def health():
        svc.health_check()
        return {"ok": True}

    app.include_router(build_router(svc))
    return app
