"""
Service / facade layer.

This module implements validation rules before any DB interaction. It
is free of SQL; it calls `EventRepo` to perform database operations.
All HTTP handlers go through this service.

Key responsibilities:
- reject empty identifiers and descriptions with field-tagged errors
- parse `YYYY-MM-DD` date strings strictly
- assign a fresh `event_id` on create
- wrap storage failures as `BusinessError`
"""

import re
import uuid
from datetime import date, datetime
from typing import List

from errors import BusinessError, StorageError, ValidationError
from models import Event, EventIn
from repo_events import EventRepo

DATE_FORMAT = "%Y-%m-%d"
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

CANT_BE_EMPTY = "can't be empty"
BAD_DATE = "format must be YYYY-MM-DD"


def parse_date(value: str) -> date:
    """Parse `YYYY-MM-DD`. Raises `ValidationError` on field `date`."""

    if not DATE_RE.fullmatch(value):
        raise ValidationError("date", BAD_DATE)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError("date", BAD_DATE) from None


def _require(value: str, field: str, message: str = CANT_BE_EMPTY) -> None:
    if not value or not value.strip():
        raise ValidationError(field, message)


class EventService:
    """Validation + delegation to the repository.

    Example usage:
        repo = EventRepo(pool)
        svc = EventService(repo)
        event_id = svc.create_event(EventIn(user_id="u1", event="standup", date="2025-09-29"))
    """

    def __init__(self, repo: EventRepo):
        self.repo = repo

    def create_event(self, data: EventIn) -> str:
        """Validate and store a new event. Returns the generated `event_id`.

        Raises:
        - `ValidationError` for empty `user_id`/`event` or a bad `date`
        - `BusinessError` if the insert fails
        """

        _require(data.user_id, "user_id")
        _require(data.event, "event")
        day = parse_date(data.date)

        event_id = str(uuid.uuid4())
        event = Event(user_id=data.user_id, event_id=event_id, event=data.event, date=day)
        try:
            self.repo.create_event(event)
        except StorageError as e:
            raise BusinessError(str(e)) from e
        return event_id

    def update_event(self, data: EventIn) -> None:
        """Overwrite an existing event.

        An empty `event` text is accepted here; only create rejects it.

        Raises:
        - `ValidationError` for empty `event_id`/`user_id` or a bad `date`
        - `NotFoundError` if no event has that `event_id`
        - `BusinessError` if the update fails
        """

        _require(data.event_id, "event_id", "event id can't be empty")
        _require(data.user_id, "user_id", "user id can't be empty")
        day = parse_date(data.date)

        event = Event(user_id=data.user_id, event_id=data.event_id, event=data.event, date=day)
        try:
            self.repo.update_event(event)
        except StorageError as e:
            raise BusinessError(str(e)) from e

    def delete_event(self, event_id: str) -> None:
        _require(event_id, "event_id", "event id can't be empty")
        try:
            self.repo.delete_event(event_id)
        except StorageError as e:
            raise BusinessError(str(e)) from e

    def get_events_for_day(self, user_id: str, date_str: str) -> List[Event]:
        day = self._check_query(user_id, date_str)
        return self._list(self.repo.get_events_for_day, user_id, day)

    def get_events_for_week(self, user_id: str, date_str: str) -> List[Event]:
        day = self._check_query(user_id, date_str)
        return self._list(self.repo.get_events_for_week, user_id, day)

    def get_events_for_month(self, user_id: str, date_str: str) -> List[Event]:
        day = self._check_query(user_id, date_str)
        return self._list(self.repo.get_events_for_month, user_id, day)

    def health_check(self) -> None:
        """Perform a lightweight DB ping via the repository."""

        try:
            self.repo.ping()
        except StorageError as e:
            raise BusinessError(str(e)) from e

    def _check_query(self, user_id: str, date_str: str) -> date:
        _require(user_id, "user_id")
        _require(date_str, "date")
        return parse_date(date_str)

    def _list(self, fetch, user_id: str, day: date) -> List[Event]:
        try:
            events = fetch(user_id, day)
        except StorageError as e:
            raise BusinessError(str(e)) from e
        return events or []
