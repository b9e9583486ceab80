"""
Repository: SQL operations for `events`.

This file contains only DB interaction code. It maps `Event` models to
SQL parameters and converts DB rows back to `Event` records. Keep
business rules out of this module.

Important notes:
- SQL strings are simple and use positional parameters for psycopg.
- The `date` column is a TIMESTAMP; days are stored at midnight and
  range queries compare against midnight boundaries.
- Every write commits before returning; callers expect the change to be
  durable after the method returns.
- Any `psycopg.Error` (pool timeouts included) is logged and re-raised
  as `StorageError`.
"""

import calendar
import logging
from datetime import date, datetime, time, timedelta
from typing import List

import psycopg
from psycopg_pool import ConnectionPool

from errors import NotFoundError, StorageError
from models import Event

logger = logging.getLogger(__name__)

SELECT_EVENTS = "SELECT event_id, user_id, event, date FROM events "


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def add_one_month(day: date) -> date:
    """Return the same day next month, clamped to that month's last day.

    Jan 31 -> Feb 28 (29 in leap years), Mar 31 -> Apr 30, Dec 15 -> Jan 15.
    """

    year, month = (day.year + 1, 1) if day.month == 12 else (day.year, day.month + 1)
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def end_bound(start: datetime, span: timedelta) -> datetime:
    """`start + span`, or `datetime.max` past the end of the calendar."""

    try:
        return start + span
    except OverflowError:
        return datetime.max


def month_end(day: date) -> datetime:
    """Exclusive upper bound of the month window starting at `day`.

    Windows starting in December 9999 run to `datetime.max`.
    """

    try:
        return start_of_day(add_one_month(day))
    except ValueError:
        return datetime.max


class EventRepo:
    """DB access only. No business logic here.

    Responsibilities:
    - Map `Event` -> SQL parameters
    - Execute queries and return `Event` objects
    - Report zero-row updates/deletes as `NotFoundError`
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def create_event(self, event: Event) -> None:
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "INSERT INTO events (event_id, user_id, event, date) VALUES (%s, %s, %s, %s)",
                        (event.event_id, event.user_id, event.event, start_of_day(event.date)),
                    )
                conn.commit()
        except psycopg.Error as e:
            logger.error("error creating event: %s", e)
            raise StorageError(f"error creating event: {e}") from e

    def get_events_for_day(self, user_id: str, day: date) -> List[Event]:
        """Events of `user_id` dated exactly `day`."""

        start = start_of_day(day)
        return self._fetch(
            "for day",
            "WHERE user_id=%s AND date >= %s AND date < %s",
            (user_id, start, end_bound(start, timedelta(days=1))),
        )

    def get_events_for_week(self, user_id: str, day: date) -> List[Event]:
        """Events in the 7-day window starting at `day`, through 23:59:59 of the 7th day."""

        start = start_of_day(day)
        end = end_bound(start, timedelta(days=6, hours=23, minutes=59, seconds=59))
        return self._fetch(
            "for week",
            "WHERE user_id=%s AND date BETWEEN %s AND %s",
            (user_id, start, end),
        )

    def get_events_for_month(self, user_id: str, day: date) -> List[Event]:
        """Events in `[day, add_one_month(day))`."""

        return self._fetch(
            "for month",
            "WHERE user_id=%s AND date >= %s AND date < %s",
            (user_id, start_of_day(day), month_end(day)),
        )

    def delete_event(self, event_id: str) -> None:
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM events WHERE event_id=%s", (event_id,))
                    deleted = cur.rowcount
                conn.commit()
        except psycopg.Error as e:
            logger.error("error deleting event: %s", e)
            raise StorageError(f"error deleting event: {e}") from e
        if deleted == 0:
            raise NotFoundError("event", event_id)

    def update_event(self, event: Event) -> None:
        """Overwrite `user_id`, `event` and `date` of the row keyed by `event.event_id`."""

        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "UPDATE events SET user_id=%s, event=%s, date=%s WHERE event_id=%s",
                        (event.user_id, event.event, start_of_day(event.date), event.event_id),
                    )
                    updated = cur.rowcount
                conn.commit()
        except psycopg.Error as e:
            logger.error("error updating event: %s", e)
            raise StorageError(f"error updating event: {e}") from e
        if updated == 0:
            raise NotFoundError("event", event.event_id)

    def ping(self) -> None:
        """Lightweight DB health check. Raises `StorageError` on failure."""

        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1;")
        except psycopg.Error as e:
            logger.error("database ping failed: %s", e)
            raise StorageError(f"database ping failed: {e}") from e

    def _fetch(self, label: str, where: str, params: tuple) -> List[Event]:
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(SELECT_EVENTS + where + " ORDER BY date, event_id", params)
                    out: List[Event] = []
                    for r in cur.fetchall():
                        out.append(Event(
                            event_id=r[0],
                            user_id=r[1],
                            event=r[2],
                            date=r[3].date() if isinstance(r[3], datetime) else r[3],
                        ))
                    return out
        except psycopg.Error as e:
            logger.error("error getting events %s: %s", label, e)
            raise StorageError(f"error getting events {label}: {e}") from e
