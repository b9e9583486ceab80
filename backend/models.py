"""
Pydantic models used across the backend.

Input shapes keep every field as a plain string defaulting to "" so that
missing or empty values reach `EventService`, which reports them as
field-tagged validation errors. `Event` is the record shape returned by
`EventRepo` and serialized in list responses.
"""

from datetime import date as Date
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class EventIn(BaseModel):
        """Create/update request body.

        Fields:
        - `user_id`: identifier of the owning user.
        - `event_id`: ignored on create (the service assigns one), required on update.
        - `event`: free-text description.
        - `date`: calendar day as `YYYY-MM-DD`, validated by `EventService`.
        """

        user_id: str = ""
        event_id: str = ""
        event: str = ""
        date: str = ""


class EventDeleteIn(BaseModel):
        """Delete request body. Older clients send `id`; `event_id` is also accepted."""

        event_id: str = Field(default="", validation_alias=AliasChoices("id", "event_id"))


class Event(BaseModel):
        """A stored calendar event."""

        user_id: str
        event_id: str
        event: str
        date: Date


class CreateEventOut(BaseModel):
        result: str
        id: str


class ResultOut(BaseModel):
        result: str


class EventsOut(BaseModel):
        events: List[Event] = Field(default_factory=list)


class ErrorOut(BaseModel):
        error: str
        message: str
        details: Optional[Dict[str, str]] = None
