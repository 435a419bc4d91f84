from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Stored record ---

class Booking(BaseModel):
    id: int
    name: str
    email: str
    event: str
    phone: Optional[str] = None
    seats: int = 1
    createdAt: datetime
    updatedAt: datetime

    def to_json(self) -> Dict[str, Any]:
        # phone is left out entirely when the booking has none
        return self.model_dump(mode="json", exclude_none=True)


# --- Incoming payloads ---

class BookingCreate(BaseModel):
    # Required fields are checked by the store so that a missing field yields
    # the same {"error": ...} body as an empty one.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    event: Optional[str] = None
    phone: Optional[str] = None
    seats: Optional[int] = None

    @field_validator("seats", mode="before")
    @classmethod
    def blank_seats_default(cls, value):
        # "" means "not given" and falls back to the default seat count
        return None if value == "" else value


class BookingUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    use ``model_fields_set`` to tell an explicit null from an omitted field.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    event: Optional[str] = None
    phone: Optional[str] = None
    seats: Optional[int] = None

    @field_validator("seats", mode="before")
    @classmethod
    def blank_seats_as_null(cls, value):
        return None if value == "" else value

    def present_fields(self) -> Dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}


# --- Outgoing envelopes ---

class BookingPage(BaseModel):
    count: int
    bookings: List[Booking] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {"count": self.count, "bookings": [b.to_json() for b in self.bookings]}
