import re
import threading
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import InvalidIdError, NotFoundError, ValidationError
from app.core.logger import logger
from app.models.booking import Booking, BookingCreate, BookingPage, BookingUpdate

# Permissive on purpose: local@domain.tld, no whitespace, a dot after the @
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DIGITS_PATTERN = re.compile(r"[0-9]+")

REQUIRED_FIELDS = ("name", "email", "event")
DEFAULT_SEATS = 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None


def parse_booking_id(raw: Union[int, str]) -> int:
    """Parse an id path segment, raising InvalidIdError for anything but an integer."""
    if isinstance(raw, bool):
        raise InvalidIdError()
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not _INT_PATTERN.fullmatch(text):
        raise InvalidIdError()
    try:
        return int(text)
    except ValueError:
        # past the interpreter's int string length limit
        raise InvalidIdError()


def parse_non_negative(raw: Union[int, str, None]) -> Optional[int]:
    """Pagination helper: a non-negative integer, or None when the value should be ignored."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    text = str(raw).strip()
    if not _DIGITS_PATTERN.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _validation_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if isinstance(part, str))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "invalid request")


class BookingStore:
    """
    In-memory, insertion-ordered collection of bookings.

    Every public operation holds a single lock over the list and the id
    counter; FastAPI runs sync handlers in a thread pool. Records handed
    out are copies, so callers cannot mutate stored state.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._lock = threading.RLock()
        self._bookings: List[Booking] = []
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)

    def list_bookings(self, skip: Union[int, str, None] = None, limit: Union[int, str, None] = None) -> BookingPage:
        start = parse_non_negative(skip) or 0
        cap = parse_non_negative(limit)

        with self._lock:
            result = self._bookings[start:]
            if cap is not None:
                result = result[:cap]
            bookings = [b.model_copy() for b in result]

        return BookingPage(count=len(bookings), bookings=bookings)

    def create(self, payload: Union[BookingCreate, Mapping[str, Any]]) -> Booking:
        if not isinstance(payload, BookingCreate):
            try:
                payload = BookingCreate.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(_validation_message(e))

        if not all(getattr(payload, field) for field in REQUIRED_FIELDS):
            raise ValidationError("name, email and event are required")
        if not is_valid_email(payload.email):
            raise ValidationError("invalid email")

        seats = DEFAULT_SEATS if payload.seats is None else payload.seats

        with self._lock:
            now = self._clock()
            booking = Booking(
                id=self._next_id,
                name=payload.name,
                email=payload.email,
                event=payload.event,
                phone=payload.phone or None,
                seats=seats,
                createdAt=now,
                updatedAt=now,
            )
            self._next_id += 1
            self._bookings.append(booking)

        logger.info(f"Booking {booking.id} created for '{booking.event}' ({booking.seats} seat(s))")
        return booking.model_copy()

    def get(self, booking_id: Union[int, str]) -> Booking:
        booking_id = parse_booking_id(booking_id)
        with self._lock:
            return self._find(booking_id).model_copy()

    def update(self, booking_id: Union[int, str], patch: Union[BookingUpdate, Mapping[str, Any]]) -> Booking:
        booking_id = parse_booking_id(booking_id)
        if not isinstance(patch, BookingUpdate):
            try:
                patch = BookingUpdate.model_validate(patch)
            except PydanticValidationError as e:
                raise ValidationError(_validation_message(e))

        changes = patch.present_fields()

        with self._lock:
            booking = self._find(booking_id)
            self._check_changes(changes)

            for field, value in changes.items():
                if field == "phone":
                    value = value or None
                setattr(booking, field, value)

            now = self._clock()
            # keep createdAt <= updatedAt even if the clock steps backwards
            booking.updatedAt = max(now, booking.createdAt)
            updated = booking.model_copy()

        logger.info(f"Booking {booking_id} updated ({', '.join(sorted(changes)) or 'no fields'})")
        return updated

    def delete(self, booking_id: Union[int, str]) -> Booking:
        booking_id = parse_booking_id(booking_id)
        with self._lock:
            booking = self._find(booking_id)
            self._bookings.remove(booking)

        logger.info(f"Booking {booking_id} cancelled")
        return booking

    def clear(self) -> int:
        with self._lock:
            count = len(self._bookings)
            self._bookings = []
            self._next_id = 1

        logger.info(f"Cleared {count} bookings")
        return count

    def _find(self, booking_id: int) -> Booking:
        for booking in self._bookings:
            if booking.id == booking_id:
                return booking
        raise NotFoundError()

    @staticmethod
    def _check_changes(changes: Mapping[str, Any]):
        for field in REQUIRED_FIELDS:
            if field in changes and not changes[field]:
                raise ValidationError(f"{field} cannot be empty")
        if "email" in changes and not is_valid_email(changes["email"]):
            raise ValidationError("invalid email")
        if "seats" in changes and (changes["seats"] is None or changes["seats"] < 0):
            raise ValidationError("seats must be a non-negative integer")
