from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status

from app.models.booking import BookingCreate, BookingUpdate
from app.services.booking_store import BookingStore

router = APIRouter()

def get_store(request: Request) -> BookingStore:
    """The store is owned by the application instance (see create_app)."""
    return request.app.state.store

@router.get("/bookings")
def list_bookings(
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    store: BookingStore = Depends(get_store),
) -> Dict[str, Any]:
    return store.list_bookings(skip=skip, limit=limit).to_json()

@router.post("/bookings", status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: Optional[BookingCreate] = None,
    store: BookingStore = Depends(get_store),
) -> Dict[str, Any]:
    booking = store.create(payload or BookingCreate())
    return booking.to_json()

@router.get("/bookings/{booking_id}")
def get_booking(booking_id: str, store: BookingStore = Depends(get_store)) -> Dict[str, Any]:
    return store.get(booking_id).to_json()

@router.put("/bookings/{booking_id}")
def update_booking(
    booking_id: str,
    patch: Optional[BookingUpdate] = None,
    store: BookingStore = Depends(get_store),
) -> Dict[str, Any]:
    booking = store.update(booking_id, patch or BookingUpdate())
    return {"message": "booking updated", "booking": booking.to_json()}

@router.delete("/bookings/{booking_id}")
def cancel_booking(booking_id: str, store: BookingStore = Depends(get_store)) -> Dict[str, Any]:
    deleted = store.delete(booking_id)
    return {"message": "booking cancelled", "deleted": deleted.to_json()}

@router.delete("/bookings")
def clear_bookings(store: BookingStore = Depends(get_store)) -> Dict[str, Any]:
    count = store.clear()
    return {"message": f"cleared {count} bookings"}
