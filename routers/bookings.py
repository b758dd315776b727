import logging

from fastapi import APIRouter, Depends
from pymongo.collection import Collection

from crud import envelope, find_documents, get_or_404, insert_document, parse_object_id, utc_now
from database import collection
from schemas import BookingCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["booking"])
bookings = collection("booking")
sessions = collection("session")


@router.post("/book-session", status_code=201)
def book_session(
    payload: BookingCreate,
    col: Collection = Depends(bookings),
    session_col: Collection = Depends(sessions),
):
    # Session lookup and booking insert are two independent writes, no transaction
    get_or_404(session_col, parse_object_id(payload.session_id, "session"), "session")
    created = insert_document(col, {**payload.model_dump(), "status": "booked", "booked_at": utc_now()})
    logger.info("Booked session %s for %s", payload.session_id, payload.student_email)
    return envelope("Booking added successfully", created, inserted_id=created["id"])


@router.get("/book-session/{email}")
def bookings_for_student(email: str, col: Collection = Depends(bookings)):
    return envelope("Booked sessions fetched successfully.", find_documents(col, {"student_email": email}))
