"""Use cases for managing reservations and the hold queue."""

from .cancel_reservation import cancel_reservation
from .create_reservation import create_reservation
from .fulfill_reservation import fulfill_reservation
from .list_reservations import ReservationPage, get_reservation, list_user_reservations
from .positions import compact_queue
from .queue import (
    assign_next_in_queue,
    expire_reservations,
    try_assign_next_in_queue,
)

__all__ = [
    "ReservationPage",
    "assign_next_in_queue",
    "cancel_reservation",
    "compact_queue",
    "create_reservation",
    "expire_reservations",
    "fulfill_reservation",
    "get_reservation",
    "list_user_reservations",
    "try_assign_next_in_queue",
]
