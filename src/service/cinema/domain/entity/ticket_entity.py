from typing import Optional

import attrs


@attrs.define(frozen=True)
class TicketEntity:
    showtime_id: int
    seat_number: int
    user_id: str
    booking_id: str
    id: Optional[int] = None
