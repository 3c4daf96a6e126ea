from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id'), nullable=False, index=True
    )
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    booking_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)

    __table_args__ = (
        UniqueConstraint('showtime_id', 'seat_number', name='uq_ticket_showtime_seat'),
    )
