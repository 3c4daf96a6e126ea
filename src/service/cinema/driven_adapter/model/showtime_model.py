from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ShowtimeModel(Base):
    __tablename__ = 'showtime'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # No ORM relationship/cascade: children are deleted explicitly by id
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('movie.id'), nullable=False, index=True
    )
    theater: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        Index('ix_showtime_theater_window', 'theater', 'start_time', 'end_time'),
    )
