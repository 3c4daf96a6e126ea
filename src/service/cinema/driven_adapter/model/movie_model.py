from typing import Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # lower(title); case-insensitive uniqueness enforced by the database
    title_key: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    genre: Mapped[str] = mapped_column(String(255), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    release_year: Mapped[int] = mapped_column(Integer, nullable=False)
