from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    locations: Mapped[list["Location"]] = relationship(
        "Location", back_populates="owner", cascade="all, delete-orphan"
    )
    sleep_entries: Mapped[list["SleepEntry"]] = relationship(
        "SleepEntry", back_populates="owner", cascade="all, delete-orphan"
    )
