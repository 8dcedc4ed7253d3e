import uuid
from datetime import datetime, UTC

from sqlalchemy import DateTime, Float, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db


def _uuid() -> str:
    return str(uuid.uuid4())

def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


# ---------- Bookings ----------
class Booking(db.Model):
    __tablename__ = "car_schedules"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # локальное «настенное» время как ввёл пользователь: YYYY-MM-DDTHH:mm[:ss], без пересчёта поясов
    start_time: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    end_time: Mapped[str] = mapped_column(String(32), nullable=False)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_name": self.user_name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "purpose": self.purpose,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Booking {self.user_name} {self.start_time}>"


# ---------- Team ----------
class TeamMember(db.Model):
    __tablename__ = "team_members"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # lower(name): уникальность без учёта регистра
    name_key: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("name_key", name="uq_team_members_name_key"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<TeamMember {self.name}>"


# ---------- Settings ----------
class AppSetting(db.Model):
    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}


# ---------- Car location ----------
class CarLocation(db.Model):
    __tablename__ = "car_locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    saved_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_car_locations_created_at", "created_at"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "description": self.description,
            "saved_by": self.saved_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
