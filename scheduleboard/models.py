from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from .database import Base


def utcnow() -> datetime:
    return datetime.utcnow()


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    initials = Column(String(4), nullable=False)  # compact column header, e.g. "AM"
    active = Column(Boolean, default=True, nullable=False)


class ActivityKind(Base):
    __tablename__ = "activity_kinds"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, index=True, nullable=False)  # stable key, e.g. "aula"
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False, default="#6b7280")  # #RRGGBB, presentation only


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM, same day, after start_time
    interval = Column(Integer, nullable=True)  # granularity in minutes
    is_base_slot = Column(Boolean, default=True, nullable=False)  # False for composite/custom ranges


class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint(
            "professional_id",
            "weekday",
            "start_time",
            "end_time",
            name="uq_assignment_professional_weekday_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Loose reference: no foreign key, professionals may be deleted independently
    professional_id = Column(Integer, nullable=False, index=True)
    weekday = Column(String(10), nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    # Loose reference to ActivityKind.code, resolved at read time
    activity_code = Column(String(50), nullable=False)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
