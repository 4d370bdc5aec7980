from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Enum as SQLEnum, event
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base
from ..core.exceptions import InvalidTimeRange
from ..utils.timezone import utcnow

class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Owner
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Appointment details
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    status = Column(SQLEnum(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING)

    # Tracking
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="appointments")

    def validate_time_range(self):
        """Raise InvalidTimeRange unless end_time is strictly after start_time."""
        if self.start_time is None or self.end_time is None:
            return
        if self.end_time <= self.start_time:
            raise InvalidTimeRange()

    def __repr__(self):
        return f"<Appointment(id={self.id}, user_id={self.user_id}, title='{self.title}', start='{self.start_time}')>"

# Checked on every flush, for both new and modified rows
@event.listens_for(Appointment, "before_insert")
@event.listens_for(Appointment, "before_update")
def _check_time_range(mapper, connection, target):
    target.validate_time_range()
