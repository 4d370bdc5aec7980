from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..models.user import User
from ..models.appointment import Appointment, AppointmentStatus
from ..core.exceptions import (
    AccessDenied, AuthenticationRequired, InvalidTimeRange, NotFound
)
from ..schemas.appointment import AppointmentCreate, AppointmentUpdate
from ..utils.timezone import utcnow

# Columns that reject NULL; an explicit null in an update leaves them unchanged
_REQUIRED_FIELDS = {"title", "start_time", "end_time", "status"}

# Largest value an INTEGER primary key can hold
_MAX_ID = 2**31 - 1


def require_user(user: Optional[User]) -> User:
    if user is None:
        raise AuthenticationRequired()
    return user


def require_admin(user: Optional[User]) -> User:
    user = require_user(user)
    if not user.is_admin:
        raise AccessDenied()
    return user


class AppointmentService:
    """Appointment lifecycle with owner-or-admin access rules."""

    def __init__(self, db: Session, logger: logging.Logger):
        self.db = db
        self.logger = logger

    def list_visible(self, user: Optional[User]) -> list[Appointment]:
        """All appointments for admins, otherwise only the caller's own."""
        user = require_user(user)
        query = self.db.query(Appointment)
        if not user.is_admin:
            query = query.filter(Appointment.user_id == user.id)
        return query.order_by(Appointment.start_time.asc(), Appointment.id.asc()).all()

    def list_owned(self, user: Optional[User]) -> list[Appointment]:
        user = require_user(user)
        return (
            self.db.query(Appointment)
            .filter(Appointment.user_id == user.id)
            .order_by(Appointment.start_time.asc(), Appointment.id.asc())
            .all()
        )

    def get(self, user: Optional[User], appointment_id) -> Appointment:
        user = require_user(user)
        appointment = self._find(appointment_id)
        if appointment is None:
            raise NotFound("Appointment not found")
        if not user.is_admin and appointment.user_id != user.id:
            self.logger.warning(
                "User %s denied access to appointment %s", user.id, appointment.id
            )
            raise AccessDenied()
        return appointment

    def create(self, user: Optional[User], data: AppointmentCreate) -> Appointment:
        user = require_user(user)
        appointment = Appointment(
            title=data.title,
            description=data.description,
            start_time=data.start_time,
            end_time=data.end_time,
            user_id=user.id,
            status=data.status or AppointmentStatus.PENDING,
        )
        self.db.add(appointment)
        self._commit()
        self.db.refresh(appointment)

        self.logger.info("User %s created appointment %s", user.id, appointment.id)
        return appointment

    def update(self, user: Optional[User], appointment_id, data: AppointmentUpdate) -> Appointment:
        appointment = self.get(user, appointment_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            if field == "description" and value is None:
                value = ""
            setattr(appointment, field, value)
        appointment.updated_at = utcnow()

        self._commit()
        self.db.refresh(appointment)

        self.logger.info("User %s updated appointment %s", user.id, appointment.id)
        return appointment

    def delete(self, user: Optional[User], appointment_id) -> bool:
        appointment = self.get(user, appointment_id)
        self.db.delete(appointment)
        self.db.commit()

        self.logger.info("User %s deleted appointment %s", user.id, appointment_id)
        return True

    def _find(self, appointment_id) -> Optional[Appointment]:
        try:
            key = int(appointment_id)
        except (TypeError, ValueError):
            return None
        if key < 1 or key > _MAX_ID:
            return None
        return self.db.get(Appointment, key)

    def _commit(self):
        try:
            self.db.commit()
        except InvalidTimeRange:
            self.db.rollback()
            self.logger.warning("Rejected appointment with end time not after start time")
            raise
