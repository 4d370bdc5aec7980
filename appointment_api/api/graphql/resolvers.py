"""
Query and mutation resolvers.

Resolvers stay thin: they read the per-request context, hand the caller
to the services (which enforce authentication and ownership), and map the
returned rows to GraphQL types.
"""
import strawberry
from pydantic import BaseModel, ValidationError
from strawberry.types import Info
from typing import Optional, Type

from .context import RequestContext
from .types import (
    Appointment, AppointmentInput, AppointmentUpdateInput, AuthPayload, User
)
from ...core.exceptions import InvalidInput, format_validation_error
from ...schemas.auth import UserLogin, UserRegister
from ...schemas.appointment import AppointmentCreate, AppointmentUpdate
from ...services.appointment_service import require_admin, require_user

Context = Info[RequestContext, None]


def _parse(model: Type[BaseModel], data: dict) -> BaseModel:
    try:
        return model(**data)
    except ValidationError as exc:
        raise InvalidInput(format_validation_error(exc.errors())) from exc


def _supplied(input: AppointmentUpdateInput) -> dict:
    return {
        name: value
        for name, value in vars(input).items()
        if value is not strawberry.UNSET
    }


# Queries

def me(info: Context) -> Optional[User]:
    return User.from_model(info.context.user)


def users(info: Context) -> list[User]:
    require_admin(info.context.user)
    return [User.from_model(user) for user in info.context.auth.list_users()]


def appointments(info: Context) -> list[Appointment]:
    rows = info.context.appointments.list_visible(info.context.user)
    return [Appointment.from_model(row) for row in rows]


def appointment(info: Context, id: strawberry.ID) -> Optional[Appointment]:
    row = info.context.appointments.get(info.context.user, id)
    return Appointment.from_model(row)


def my_appointments(info: Context) -> list[Appointment]:
    rows = info.context.appointments.list_owned(info.context.user)
    return [Appointment.from_model(row) for row in rows]


# Mutations

def register(
    info: Context, email: str, password: str, name: Optional[str] = None
) -> AuthPayload:
    data = _parse(UserRegister, {"email": email, "password": password, "name": name})
    token, user = info.context.auth.register_user(data)
    return AuthPayload(token=token, user=User.from_model(user))


def login(info: Context, email: str, password: str) -> AuthPayload:
    data = _parse(UserLogin, {"email": email, "password": password})
    token, user = info.context.auth.authenticate_user(data)
    return AuthPayload(token=token, user=User.from_model(user))


def create_appointment(info: Context, input: AppointmentInput) -> Appointment:
    require_user(info.context.user)
    data = _parse(AppointmentCreate, vars(input))
    row = info.context.appointments.create(info.context.user, data)
    return Appointment.from_model(row)


def update_appointment(
    info: Context, id: strawberry.ID, input: AppointmentUpdateInput
) -> Appointment:
    require_user(info.context.user)
    data = _parse(AppointmentUpdate, _supplied(input))
    row = info.context.appointments.update(info.context.user, id, data)
    return Appointment.from_model(row)


def delete_appointment(info: Context, id: strawberry.ID) -> bool:
    return info.context.appointments.delete(info.context.user, id)
