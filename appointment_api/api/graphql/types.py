import strawberry
from typing import Optional

from ...models.user import User as UserModel
from ...models.appointment import Appointment as AppointmentModel
from ...utils.timezone import isoformat_z


@strawberry.type
class User:
    id: strawberry.ID
    email: str
    name: Optional[str]
    role: Optional[str]
    created_at: Optional[str]

    @classmethod
    def from_model(cls, user: Optional[UserModel]) -> Optional["User"]:
        if user is None:
            return None
        return cls(
            id=strawberry.ID(str(user.id)),
            email=user.email,
            name=user.name,
            role=user.role.value if user.role else None,
            created_at=isoformat_z(user.created_at),
        )


@strawberry.type
class Appointment:
    id: strawberry.ID
    title: str
    description: Optional[str]
    start_time: str
    end_time: str
    user_id: strawberry.ID
    status: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_model(cls, appointment: Optional[AppointmentModel]) -> Optional["Appointment"]:
        if appointment is None:
            return None
        return cls(
            id=strawberry.ID(str(appointment.id)),
            title=appointment.title,
            description=appointment.description,
            start_time=isoformat_z(appointment.start_time),
            end_time=isoformat_z(appointment.end_time),
            user_id=strawberry.ID(str(appointment.user_id)),
            status=appointment.status.value if appointment.status else None,
            created_at=isoformat_z(appointment.created_at),
            updated_at=isoformat_z(appointment.updated_at),
        )


@strawberry.type
class AuthPayload:
    token: str
    user: User


@strawberry.input
class AppointmentInput:
    title: str
    start_time: str
    end_time: str
    description: Optional[str] = None
    status: Optional[str] = None


@strawberry.input
class AppointmentUpdateInput:
    title: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    start_time: Optional[str] = strawberry.UNSET
    end_time: Optional[str] = strawberry.UNSET
    status: Optional[str] = strawberry.UNSET
