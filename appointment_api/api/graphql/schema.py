import logging

import strawberry
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext
from typing import Optional

from . import resolvers
from .context import get_context
from .types import Appointment, AuthPayload, User
from ...core.exceptions import AppError
from ...core.logging import LOGGER_NAME


@strawberry.type
class Query:
    me: Optional[User] = strawberry.field(resolver=resolvers.me)
    users: list[User] = strawberry.field(resolver=resolvers.users)
    appointments: list[Appointment] = strawberry.field(resolver=resolvers.appointments)
    appointment: Optional[Appointment] = strawberry.field(resolver=resolvers.appointment)
    my_appointments: list[Appointment] = strawberry.field(resolver=resolvers.my_appointments)


@strawberry.type
class Mutation:
    register: AuthPayload = strawberry.mutation(resolver=resolvers.register)
    login: AuthPayload = strawberry.mutation(resolver=resolvers.login)
    create_appointment: Appointment = strawberry.mutation(resolver=resolvers.create_appointment)
    update_appointment: Appointment = strawberry.mutation(resolver=resolvers.update_appointment)
    delete_appointment: bool = strawberry.mutation(resolver=resolvers.delete_appointment)


class AppSchema(strawberry.Schema):
    """Schema that reports application errors as warnings on the app logger."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        logger = getattr(getattr(execution_context, "context", None), "logger", None)
        logger = logger or logging.getLogger(LOGGER_NAME)

        unexpected = []
        for error in errors:
            if isinstance(error.original_error, AppError):
                logger.warning(
                    "GraphQL %s at %s: %s",
                    error.original_error.code, error.path, error.message
                )
            else:
                unexpected.append(error)

        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = AppSchema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
