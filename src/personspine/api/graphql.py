"""GraphQL interface for person records.

Mirrors the REST endpoints:

    query    { person(id: 1) { id name age gender nationality } }
    mutation { createPerson(name: "Zahar", surname: "Ivanov") { id age } }
    mutation { updatePerson(id: 1, name: "Zakhar", surname: "Ivanov", age: 36) { id age } }
    mutation { deletePerson(id: 1) }

``createPerson`` goes through the enrichment pipeline; ``updatePerson``
replaces every field like REST ``PUT``, so omitted attributes become null.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from personspine.models.person import Person as PersonRecord
from personspine.models.person import PersonInput, PersonUpdate

if TYPE_CHECKING:
    from personspine.service import PersonService


@strawberry.type
class Person:
    id: int | None
    name: str
    surname: str
    patronymic: str
    age: int | None
    gender: str | None
    nationality: str | None

    @classmethod
    def from_record(cls, record: PersonRecord) -> Person:
        return cls(**record.model_dump())


def _service(info: Info) -> PersonService:
    return info.context["service"]


@strawberry.type
class Query:
    @strawberry.field
    async def person(self, info: Info, id: int) -> Person | None:
        record = await _service(info).get_person(id)
        return Person.from_record(record) if record is not None else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_person(
        self,
        info: Info,
        name: str,
        surname: str,
        patronymic: str | None = None,
    ) -> Person:
        raw = PersonInput(name=name, surname=surname, patronymic=patronymic)
        record = await _service(info).create_person(raw)
        return Person.from_record(record)

    @strawberry.mutation
    async def update_person(
        self,
        info: Info,
        id: int,
        name: str,
        surname: str,
        patronymic: str | None = None,
        age: int | None = None,
        gender: str | None = None,
        nationality: str | None = None,
    ) -> Person | None:
        update = PersonUpdate(
            name=name,
            surname=surname,
            patronymic=patronymic,
            age=age,
            gender=gender,
            nationality=nationality,
        )
        record = await _service(info).update_person(id, update)
        return Person.from_record(record) if record is not None else None

    @strawberry.mutation
    async def delete_person(self, info: Info, id: int) -> bool:
        return await _service(info).delete_person(id)


schema = strawberry.Schema(query=Query, mutation=Mutation)


def create_graphql_router(service: PersonService) -> GraphQLRouter:
    """GraphQL router whose resolvers use ``service``."""

    async def get_context() -> dict[str, Any]:
        return {"service": service}

    return GraphQLRouter(schema, context_getter=get_context)
