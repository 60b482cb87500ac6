"""Route Collections: the contract the registrar binds, and the default collection.

Invariants:
    - A collection exposes searchable_fields, a route-prefix hook, and six handlers
    - CrudResource handlers delegate to DefaultCrudHandlers unless overridden
    - boot() registers routes on the collection's own builder, then includes it

Design Decisions:
    - Protocol for the contract: custom collections need no base class
    - Composition over inheritance for defaults: CrudResource holds a
      DefaultCrudHandlers and forwards; subclasses override a method to replace
      one operation and can still call self.handlers for the default
"""

from datetime import datetime
from typing import Callable, Protocol, Sequence

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from crudify.api.registrar import DbDependency, boot
from crudify.config import Settings
from crudify.infrastructure.database import get_db
from crudify.services.default_handlers import DefaultCrudHandlers, utcnow


class CrudRouteCollection(Protocol):
    """Structural contract for anything the registrar can mount."""

    searchable_fields: list[str]

    def create_routes_builder(self) -> APIRouter: ...
    async def index(self, request: Request, db: AsyncSession) -> Response: ...
    async def search(self, request: Request, db: AsyncSession) -> Response: ...
    async def item(self, request: Request, db: AsyncSession) -> Response: ...
    async def create(self, request: Request, db: AsyncSession) -> Response: ...
    async def update(self, request: Request, db: AsyncSession) -> Response: ...
    async def delete(self, request: Request, db: AsyncSession) -> Response: ...


class CrudResource:
    """CRUD routes for one model, backed by the default handler set."""

    def __init__(
        self,
        model: type,
        *,
        searchable_fields: Sequence[str] = (),
        prefix: str | None = None,
        tags: list[str] | None = None,
        read_schema: type[BaseModel] | None = None,
        write_schema: type[BaseModel] | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.model = model
        self.searchable_fields = list(searchable_fields)
        self.prefix = f"/{model.__tablename__}" if prefix is None else prefix
        self.tags = tags or [model.__tablename__]
        self.handlers = DefaultCrudHandlers(
            model,
            searchable_fields=self.searchable_fields,
            read_schema=read_schema,
            write_schema=write_schema,
            settings=settings,
            clock=clock,
        )

    def create_routes_builder(self) -> APIRouter:
        """Route-prefix hook: the router every CRUD route is registered on."""
        return APIRouter(prefix=self.prefix, tags=self.tags)

    def boot(self, router: APIRouter, get_db: DbDependency = get_db) -> None:
        boot(router, self, get_db)

    async def index(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.index(request, db)

    async def search(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.search(request, db)

    async def item(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.item(request, db)

    async def create(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.create(request, db)

    async def update(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.update(request, db)

    async def delete(self, request: Request, db: AsyncSession) -> Response:
        return await self.handlers.delete(request, db)
