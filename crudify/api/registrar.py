"""Route Registrar: binds a route collection's handlers onto an APIRouter.

Invariants:
    - Fixed mapping: GET / index, POST / create, GET /search search,
      GET /{id} item, PUT and PATCH /{id} update, DELETE /{id} delete
    - /search registered before /{id} (first match wins in Starlette routing)
    - Every endpoint hands the request and an explicit AsyncSession to its handler

Design Decisions:
    - get_db is a parameter so callers and tests choose the session source
"""

from typing import TYPE_CHECKING, Any, AsyncGenerator, Awaitable, Callable

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from crudify.infrastructure.database import get_db

if TYPE_CHECKING:
    from crudify.api.route_collection import CrudRouteCollection

Handler = Callable[[Request, AsyncSession], Awaitable[Response]]
DbDependency = Callable[[], AsyncGenerator[AsyncSession, None]]


def _endpoint(handler: Handler, get_db: DbDependency) -> Callable[..., Any]:
    async def endpoint(
        request: Request, db: AsyncSession = Depends(get_db),
    ) -> Response:
        return await handler(request, db)

    endpoint.__name__ = handler.__name__
    endpoint.__doc__ = handler.__doc__
    return endpoint


def setup(
    builder: APIRouter, collection: "CrudRouteCollection", get_db: DbDependency = get_db,
) -> None:
    """Register the seven CRUD routes of `collection` on `builder`."""
    root = "" if builder.prefix else "/"
    tag = builder.tags[0] if builder.tags else "crud"

    def add(path: str, method: str, operation: str, handler: Handler) -> None:
        builder.add_api_route(
            path,
            _endpoint(handler, get_db),
            methods=[method],
            name=f"{tag}_{operation}",
            response_model=None,
        )

    add(root, "GET", "index", collection.index)
    add(root, "POST", "create", collection.create)
    add("/search", "GET", "search", collection.search)
    add("/{id}", "GET", "item", collection.item)
    add("/{id}", "PUT", "replace", collection.update)
    add("/{id}", "PATCH", "update", collection.update)
    add("/{id}", "DELETE", "delete", collection.delete)


def boot(
    router: APIRouter, collection: "CrudRouteCollection", get_db: DbDependency = get_db,
) -> None:
    """Build the collection's router via its prefix hook, populate it, mount it on `router`."""
    builder = collection.create_routes_builder()
    setup(builder, collection, get_db)
    router.include_router(builder)
