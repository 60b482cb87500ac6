"""Default CRUD Handlers: index, search, item, create, update, delete for any mapped model.

Invariants:
    - Every handler is async (request, db) -> Response; the session is always passed in
    - Lookup misses (unknown or non-coercible id) return 404, never raise
    - create never trusts a client-supplied primary key (write schema omits it)
    - update replaces the whole record: PUT and PATCH share it, absent optional
      fields fall back to their schema default
    - Timestamp bookkeeping only for HasTimestamps models: created_at set on
      create and carried forward on update, updated_at set on update
    - Decode and persistence errors propagate to the global error handlers
    - Each handler tags the session with its model and operation, so a
      database failure reports where it happened

Design Decisions:
    - merge() for update: the transient replacement carries the existing primary
      key, so the session resolves it to the loaded row and issues an UPDATE
    - Clock injectable for deterministic timestamp tests
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from crudify.config import Settings, get_settings
from crudify.core.errors import ConfigurationError, ErrorContext, ResourceNotFoundError
from crudify.core.identifiers import coerce_identifier
from crudify.core.search_terms import collect_terms
from crudify.db.introspection import (
    column_attributes, primary_key_attribute, python_type,
)
from crudify.db.timestamps import HasTimestamps
from crudify.infrastructure.database import tag_session
from crudify.schemas.model_schemas import build_read_schema, build_write_schema
from crudify.schemas.page import PAGE_PARAMS, Page, PageRequest
from crudify.services.content import decode_body, encode, encode_response
from crudify.services.query_builder import (
    apply_default_order, apply_search_terms, base_query, paginate,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DefaultCrudHandlers:
    """Generic handler set bound to one model class."""

    def __init__(
        self,
        model: type,
        searchable_fields: Sequence[str] = (),
        read_schema: type[BaseModel] | None = None,
        write_schema: type[BaseModel] | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.model = model
        self.model_name = model.__name__
        self.searchable_fields = list(searchable_fields)
        self.read_schema = read_schema or build_read_schema(model)
        self.write_schema = write_schema or build_write_schema(model)
        self.settings = settings or get_settings()
        self.clock = clock

        self.id_attribute = primary_key_attribute(model)
        columns = dict(column_attributes(model))
        self.id_type = python_type(columns[self.id_attribute])
        reserved = [f for f in self.searchable_fields if f in PAGE_PARAMS]
        if reserved:
            raise ConfigurationError(
                f"{self.model_name} cannot search on {', '.join(reserved)}: "
                "reserved for pagination",
                ErrorContext(model_name=self.model_name, operation="search"),
            )
        unknown = [f for f in self.searchable_fields if f not in columns]
        if unknown:
            raise ConfigurationError(
                f"{self.model_name} has no column(s) {', '.join(unknown)} to search on",
                ErrorContext(model_name=self.model_name, operation="search"),
            )

    # ─── Read ────────────────────────────────────────────────────

    async def index(self, request: Request, db: AsyncSession) -> Response:
        """Paginated listing, newest first for timestamped models."""
        tag_session(db, self.model_name, "index")
        query = apply_default_order(base_query(self.model), self.model)
        return await self._page_response(request, db, query)

    async def search(self, request: Request, db: AsyncSession) -> Response:
        """Paginated listing filtered by the configured searchable fields."""
        tag_session(db, self.model_name, "search")
        terms = collect_terms(self.searchable_fields, request.query_params)
        query = apply_search_terms(base_query(self.model), self.model, terms)
        query = apply_default_order(query, self.model)
        return await self._page_response(request, db, query)

    async def item(self, request: Request, db: AsyncSession) -> Response:
        tag_session(db, self.model_name, "item")
        record = await self._find(request, db)
        if record is None:
            return self._not_found(request)
        return encode_response(record, self.read_schema)

    # ─── Write ───────────────────────────────────────────────────

    async def create(self, request: Request, db: AsyncSession) -> Response:
        tag_session(db, self.model_name, "create")
        payload = await decode_body(request, self.write_schema)
        record = self.model(**payload.model_dump(exclude_unset=True))
        if isinstance(record, HasTimestamps):
            record.created_at = self.clock()
        db.add(record)
        await db.commit()
        await db.refresh(record)
        record_id = getattr(record, self.id_attribute)
        logger.info(
            f"Created {self.model_name} {record_id}",
            extra={"model": self.model_name, "record_id": str(record_id), "operation": "create"},
        )
        return encode_response(record, self.read_schema)

    async def update(self, request: Request, db: AsyncSession) -> Response:
        """Full replace of an existing record (PUT and PATCH)."""
        tag_session(db, self.model_name, "update")
        existing = await self._find(request, db)
        if existing is None:
            return self._not_found(request)
        payload = await decode_body(request, self.write_schema)

        replacement = self.model(**payload.model_dump())
        record_id = getattr(existing, self.id_attribute)
        setattr(replacement, self.id_attribute, record_id)
        if isinstance(replacement, HasTimestamps) and isinstance(existing, HasTimestamps):
            replacement.created_at = existing.created_at
            replacement.updated_at = self.clock()

        record = await db.merge(replacement)
        await db.commit()
        await db.refresh(record)
        logger.info(
            f"Updated {self.model_name} {record_id}",
            extra={"model": self.model_name, "record_id": str(record_id), "operation": "update"},
        )
        return encode_response(record, self.read_schema)

    async def delete(self, request: Request, db: AsyncSession) -> Response:
        tag_session(db, self.model_name, "delete")
        record = await self._find(request, db)
        if record is None:
            return self._not_found(request)
        await db.delete(record)
        await db.commit()
        logger.info(
            f"Deleted {self.model_name} {request.path_params.get('id')}",
            extra={
                "model": self.model_name,
                "record_id": request.path_params.get("id"),
                "operation": "delete",
            },
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _find(self, request: Request, db: AsyncSession) -> Any | None:
        record_id = coerce_identifier(request.path_params.get("id"), self.id_type)
        if record_id is None:
            return None
        return await db.get(self.model, record_id)

    def _not_found(self, request: Request) -> JSONResponse:
        error = ResourceNotFoundError(self.model_name, str(request.path_params.get("id")))
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content=error.to_response(),
        )

    async def _page_response(self, request: Request, db: AsyncSession, query) -> Response:
        page_request = PageRequest.from_query(
            request.query_params,
            default_per=self.settings.default_per_page,
            max_per=self.settings.max_per_page,
        )
        records, metadata = await paginate(db, query, page_request)
        page = Page(
            items=[encode(r, self.read_schema) for r in records],
            metadata=metadata,
        )
        return JSONResponse(content=page.model_dump(mode="json"))
