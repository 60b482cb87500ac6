"""Page Schemas: pagination request parameters and the page envelope.

Invariants:
    - page >= 1, per >= 1 (validated), per clamped to the configured maximum
    - page_count = ceil(total / per)
"""

import math
from typing import Any, Mapping

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError

PAGE_PARAMS = ("page", "per")


class PageRequest(BaseModel):
    """Requested page, read from the `page` and `per` query parameters."""
    page: int = Field(1, ge=1)
    per: int = Field(10, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per

    @classmethod
    def from_query(
        cls, query_params: Mapping[str, str], default_per: int, max_per: int,
    ) -> "PageRequest":
        """Parse page/per, raising RequestValidationError on bad input."""
        raw = {"page": query_params.get("page", 1), "per": query_params.get("per", default_per)}
        try:
            parsed = cls.model_validate(raw)
        except ValidationError as exc:
            raise RequestValidationError([
                {**err, "loc": ("query", *err["loc"])}
                for err in exc.errors(include_url=False, include_context=False)
            ])
        return parsed.model_copy(update={"per": min(parsed.per, max_per)})


class PageMetadata(BaseModel):
    page: int
    per: int
    total: int
    page_count: int

    @classmethod
    def for_request(cls, request: PageRequest, total: int) -> "PageMetadata":
        return cls(
            page=request.page,
            per=request.per,
            total=total,
            page_count=math.ceil(total / request.per),
        )


class Page(BaseModel):
    """Envelope for a paginated listing; items are already-encoded records."""
    items: list[dict[str, Any]]
    metadata: PageMetadata
