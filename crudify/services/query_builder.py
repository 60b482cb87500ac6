"""Query Builder: SELECT construction, search filters, ordering and pagination.

Invariants:
    - Timestamp-capable models are ordered by created_at DESC; others carry no ORDER BY
    - Search terms AND together, one WHERE clause per term
    - Contains terms compare the column cast to string, case-insensitively,
      with LIKE wildcards in the value escaped
    - Count query ignores ordering
"""

from sqlalchemy import Select, String, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crudify.core.search_terms import MatchKind, SearchTerm
from crudify.db.timestamps import supports_timestamps
from crudify.schemas.page import PageMetadata, PageRequest


def base_query(model: type) -> Select:
    return select(model)


def apply_default_order(query: Select, model: type) -> Select:
    if supports_timestamps(model):
        return query.order_by(model.created_at.desc())
    return query


def apply_search_terms(query: Select, model: type, terms: list[SearchTerm]) -> Select:
    for term in terms:
        column = getattr(model, term.field)
        if term.kind is MatchKind.EQUALS:
            query = query.where(column == term.value)
        else:
            query = query.where(
                cast(column, String).icontains(term.value, autoescape=True),
            )
    return query


async def paginate(
    db: AsyncSession, query: Select, page: PageRequest,
) -> tuple[list, PageMetadata]:
    """Run `query` for one page and count the full result set."""
    count_query = select(func.count()).select_from(
        query.order_by(None).subquery(),
    )
    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(query.limit(page.per).offset(page.offset))
    items = list(result.scalars().all())
    return items, PageMetadata.for_request(page, total)
