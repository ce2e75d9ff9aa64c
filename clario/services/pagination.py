import math
from typing import Any, Dict, List, Tuple

from fastapi import Query
from pydantic import BaseModel

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class Pagination(BaseModel):
    current: int
    pages: int
    total: int


class PageParams(BaseModel):
    page: int = 1
    limit: int = DEFAULT_LIMIT


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
) -> PageParams:
    return PageParams(page=page, limit=limit)


def paginate(query, page: int, limit: int) -> Tuple[List[Any], Dict[str, int]]:
    """Apply offset pagination to an already filtered and ordered query.

    ``total`` is counted before the window is applied, so a page past the end
    returns no items but still reports the full total.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    pagination = Pagination(current=page, pages=math.ceil(total / limit), total=total)
    return items, pagination.model_dump()
