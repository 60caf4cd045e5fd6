"""
Small helpers shared by the store services.
"""
from typing import Optional

from sqlalchemy.orm import Query

from jobhunt.core.errors import ValidationError

LIKE_ESCAPE = "\\"


def apply_paging(query: Query, limit: Optional[int] = None, offset: Optional[int] = None) -> Query:
    """Apply optional LIMIT/OFFSET after checking they are sane."""
    if limit is not None:
        if limit < 1:
            raise ValidationError("Limit must be a positive integer")
        query = query.limit(limit)
    if offset is not None:
        if offset < 0:
            raise ValidationError("Offset must be a non-negative integer")
        query = query.offset(offset)
    return query


def like_pattern(term: str) -> str:
    """Build a '%term%' pattern with LIKE wildcards in term escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
