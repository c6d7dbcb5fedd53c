"""Advocate listing handlers for Directory service."""

import json
from typing import Any, Optional

from fastapi import HTTPException, Query

from advocates.lib.enums import Degree, SortOption, DEFAULT_SORT_OPTION
from advocates.services.directory.handlers.base import HandlerMixin
from advocates.services.directory.utils import (
    CursorError,
    build_advocate_query,
    paginate,
    validate_cursor,
)
from advocates.services.directory.schemas import (
    AdvocateItem,
    AdvocatePage,
    AdvocateQueryParams,
    PageInfo,
    DEFAULT_PAGE_SIZE,
    MAX_EXPERIENCE,
    MAX_PAGE_SIZE,
    MIN_EXPERIENCE,
    MIN_PAGE_SIZE,
)

import logging
logger = logging.getLogger(__name__)


def _record_to_item(record: Any) -> AdvocateItem:
    """Project a database row onto the public advocate fields."""
    specialties = record["specialties"]
    if isinstance(specialties, str):
        specialties = json.loads(specialties)
    return AdvocateItem(
        id=record["id"],
        first_name=record["first_name"],
        last_name=record["last_name"],
        city=record["city"],
        degree=record["degree"],
        specialties=specialties or [],
        years_of_experience=record["years_of_experience"],
        phone_number=record["phone_number"],
    )


class AdvocateHandlersMixin(HandlerMixin):
    """Advocate listing API handlers."""

    async def handle_get_advocates(
        self,
        cursor: Optional[str] = Query(None, description="Pagination cursor from previous response"),
        limit: int = Query(DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Number of items per page"),
        q: Optional[str] = Query(None, description="Free-text search across names, city and specialties"),
        city: Optional[str] = Query(None, description="Case-insensitive partial match for city"),
        degree: Optional[Degree] = Query(None, description="Exact match for degree"),
        min_exp: Optional[int] = Query(None, ge=MIN_EXPERIENCE, le=MAX_EXPERIENCE, alias="minExp", description="Minimum years of experience"),
        specialties: Optional[str] = Query(None, description="Comma-separated specialties; all must match"),
        sort: SortOption = Query(DEFAULT_SORT_OPTION, description="Sort mode"),
    ) -> AdvocatePage:
        """Return one page of advocates matching the search and filters.

        Pagination is keyset-based: the response carries an opaque
        ``nextCursor`` that is only accepted back while ``sort`` and the
        filter set stay the same.

        Returns:
            AdvocatePage: The page rows and continuation info.

        Raises:
            HTTPException: 400 if the cursor is invalid or no longer matches
                the sort or filters.
            HTTPException: 500 for unexpected errors.
        """
        params = AdvocateQueryParams(
            cursor=cursor,
            limit=limit,
            q=q,
            city=city,
            degree=degree,
            min_exp=min_exp,
            specialties=specialties,
            sort=sort,
        )
        logger.info(
            "Directory.handle_get_advocates: sort=%s, limit=%s, cursor=%s",
            params.sort.value, params.limit, params.cursor[:20] + "..." if params.cursor else None
        )

        filters_hash = params.filters_hash()

        cursor_keys = None
        if params.cursor:
            try:
                payload = validate_cursor(params.cursor, params.sort, filters_hash)
            except CursorError as e:
                logger.warning(f"Directory.handle_get_advocates: Rejected cursor: {e}")
                raise HTTPException(status_code=400, detail=str(e))
            cursor_keys = payload.keys

        try:
            query = build_advocate_query(params, cursor_keys)
            logger.debug(f"Executing listing query: {query.sql} with params: {query.params}")
            records = await self.pool.fetch(query.sql, *query.params)

            rows, next_cursor = paginate(records, params.limit, params.sort, filters_hash)
            items = [_record_to_item(record) for record in rows]
        except Exception as e:
            logger.error(f"Directory.handle_get_advocates: Error fetching advocates: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal server error")

        logger.info(
            "Directory.handle_get_advocates: Returning %s advocates (has_next=%s).",
            len(items), next_cursor is not None
        )
        return AdvocatePage(
            data=items,
            page_info=PageInfo(next_cursor=next_cursor, has_next=next_cursor is not None),
        )
