"""API Dependencies"""

from typing import Any, List, Optional
from fastapi import HTTPException, Query, Request, status

from app.schemas.responses import PaginatedResponse
from app.services.table_view import SortDirection, TableViewModel
from app.stores import build_stores
from app.stores.base import SchoolStores


def get_stores(request: Request) -> SchoolStores:
    """
    Session-scoped record stores.

    Built by the application lifespan; created on first use when the app
    runs without lifespan events (e.g. ASGI transports in tests).
    """
    stores = getattr(request.app.state, "stores", None)
    if stores is None:
        stores = build_stores()
        request.app.state.stores = stores
    return stores


class ListParams:
    """Search and sort query parameters shared by the list endpoints"""

    def __init__(
        self,
        search: Optional[str] = Query(None, max_length=100, description="Case-insensitive substring filter"),
        sort_by: Optional[str] = Query(None, description="Sortable column key"),
        order: SortDirection = Query(SortDirection.ASC, description="asc or desc"),
    ) -> None:
        self.search = search
        self.sort_by = sort_by
        self.order = order

    def apply(self, table: TableViewModel) -> List[Any]:
        table.set_search_query(self.search)
        if self.sort_by:
            if self.sort_by not in table.sortable_keys:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Cannot sort by '{self.sort_by}'. Sortable: {', '.join(table.sortable_keys)}",
                )
            table.set_sort(self.sort_by)
            table.set_sort_direction(self.order)
        return table.visible_rows()


def single_page(rows: List[Any]) -> PaginatedResponse:
    """Whole projection as one page (lists are not paginated)."""
    total = len(rows)
    return PaginatedResponse(
        data=rows,
        meta={
            "page": 1,
            "page_size": max(total, 1),
            "total": total,
            "total_pages": 1 if total > 0 else 0,
        },
    )
