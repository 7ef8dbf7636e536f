"""Generic read-side CRUD operations over a persistence accessor."""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from generic_app.db.accessor import PersistenceAccessor, Record


@dataclass
class PaginatedResult:
    data: List[Record]
    total: int
    page: int
    page_size: int
    total_pages: int


class CRUDService:
    def __init__(self, accessor: PersistenceAccessor):
        self.accessor = accessor

    def create(self, data: Record) -> Record:
        return self.accessor.create(data)

    def find_by_id(self, id: str) -> Optional[Record]:
        return self.accessor.find_unique(id)

    def find_all(self, filters: Optional[Record] = None) -> List[Record]:
        return self.accessor.find_many(where=filters)

    def find_one(self, filters: Record) -> Optional[Record]:
        rows = self.accessor.find_many(where=filters, take=1)
        return rows[0] if rows else None

    def update(self, id: str, data: Record) -> Record:
        return self.accessor.update(id, data)

    def delete(self, id: str) -> Record:
        return self.accessor.delete(id)

    def count(self, filters: Optional[Record] = None) -> int:
        return self.accessor.count(where=filters)

    def exists(self, id: str) -> bool:
        return self.accessor.count(where={"id": id}) > 0

    def find_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        order_by: Optional[Dict[str, str]] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> PaginatedResult:
        page = max(page, 1)
        page_size = max(page_size, 1)
        data = self.accessor.find_many(
            where=filters,
            order_by=order_by,
            skip=(page - 1) * page_size,
            take=page_size,
        )
        total = self.accessor.count(where=filters)
        return PaginatedResult(
            data=data,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )
