from pydantic import BaseModel
from typing import Optional, Dict, Any, List


class ActionResponse(BaseModel):
    success: bool
    errors: Dict[str, List[str]] = {}
    error: Optional[str] = None
    warnings: List[str] = []
    record: Optional[Dict[str, Any]] = None


class EntityListResponse(BaseModel):
    items: List[Dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int
