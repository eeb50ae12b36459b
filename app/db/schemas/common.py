from pydantic import BaseModel, ConfigDict, Field
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None

class PageMeta(BaseModel):
    total: int = Field(..., description="Number of matching records")
    total_pages: int = Field(..., alias="totalPages", description="ceil(total / limit)")
    current_page: int = Field(..., alias="currentPage", description="Requested page, 1-based")

    model_config = ConfigDict(populate_by_name=True)
