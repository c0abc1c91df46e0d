"""
Response models for the proxy endpoints
"""

from typing import Optional, Any, List, Dict
from pydantic import BaseModel, Field, ConfigDict


class RequestInfo(BaseModel):
    """Echo of what the proxy actually requested"""

    model_config = ConfigDict(populate_by_name=True)

    space_id: Optional[str] = Field(None, alias="spaceId")
    list_id: Optional[str] = Field(None, alias="listId")
    endpoint: str
    timestamp: str
    fetch_all_pages: bool = Field(False, alias="fetchAllPages")


class PaginatedTasks(BaseModel):
    """Tasks collected across pages"""

    model_config = ConfigDict(populate_by_name=True)

    tasks: List[Dict[str, Any]]
    total_tasks: int = Field(alias="totalTasks")
    pages_collected: int = Field(alias="pagesCollected")


class PaginationResult(BaseModel):
    """Accumulated pages from a paginated fetch"""

    tasks: List[Dict[str, Any]] = []
    pages_collected: int = 0
    ceiling_reached: bool = False


class ProxyResponse(BaseModel):
    """Successful proxy response"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: Any
    request_info: RequestInfo = Field(alias="requestInfo")


class ErrorResponse(BaseModel):
    """Error response model"""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    details: Optional[Any] = None
    request_url: Optional[str] = Field(None, alias="requestUrl")
    tasks_collected: Optional[int] = Field(None, alias="tasksCollected")
    provided_list_id: Optional[str] = Field(None, alias="providedListId")
    provided_space_id: Optional[str] = Field(None, alias="providedSpaceId")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
