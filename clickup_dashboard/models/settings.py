"""
Dashboard settings model
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from clickup_dashboard.config.constants import DEFAULT_TASKS_ENDPOINT


class DashboardSettings(BaseModel):
    """Credentials and target identifiers persisted between sessions"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    api_key: str = Field("", alias="apiKey")
    space_id: str = Field("", alias="spaceId")
    list_id: str = Field("", alias="listId")
    endpoint: str = DEFAULT_TASKS_ENDPOINT
    fetch_all_pages: bool = Field(True, alias="fetchAllPages")

    def is_complete(self) -> bool:
        """Dashboard needs at least an API key and a list"""
        return bool(self.api_key and self.list_id)

    def to_wire(self) -> dict:
        """Serialize with the JSON field names"""
        return self.model_dump(by_alias=True)


class ProxyRequest(BaseModel):
    """Body of POST /api/clickup-test"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    api_key: Optional[str] = Field(None, alias="apiKey")
    space_id: Optional[str] = Field(None, alias="spaceId")
    list_id: Optional[str] = Field(None, alias="listId")
    endpoint: Optional[str] = None
    fetch_all_pages: bool = Field(False, alias="fetchAllPages")
