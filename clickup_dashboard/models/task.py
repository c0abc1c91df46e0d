"""
ClickUp task model
"""

from typing import Optional, List, Any, Dict
from pydantic import BaseModel, ConfigDict


class TaskStatus(BaseModel):
    """Task status label and color"""

    model_config = ConfigDict(extra="allow")

    status: str
    color: Optional[str] = None
    type: Optional[str] = None
    orderindex: Optional[int] = None


class TaskAssignee(BaseModel):
    """Task assignee"""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    username: Optional[str] = None
    color: Optional[str] = None
    email: Optional[str] = None


class TaskTag(BaseModel):
    """Task tag"""

    model_config = ConfigDict(extra="allow")

    name: str
    tag_fg: Optional[str] = None
    tag_bg: Optional[str] = None


class TaskPriority(BaseModel):
    """Task priority"""

    model_config = ConfigDict(extra="allow")

    priority: str
    color: Optional[str] = None


class ClickUpTask(BaseModel):
    """ClickUp task model (upstream fields not listed here are kept as extras)"""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    status: TaskStatus
    assignees: List[TaskAssignee] = []
    date_created: Optional[str] = None
    date_updated: Optional[str] = None
    date_closed: Optional[str] = None
    date_done: Optional[str] = None
    priority: Optional[TaskPriority] = None
    tags: List[TaskTag] = []
    due_date: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None

    @property
    def status_label(self) -> str:
        return self.status.status

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ClickUpTask":
        """Build a task from a raw ClickUp API dict"""
        return cls.model_validate(data)
