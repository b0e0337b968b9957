from pydantic import BaseModel
from typing import Optional, Any
from enum import Enum
import datetime

class TaskStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

class TaskResponse(BaseModel):
    task_id: str
    task_type: str
    status: TaskStatus
    message: str = ""
    result: Optional[Any] = None
    error: Optional[str] = None
    created_at: datetime.datetime
