from enum import Enum
from typing import Dict, Optional, Any
from datetime import datetime
import uuid

class TaskStatus(Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

FINISHED_STATUSES = (TaskStatus.COMPLETED, TaskStatus.FAILED)

class Task:
    def __init__(self, task_type: str):
        self.task_id = str(uuid.uuid4())
        self.task_type = task_type
        self.status = TaskStatus.QUEUED
        self.created_at = datetime.now()
        self.result: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.message: str = "Initialized"

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES

class TaskManager:
    def __init__(self, max_finished: int = 20):
        self.tasks: Dict[str, Task] = {}
        # Finished tasks kept for status polling; older ones are evicted
        self.max_finished = max_finished

    def create_task(self, task_type: str) -> Task:
        self.prune_finished()
        task = Task(task_type)
        self.tasks[task.task_id] = task
        return task

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.tasks.get(task_id)

    def find_active(self, task_type: str) -> Optional[Task]:
        """A queued or running task of the given type, if any"""
        for task in self.tasks.values():
            if task.task_type == task_type and not task.is_finished:
                return task
        return None

    def remove_task(self, task_id: str) -> bool:
        return self.tasks.pop(task_id, None) is not None

    def prune_finished(self) -> int:
        """Drop the oldest finished tasks beyond ``max_finished``"""
        finished = sorted(
            (task for task in self.tasks.values() if task.is_finished),
            key=lambda task: task.created_at
        )
        stale = finished[:max(0, len(finished) - self.max_finished)]
        for task in stale:
            del self.tasks[task.task_id]
        return len(stale)

    def update_task(self, task_id: str, status: TaskStatus, message: str = None, result: Any = None, error: str = None):
        if task_id in self.tasks:
            task = self.tasks[task_id]
            task.status = status
            if message: task.message = message
            if result is not None: task.result = result
            if error: task.error = error

# Global instance
task_manager = TaskManager()
