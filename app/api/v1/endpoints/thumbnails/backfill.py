from fastapi import APIRouter, BackgroundTasks, HTTPException
from app.core.task_manager import task_manager
from app.schemas.task import TaskResponse
from app.service.IO.backfill_service import BackfillService
from app.db.session import AsyncSessionLocal

router = APIRouter()

BACKFILL_TASK_TYPE = "thumbnail_backfill"

# 1. Start
@router.post("/backfill", response_model=TaskResponse)
async def start_backfill(background_tasks: BackgroundTasks):
    """Regenerate missing thumbnails in the background; joins a backfill already running"""
    task = task_manager.find_active(BACKFILL_TASK_TYPE)
    if task:
        return _task_response(task)

    task = task_manager.create_task(BACKFILL_TASK_TYPE)
    background_tasks.add_task(run_backfill_wrapper, task.task_id)
    return _task_response(task)

# Background runs need their own session
async def run_backfill_wrapper(task_id: str):
    async with AsyncSessionLocal() as db:
        service = BackfillService(db)
        await service.run_backfill_task(task_id)

# 2. Status
@router.get("/backfill/{task_id}", response_model=TaskResponse)
async def get_backfill_status(task_id: str):
    task = task_manager.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return _task_response(task)

def _task_response(task) -> TaskResponse:
    return TaskResponse(
        task_id=task.task_id,
        task_type=task.task_type,
        status=task.status.value,
        message=task.message,
        result=task.result,
        error=task.error,
        created_at=task.created_at
    )
