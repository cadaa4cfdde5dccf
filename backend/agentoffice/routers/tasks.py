from __future__ import annotations

from fastapi import APIRouter, HTTPException

from agentoffice.services import task_store

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(agent_id: str | None = None):
    tasks = await task_store.list_tasks(agent_id)
    return [t.to_dict() for t in tasks]


@router.get("/{task_id}")
async def get_task(task_id: str):
    task = await task_store.get_task(task_id)
    if task is None:
        raise HTTPException(404, "Task not found")
    return task.to_dict()


@router.delete("")
async def clear_tasks():
    removed = await task_store.clear_tasks()
    return {"ok": True, "removed": removed}
