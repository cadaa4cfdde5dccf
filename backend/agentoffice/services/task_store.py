"""Finished tasks, kept in SQLite so they outlive the agents' state."""

from __future__ import annotations

import json

from agentoffice.agent.state import Task
from agentoffice.db import get_db


def _task_from_row(row) -> Task:
    return Task.from_dict(
        {
            "id": row["id"],
            "description": row["description"],
            "assigned_agent_id": row["agent_id"],
            "status": row["status"],
            "steps": json.loads(row["steps"] or "[]"),
            "result": row["result"],
            "approval_question": row["approval_question"],
            "created_at": row["created_at"],
            "completed_at": row["completed_at"],
        }
    )


async def save_task(task: Task) -> None:
    """Insert or replace the stored copy of ``task``."""
    data = task.to_dict()
    db = await get_db()
    try:
        await db.execute(
            """INSERT OR REPLACE INTO finished_tasks
               (id, agent_id, description, status, result, approval_question,
                steps, created_at, completed_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                data["id"],
                data["assigned_agent_id"],
                data["description"],
                data["status"],
                data["result"],
                data["approval_question"],
                json.dumps(data["steps"], default=str),
                data["created_at"],
                data["completed_at"],
            ),
        )
        await db.commit()
    finally:
        await db.close()


async def list_tasks(agent_id: str | None = None) -> list[Task]:
    db = await get_db()
    try:
        if agent_id is None:
            cursor = await db.execute(
                "SELECT * FROM finished_tasks ORDER BY created_at DESC"
            )
        else:
            cursor = await db.execute(
                "SELECT * FROM finished_tasks WHERE agent_id = ? "
                "ORDER BY created_at DESC",
                (agent_id,),
            )
        rows = await cursor.fetchall()
        return [_task_from_row(r) for r in rows]
    finally:
        await db.close()


async def get_task(task_id: str) -> Task | None:
    db = await get_db()
    try:
        cursor = await db.execute(
            "SELECT * FROM finished_tasks WHERE id = ?", (task_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return _task_from_row(row)
    finally:
        await db.close()


async def clear_tasks() -> int:
    """Delete every stored task; returns how many were removed."""
    db = await get_db()
    try:
        cursor = await db.execute("DELETE FROM finished_tasks")
        await db.commit()
        return cursor.rowcount
    finally:
        await db.close()
