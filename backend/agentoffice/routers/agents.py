from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from agentoffice.agent.runtime import AgentBusyError, AgentRuntime
from agentoffice.routers.deps import get_office
from agentoffice.services.office import OfficeSession, UnknownAgentError

router = APIRouter(prefix="/agents", tags=["agents"])


class AssignTaskRequest(BaseModel):
    description: str = Field(min_length=1)


def _summary(agent: AgentRuntime, with_conversation: bool = False) -> dict:
    state = agent.get_state().to_dict()
    conversation = state.pop("conversation_history")
    summary = {**agent.get_config().to_dict(), **state}
    if with_conversation:
        summary["conversation"] = conversation
    return summary


def _lookup(office: OfficeSession, agent_id: str) -> AgentRuntime:
    try:
        return office.get_agent(agent_id)
    except UnknownAgentError:
        raise HTTPException(404, "Agent not found")


@router.get("")
async def list_agents(office: OfficeSession = Depends(get_office)):
    return [_summary(a) for a in office.team]


@router.get("/{agent_id}")
async def get_agent(agent_id: str, office: OfficeSession = Depends(get_office)):
    agent = _lookup(office, agent_id)
    return {
        **_summary(agent, with_conversation=True),
        "system_prompt": agent.get_config().system_prompt,
        "tool_schema": agent.tools.get_openai_schema(),
    }


@router.post("/{agent_id}/tasks")
async def assign_task(
    agent_id: str,
    body: AssignTaskRequest,
    wait: bool = False,
    office: OfficeSession = Depends(get_office),
):
    _lookup(office, agent_id)
    try:
        if wait:
            task = await office.assign_task(agent_id, body.description)
            return task.to_dict()
        task = await office.start_task(agent_id, body.description)
    except AgentBusyError as exc:
        raise HTTPException(409, str(exc))
    return JSONResponse(status_code=202, content=task.to_dict() if task else None)


@router.post("/{agent_id}/stop")
async def stop_agent(agent_id: str, office: OfficeSession = Depends(get_office)):
    _lookup(office, agent_id)
    task = office.stop(agent_id)
    return {"ok": True, "task": task.to_dict() if task else None}
