from __future__ import annotations

from fastapi import HTTPException, Request

from agentoffice.services.office import OfficeSession


def get_office(request: Request) -> OfficeSession:
    office = getattr(request.app.state, "office", None)
    if office is None:
        raise HTTPException(503, "Office is not running")
    return office
