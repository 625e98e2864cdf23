from fastapi import APIRouter, Depends
import httpx
from leavedash.api.dependencies import get_backend_client
from leavedash.schemas import TeamOverview
from leavedash.services.team_status import get_team_overview

router = APIRouter(prefix="/team", tags=["Team"])


@router.get("", response_model=TeamOverview)
async def get_team(client: httpx.AsyncClient = Depends(get_backend_client)):
    """Colleagues, manager and subordinates, each marked available or on leave today."""
    return await get_team_overview(client)
