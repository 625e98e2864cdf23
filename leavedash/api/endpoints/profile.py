from fastapi import APIRouter, Depends
import httpx
from leavedash.api.dependencies import get_backend_client
from leavedash.client.users import get_current_user, get_user_profile
from leavedash.schemas import UserProfile

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/me", response_model=UserProfile)
async def get_my_profile(client: httpx.AsyncClient = Depends(get_backend_client)):
    """Get current user's profile"""
    return await get_current_user(client)


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(user_id: int, client: httpx.AsyncClient = Depends(get_backend_client)):
    """Get another employee's profile"""
    return await get_user_profile(client, user_id)
