from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from leavedash.db.session import get_db
from leavedash.schemas import PreferenceResponse, PreferenceUpdate
from leavedash.services.preferences import DEFAULT_PREFERENCES, load_preference, save_preference

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("/{key}", response_model=PreferenceResponse)
def get_preference(
    key: str = Path(..., min_length=1, max_length=100, pattern=r"^[a-z0-9_]+$"),
    db: Session = Depends(get_db)
):
    """Load a UI preference, falling back to its default when never saved."""
    return PreferenceResponse(key=key, value=load_preference(db, key, DEFAULT_PREFERENCES.get(key)))


@router.put("/{key}", response_model=PreferenceResponse)
def update_preference(
    preference_update: PreferenceUpdate,
    key: str = Path(..., min_length=1, max_length=100, pattern=r"^[a-z0-9_]+$"),
    db: Session = Depends(get_db)
):
    """Save a UI preference, e.g. ``sidebar_state`` = ``"true"``."""
    return save_preference(db, key, preference_update.value)
