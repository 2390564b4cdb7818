from fastapi import APIRouter, Depends

from api.deps import get_preference_store
from core.preferences import PreferenceStore
from models.schemas import Preferences

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=Preferences)
async def read_preferences(store: PreferenceStore = Depends(get_preference_store)) -> Preferences:
    return store.current


@router.put("", response_model=Preferences)
async def update_preferences(
    prefs: Preferences, store: PreferenceStore = Depends(get_preference_store)
) -> Preferences:
    return store.update(prefs)
