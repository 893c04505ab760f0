from fastapi import APIRouter, Depends
from projtrackr.core.dependencies import get_auth_service, get_current_user, get_kv_store
from projtrackr.database.kv_store import KVStore
from projtrackr.modules.auth.service import AuthService
from projtrackr.modules.profiles.schemas import ProfileUpdate, ProfileEnvelope
from projtrackr.modules.profiles.service import ProfileService
from typing import Dict

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service(
    kv: KVStore = Depends(get_kv_store),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProfileService:
    return ProfileService(kv, auth_service)


@router.get("", response_model=ProfileEnvelope)
def get_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the caller's profile"""
    return ProfileEnvelope(profile=service.get_profile(user_data))


@router.put("", response_model=ProfileEnvelope)
def update_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update full_name and/or avatar_url"""
    return ProfileEnvelope(profile=service.update_profile(user_data, profile_data))
