from projtrackr.database.kv_store import KVStore
from projtrackr.modules.auth.service import AuthService
from projtrackr.modules.profiles.models import profile_key
from projtrackr.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


def profile_from_user(user_data: Dict[str, Any]) -> ProfileResponse:
    """Build a profile from auth user metadata"""
    metadata = user_data.get("user_metadata") or {}
    email = user_data.get("email") or ""
    return ProfileResponse(
        id=user_data["id"],
        email=email or None,
        full_name=metadata.get("full_name") or (email.split("@")[0] if email else None),
        avatar_url=metadata.get("avatar_url"),
        created_at=user_data.get("created_at"),
    )


class ProfileService:
    def __init__(self, kv: KVStore, auth_service: AuthService):
        self.kv = kv
        self.auth_service = auth_service

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Stored profile copy if present, otherwise derived from auth metadata"""
        stored = self.kv.get(profile_key(user_data["id"]))
        if stored:
            return ProfileResponse(**{**stored, "id": user_data["id"]})
        return profile_from_user(user_data)

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Merge supplied fields, write them to auth metadata and to the KV copy"""
        user_id = user_data["id"]
        current = self.get_profile(user_data)
        changes = profile_data.model_dump(exclude_unset=True)
        profile = current.model_copy(update={**changes, "id": user_id})

        user_metadata = {
            **(user_data.get("user_metadata") or {}),
            "full_name": profile.full_name,
            "avatar_url": profile.avatar_url,
        }
        self.auth_service.update_user_metadata(user_id, user_metadata)
        self.kv.set(profile_key(user_id), profile.model_dump(mode="json"))
        logger.info(f"Updated profile for user {user_id}: {sorted(changes)}")
        return profile
