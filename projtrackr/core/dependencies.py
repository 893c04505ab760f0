"""
Core dependencies for route protection and client injection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from projtrackr.config.settings import settings
from projtrackr.core.exceptions import Unauthorized
from projtrackr.database.kv_store import KVStore
from projtrackr.database.supabase_client import get_service_supabase
from projtrackr.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging
import secrets

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must be a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_service_supabase)) -> AuthService:
    return AuthService(supabase)


def get_kv_store(supabase: Client = Depends(get_service_supabase)) -> KVStore:
    return KVStore(supabase, settings.kv_table)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Verify the bearer token and return the user it belongs to.

    The user id used for every storage key comes from here, never from the
    request body or path.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Authorization required")
    return auth_service.get_current_user(credentials.credentials)


def require_anon_key(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> None:
    """Signup is called with the public anon key as bearer. Skipped when no key is configured."""
    if not settings.supabase_key:
        return
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), settings.supabase_key.encode()
    ):
        logger.warning("Signup attempted without a valid anon key")
        raise Unauthorized("Authorization required")
