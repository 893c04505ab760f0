from fastapi import APIRouter, Depends, Request
from projtrackr.config.settings import settings
from projtrackr.core.dependencies import get_auth_service, require_anon_key
from projtrackr.core.rate_limit import limiter
from projtrackr.database.supabase_client import get_auth_client
from projtrackr.modules.auth.schemas import (
    SignupRequest, SignupResponse, LoginRequest, TokenResponse
)
from projtrackr.modules.auth.service import AuthService
from supabase import Client

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=SignupResponse)
@limiter.limit(settings.auth_rate_limit)
def signup(
    request: Request,
    signup_data: SignupRequest,
    _: None = Depends(require_anon_key),
    service: AuthService = Depends(get_auth_service)
):
    """Create an account (email auto-confirmed)"""
    return SignupResponse(user=service.signup(signup_data))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    auth_client: Client = Depends(get_auth_client)
):
    """Login and get access token"""
    return service.login(login_data, auth_client)
