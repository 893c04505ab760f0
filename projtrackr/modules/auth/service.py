from supabase import AuthApiError, AuthError, Client
from projtrackr.modules.auth.schemas import SignupRequest, SignupUser, LoginRequest, TokenResponse
from projtrackr.core.exceptions import InternalError, NotFound, ProviderError, Unauthorized, ValidationError
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


def _user_to_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
    }


class AuthService:
    def __init__(self, supabase: Client):
        # service role client: admin user management and token verification
        self.supabase = supabase

    def signup(self, signup_data: SignupRequest) -> SignupUser:
        """Create an account with email pre-confirmed"""
        if not signup_data.email or not signup_data.password:
            raise ValidationError("Email and password are required")

        email = str(signup_data.email)
        local_part = email.split("@")[0]
        user_metadata = {
            "name": signup_data.name or local_part,
            "full_name": signup_data.full_name or signup_data.name or local_part,
        }

        try:
            auth_response = self.supabase.auth.admin.create_user({
                "email": email,
                "password": signup_data.password,
                "user_metadata": user_metadata,
                # No mail server is configured, so skip the confirmation flow
                "email_confirm": True,
            })
        except AuthApiError as e:
            logger.warning(f"Signup error: {e}")
            raise ProviderError(str(e))
        except Exception as e:
            logger.error(f"Signup exception: {e}")
            raise InternalError("Failed to create account")

        user = auth_response.user if auth_response else None
        if not user:
            raise InternalError("Failed to create account")

        metadata = user.user_metadata or user_metadata
        return SignupUser(
            id=user.id,
            email=user.email or email,
            name=metadata.get("name"),
            full_name=metadata.get("full_name"),
        )

    def login(self, login_data: LoginRequest, auth_client: Client) -> TokenResponse:
        """Password sign-in on a dedicated anon client"""
        try:
            auth_response = auth_client.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except AuthApiError as e:
            status = getattr(e, "status", None) or 0
            if getattr(e, "code", None) == "invalid_credentials" or status in (400, 401):
                logger.warning(f"Login rejected for {login_data.email}: {e}")
                raise Unauthorized("Invalid email or password")
            if status >= 500:
                logger.error(f"Login failed at the provider ({status}): {e}")
                raise InternalError("Login failed")
            # throttling, unconfirmed email and other provider refusals
            logger.warning(f"Login refused by provider ({status}): {e}")
            raise ProviderError(str(e))
        except AuthError as e:
            logger.error(f"Login provider error: {e}")
            raise InternalError("Login failed")
        except Exception as e:
            logger.error(f"Login exception: {e}")
            raise InternalError("Login failed")

        if not auth_response.user or not auth_response.session:
            raise Unauthorized("Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Verify a bearer token with Supabase Auth. One round trip per call, no caching."""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except AuthApiError as e:
            if (getattr(e, "status", None) or 0) >= 500:
                logger.error(f"Token verification failed at the provider: {e}")
                raise InternalError("Failed to verify token")
            logger.warning(f"Auth error: {e}")
            raise Unauthorized("Unauthorized")
        except AuthError as e:
            # retryable (502/503/504) and unparseable provider responses say nothing about the token
            logger.error(f"Token verification provider error: {e}")
            raise InternalError("Failed to verify token")
        except Exception as e:
            logger.error(f"Token verification exception: {e}")
            raise InternalError("Failed to verify token")

        if not user_response or not user_response.user:
            raise Unauthorized("Unauthorized")
        return _user_to_dict(user_response.user)

    def update_user_metadata(self, user_id: str, user_metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Write user_metadata through the admin API (requires service role key)"""
        try:
            response = self.supabase.auth.admin.update_user_by_id(
                user_id,
                {"user_metadata": user_metadata}
            )
        except AuthApiError as e:
            logger.warning(f"Metadata update rejected for {user_id}: {e}")
            raise ProviderError(str(e))
        except Exception as e:
            logger.error(f"Metadata update exception for {user_id}: {e}")
            raise InternalError("Failed to update user metadata")

        if not response or not response.user:
            raise NotFound("User not found")
        return _user_to_dict(response.user)
