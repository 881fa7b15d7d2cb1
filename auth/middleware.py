"""
Authentication middleware for Explorer with local JWT validation
"""
import jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from supabase import create_client, Client
import logging

from config.app_config import SUPABASE_URL, SUPABASE_SERVICE_KEY, SUPABASE_JWT_SECRET

logger = logging.getLogger(__name__)

# JWT settings
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"


class AuthMiddleware:
    def __init__(self, jwt_secret: str = SUPABASE_JWT_SECRET, supabase_client: Client = None):
        if not jwt_secret:
            raise ValueError("SUPABASE_JWT_SECRET environment variable is required")
        self.jwt_secret = jwt_secret
        self._supabase = supabase_client

    @property
    def supabase(self) -> Client:
        """Service-role Supabase client, created on first use"""
        if self._supabase is None:
            if not SUPABASE_URL:
                raise ValueError("SUPABASE_URL environment variable is required")
            if not SUPABASE_SERVICE_KEY:
                raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")
            self._supabase = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
            logger.info("Supabase client initialized")
        return self._supabase

    async def verify_token(self, credentials: HTTPAuthorizationCredentials) -> dict:
        """
        Verify JWT token locally without round-trip to Supabase
        """
        try:
            payload = jwt.decode(
                credentials.credentials,
                self.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                audience=JWT_AUDIENCE
            )
        except jwt.ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired"
            )
        except jwt.InvalidAudienceError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token audience"
            )
        except jwt.InvalidSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token signature"
            )
        except jwt.PyJWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token: {str(e)}"
            )

        user_id = payload.get("sub")
        if not user_id:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized - please sign in"
            )

        return {
            "id": user_id,
            "email": payload.get("email", ""),
        }


# Global auth middleware instance - will be initialized when first used
auth_middleware = None


def get_auth_middleware():
    """Get or create auth middleware instance"""
    global auth_middleware
    if auth_middleware is None:
        auth_middleware = AuthMiddleware()
    return auth_middleware
