"""
Signed-in identity for the client, backed by Supabase auth
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from supabase import create_client, Client

from config.app_config import SUPABASE_URL, SUPABASE_ANON_KEY
from models.errors import UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    access_token: str


class AuthSession:
    def __init__(self, supabase_client: Optional[Client] = None, identity: Optional[Identity] = None):
        self._supabase = supabase_client
        self._identity = identity

    @classmethod
    def from_identity(cls, identity: Identity) -> "AuthSession":
        """A session that is already signed in, e.g. with a token obtained elsewhere."""
        return cls(identity=identity)

    @property
    def supabase(self) -> Client:
        if self._supabase is None:
            if not SUPABASE_URL or not SUPABASE_ANON_KEY:
                raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY environment variables are required")
            self._supabase = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
        return self._supabase

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    @staticmethod
    def _identity_from(response) -> Optional[Identity]:
        if response.user is None or response.session is None:
            return None
        return Identity(
            id=response.user.id,
            email=response.user.email or "",
            access_token=response.session.access_token,
        )

    async def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = await asyncio.to_thread(
                self.supabase.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except Exception as e:
            logger.error(f"Sign in error for {email}: {str(e)}")
            raise UnauthorizedError(f"Sign in failed: {str(e)}") from e

        identity = self._identity_from(response)
        if identity is None:
            raise UnauthorizedError("Sign in failed")
        self._identity = identity
        logger.info(f"Signed in as {email}")
        return identity

    async def sign_up(self, email: str, password: str) -> Optional[Identity]:
        """
        Register a new account. Returns None when the account still needs
        email confirmation before it can sign in.
        """
        try:
            response = await asyncio.to_thread(
                self.supabase.auth.sign_up,
                {"email": email, "password": password},
            )
        except Exception as e:
            logger.error(f"Sign up error for {email}: {str(e)}")
            raise UnauthorizedError(f"Sign up failed: {str(e)}") from e

        identity = self._identity_from(response)
        if identity is None:
            logger.info(f"User registered but needs email confirmation: {email}")
            return None
        self._identity = identity
        return identity

    async def sign_out(self) -> None:
        if self._supabase is not None:
            await asyncio.to_thread(self._supabase.auth.sign_out)
        self._identity = None
