"""
Sign-up / sign-in / sign-out against the auth API.

This only forwards credentials; the server keeps the session and hands the
client a cookie, which the shared HTTP client sends on every later call.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import quote

from .api_client import ResourceClient
from .errors import CONNECTION_TEXT, ClientError, HttpError
from .schemas import Me

logger = logging.getLogger(__name__)

HOME_PAGE = "/"
LOGIN_PAGE = "/login"


@dataclass
class AuthUI:
    """Which auth controls a page shows"""
    credentials_visible: bool = True
    signout_visible: bool = False


class SessionClient:
    def __init__(self, client: ResourceClient, alert: Optional[Callable[[str], None]] = None):
        self.client = client
        self._alert = alert or logger.info
        self.ui = AuthUI()

    def _report(self, error: ClientError) -> None:
        self._alert(error.text if isinstance(error, HttpError) else f"{CONNECTION_TEXT} ❌")

    async def signup(self, email: str, password: str, next_page: Optional[str] = None) -> Optional[str]:
        """Create the account and sign straight in; returns the redirect target"""
        try:
            await self.client.send("POST", "/auth/signup", {"email": email, "password": password})
        except ClientError as e:
            self._report(e)
            return None
        return await self.signin(email, password, next_page)

    async def signin(self, email: str, password: str, next_page: Optional[str] = None) -> Optional[str]:
        try:
            await self.client.send("POST", "/auth/signin", {"email": email, "password": password})
        except ClientError as e:
            self._report(e)
            return None
        logger.info("Signed in as %s", email)
        return next_page or HOME_PAGE

    async def signout(self) -> None:
        try:
            response = await self.client.send("POST", "/auth/signout")
            message = response.text
        except HttpError as e:
            message = e.text
        except ClientError:
            message = f"{CONNECTION_TEXT} ❌"
        await self.update_auth_ui()
        self._alert(message)

    async def validate(self) -> bool:
        try:
            await self.client.send("GET", "/auth/validate")
        except ClientError:
            return False
        return True

    async def update_auth_ui(self) -> AuthUI:
        signed_in = await self.validate()
        self.ui = AuthUI(credentials_visible=not signed_in, signout_visible=signed_in)
        return self.ui

    async def redirect_if_logged_out(self, path: str) -> Optional[str]:
        """Login URL carrying ``path`` as next, or None when the session is valid"""
        if await self.validate():
            return None
        return f"{LOGIN_PAGE}?next={quote(path, safe='')}"

    async def welcome(self, greeting: str = "Welcome") -> str:
        try:
            response = await self.client.send("GET", "/me")
        except ClientError:
            return greeting
        try:
            me = Me.model_validate(response.json())
        except ValueError as e:
            logger.warning("Unexpected /me payload: %s", e)
            return greeting
        return f"{greeting} {me.email}"
