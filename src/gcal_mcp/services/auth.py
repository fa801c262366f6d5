from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build
from oauthlib.oauth2 import WebApplicationClient

from ..config import OOB_REDIRECT_URI, ConfigurationError, GoogleOAuthSettings
from ..domain import CredentialState

logger = logging.getLogger(__name__)

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class AuthenticationRequiredError(RuntimeError):
    """Raised when a Calendar call needs a refresh token that was never configured."""


def build_calendar_client(credentials: Credentials) -> Any:
    return build("calendar", "v3", credentials=credentials, cache_discovery=False)


class CredentialManager:
    """Owns the OAuth2 client configuration and the cached access token.

    The manager moves through ``CONFIGURED`` (client id and secret only) and
    ``AUTHORIZED`` (refresh token present). Only an authorized manager hands out
    Calendar clients; authorization URLs are available in either state.

    The access token lives inside a single :class:`Credentials` instance and is
    refreshed lazily: :meth:`ensure_fresh` refreshes when the token is missing or
    expired, and the authorized HTTP transport used by the Calendar client
    repeats that check before every request.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str = OOB_REDIRECT_URI,
        refresh_token: Optional[str] = None,
        *,
        scopes: Sequence[str] = (CALENDAR_SCOPE,),
        client_factory: Callable[[Credentials], Any] = build_calendar_client,
        request_factory: Callable[[], Any] = Request,
    ) -> None:
        if not client_id or not client_secret:
            raise ConfigurationError("OAuth client id and client secret are required.")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._refresh_token = refresh_token or None
        self.scopes = tuple(scopes)
        self._client_factory = client_factory
        self._request_factory = request_factory
        self._credentials: Optional[Credentials] = None
        self._client: Any = None

    @classmethod
    def from_settings(cls, settings: GoogleOAuthSettings, **kwargs: Any) -> "CredentialManager":
        if not settings.is_configured:
            missing = settings.missing_env_vars
            noun = "environment variables are" if len(missing) > 1 else "environment variable is"
            raise ConfigurationError(f"{' and '.join(missing)} {noun} required")
        return cls(
            settings.client_id,
            settings.client_secret,
            settings.redirect_uri,
            settings.refresh_token,
            **kwargs,
        )

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def state(self) -> CredentialState:
        return CredentialState.AUTHORIZED if self._refresh_token else CredentialState.CONFIGURED

    @property
    def client_config(self) -> Dict[str, Any]:
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }

    def authorization_url(self, scopes: Optional[Sequence[str]] = None) -> str:
        """Return the consent URL for the authorization-code flow with offline access."""

        client = WebApplicationClient(self.client_id)
        return client.prepare_request_uri(
            GOOGLE_AUTH_URI,
            redirect_uri=self.redirect_uri,
            scope=list(scopes or self.scopes),
            access_type="offline",
        )

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a refresh token."""

        flow = Flow.from_client_config(
            self.client_config,
            scopes=list(self.scopes),
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )
        flow.fetch_token(code=code)
        refresh_token = flow.credentials.refresh_token
        if not refresh_token:
            raise AuthenticationRequiredError(
                "Google did not return a refresh token. Revoke the app's access and authorize again."
            )
        return refresh_token

    def credentials(self) -> Credentials:
        if not self._refresh_token:
            raise AuthenticationRequiredError(
                "No refresh token configured. Call get_auth_url to authorize, "
                "then set the GOOGLE_REFRESH_TOKEN environment variable."
            )
        if self._credentials is None:
            self._credentials = Credentials(
                token=None,
                refresh_token=self._refresh_token,
                token_uri=GOOGLE_TOKEN_URI,
                client_id=self.client_id,
                client_secret=self.client_secret,
                scopes=list(self.scopes),
            )
        return self._credentials

    def ensure_fresh(self) -> str:
        credentials = self.credentials()
        if not credentials.valid:
            logger.debug("Refreshing Google access token")
            credentials.refresh(self._request_factory())
        return credentials.token

    def authenticated_client(self) -> Any:
        self.ensure_fresh()
        if self._client is None:
            self._client = self._client_factory(self.credentials())
        return self._client
