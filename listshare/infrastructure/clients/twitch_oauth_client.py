from __future__ import annotations

from dataclasses import dataclass
import logging
from urllib.parse import urlencode

import httpx

from listshare.application.ports.twitch_oauth_port import TwitchOauthPort
from listshare.domain.entities.user import TwitchProfile
from listshare.domain.exceptions import OAuthProviderError


logger = logging.getLogger(__name__)


TWITCH_AUTHORIZE_URL = "https://id.twitch.tv/oauth2/authorize"
TWITCH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"
TWITCH_USERS_URL = "https://api.twitch.tv/helix/users"
TWITCH_SCOPES = "user:read:email"


@dataclass(frozen=True)
class TwitchOAuthClientSettings:
    client_id: str
    client_secret: str
    redirect_uri: str
    timeout_seconds: float


class TwitchOAuthClient(TwitchOauthPort):
    def __init__(
        self,
        settings: TwitchOAuthClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def authorize_url(self) -> str:
        query = urlencode(
            {
                "client_id": self._settings.client_id,
                "redirect_uri": self._settings.redirect_uri,
                "response_type": "code",
                "scope": TWITCH_SCOPES,
            }
        )
        return f"{TWITCH_AUTHORIZE_URL}?{query}"

    def exchange_code(self, *, code: str) -> str:
        form = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self._settings.redirect_uri,
        }
        try:
            with self._client() as client:
                response = client.post(TWITCH_TOKEN_URL, data=form)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("twitch_oauth_client: exchange_code_failed error=%s", type(exc).__name__)
            raise OAuthProviderError("Failed to exchange authorization code.") from exc

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(access_token, str) or not access_token:
            raise OAuthProviderError("Twitch token response missing access_token.")
        return access_token

    def get_user_profile(self, *, access_token: str) -> TwitchProfile:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Client-Id": self._settings.client_id,
        }
        try:
            with self._client() as client:
                response = client.get(TWITCH_USERS_URL, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("twitch_oauth_client: get_user_failed error=%s", type(exc).__name__)
            raise OAuthProviderError("Failed to fetch Twitch user.") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not data:
            raise OAuthProviderError("No user returned from Twitch.")
        row = data[0]
        if not row.get("id") or not row.get("login"):
            raise OAuthProviderError("Twitch user payload missing id or login.")

        logger.info("twitch_oauth_client: fetched_user twitch_id=%s", row["id"])
        return TwitchProfile(
            twitch_id=str(row["id"]),
            username=str(row["login"]),
            display_name=row.get("display_name"),
            profile_image_url=row.get("profile_image_url"),
            email=row.get("email"),
        )

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self._settings.timeout_seconds, transport=self._transport)
