from __future__ import annotations

import logging
from uuid import uuid4

from listshare.application.dto.auth import LoginTwitchInput, LoginTwitchOutput
from listshare.application.ports.token_port import TokenPort
from listshare.application.ports.twitch_oauth_port import TwitchOauthPort
from listshare.application.ports.user_port import UserPort
from listshare.application.services.clock import utcnow


logger = logging.getLogger(__name__)


class LoginTwitchUseCase:
    def __init__(
        self,
        *,
        user_port: UserPort,
        twitch_oauth_port: TwitchOauthPort,
        token_port: TokenPort,
    ):
        self._user_port = user_port
        self._twitch_oauth_port = twitch_oauth_port
        self._token_port = token_port

    def execute(self, command: LoginTwitchInput) -> LoginTwitchOutput:
        access_token = self._twitch_oauth_port.exchange_code(code=command.code)
        profile = self._twitch_oauth_port.get_user_profile(access_token=access_token)
        now = utcnow()

        user = self._user_port.find_by_twitch_id(twitch_id=profile.twitch_id)
        if user is None:
            user = self._user_port.create(user_id=str(uuid4()), profile=profile, now=now)
            logger.info("login_twitch: user_created user_id=%s", user.id)
        else:
            user = self._user_port.update_provider_info(user_id=user.id, profile=profile, now=now)

        session_token, expires_at = self._token_port.issue(user=user, now=now)
        logger.info("login_twitch: session_issued user_id=%s", user.id)
        return LoginTwitchOutput(user=user, session_token=session_token, expires_at=expires_at)
