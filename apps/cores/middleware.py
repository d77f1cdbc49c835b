import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.db import close_old_connections

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):
    """
    Websocket auth: `?token=<access token>` resolves scope["user"] the same
    way bearer tokens do over HTTP.
    """

    async def __call__(self, scope, receive, send):
        # Lazy imports to avoid AppRegistryNotReady
        from django.contrib.auth.models import AnonymousUser
        from rest_framework.exceptions import AuthenticationFailed
        from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

        from apps.users.authentication import resolve_raw_token

        close_old_connections()

        query_string = parse_qs(scope.get("query_string", b"").decode())
        token = query_string.get("token")
        scope["user"] = AnonymousUser()

        if token:
            try:
                scope["user"] = await database_sync_to_async(resolve_raw_token)(token[0])
            except (InvalidToken, TokenError, AuthenticationFailed) as exc:
                logger.info("Websocket token rejected: %s", exc)

        return await super().__call__(scope, receive, send)
