"""Resolution of the requesting user for files API requests.

Clients authenticate with an opaque token in the ``X-Token`` header.
Whatever issued the token stores ``auth_<token>`` -> user id in the
Django cache. Session cookies are ignored: the API views are exempt
from CSRF checks, so only the explicit header may identify a user.
"""

import logging
from typing import TYPE_CHECKING, Final

from django.contrib.auth import get_user_model
from django.core.cache import cache

if TYPE_CHECKING:
    from django.http import HttpRequest

logger = logging.getLogger(__name__)

# WSGI environ key of the X-Token header
_TOKEN_META_KEY: Final = 'HTTP_X_TOKEN'
_TOKEN_CACHE_PREFIX: Final = 'auth_'


def token_cache_key(token: str) -> str:
    """Build the cache key under which a token's user id is stored.

    Args:
        token: Opaque session token.

    Returns:
        Cache key (e.g., 'auth_5f1c...').
    """
    return f'{_TOKEN_CACHE_PREFIX}{token}'


def resolve_requester(request: 'HttpRequest') -> int | None:
    """Get the id of the user making the request.

    Never raises: any failure to resolve means "unauthenticated".

    Args:
        request: Incoming HTTP request.

    Returns:
        Id of an active user, or None.
    """
    token = request.META.get(_TOKEN_META_KEY, '').strip()
    if not token:
        return None
    return _resolve_token(token)


def _resolve_token(token: str) -> int | None:
    try:
        user_id = cache.get(token_cache_key(token))
    except Exception:
        logger.exception('Token lookup failed, treating as unauthenticated')
        return None

    if user_id is None:
        logger.debug('Unknown or expired token')
        return None

    user_model = get_user_model()
    try:
        is_active = user_model.objects.filter(pk=user_id, is_active=True).exists()
    except (TypeError, ValueError):
        logger.warning('Token maps to malformed user id: %r', user_id)
        return None

    if not is_active:
        logger.warning('Token maps to missing or inactive user: %s', user_id)
        return None
    return int(user_id)
