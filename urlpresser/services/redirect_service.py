"""
Redirect Service

This service handles URL redirection logic.
Separated from the shortening service because it only reads from the store.
"""

from urlpresser.core.exceptions import ShortCodeNotFoundError
from urlpresser.core.validators import sanitize_short_code
from urlpresser.services.url_store import URLStore


class RedirectService:
    """
    Service for handling URL redirections.
    """

    def __init__(self, store: URLStore):
        """
        Args:
            store: The URL store to resolve keys against
        """
        self.store = store

    async def get_redirect_url(self, short_code: str) -> str:
        """
        Get the original URL for redirection.

        Raises:
            ShortCodeNotFoundError: If the code is malformed or was never issued
        """
        sanitized_code = sanitize_short_code(short_code)
        if not sanitized_code:
            raise ShortCodeNotFoundError(short_code)

        original_url, found = await self.store.resolve_original_url(sanitized_code)
        if not found:
            raise ShortCodeNotFoundError(sanitized_code)
        return original_url
