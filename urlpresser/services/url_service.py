"""
URL Shortening Service

This service handles the business logic around creating short links:
- Normalizing the submitted original URL
- Rejecting empty input
- Asking the store for a key and prefixing it with the base URL

The original URL is not validated beyond being non-empty: any string the
client submits is stored and redirected to verbatim.
"""

from urlpresser.core.exceptions import InvalidRequestError
from urlpresser.core.validators import normalize_original_url
from urlpresser.services.url_store import URLStore


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Separated from the API layer so both the plain-text and the JSON
    endpoint share the same behaviour.
    """

    def __init__(self, store: URLStore, base_url: str):
        """
        Args:
            store: The URL store owning the mappings
            base_url: Prefix for complete short URLs (ends with "/")
        """
        self.store = store
        self.base_url = base_url

    async def shorten(self, original_url: str) -> str:
        """
        Shorten a URL and return the complete short link.

        Returns:
            "<base_url><short_key>"

        Raises:
            InvalidRequestError: If the URL is empty after trimming
            PersistenceError: If the store cannot write its snapshot
        """
        original_url = normalize_original_url(original_url)
        if not original_url:
            raise InvalidRequestError()

        short_key = await self.store.get_or_create_short_url(original_url)
        return self.build_short_url(short_key)

    def build_short_url(self, short_key: str) -> str:
        return f"{self.base_url}{short_key}"
