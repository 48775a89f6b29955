"""
Tests for the shortening and redirect services and the input validators.
"""

import pytest

from urlpresser.core.exceptions import InvalidRequestError, ShortCodeNotFoundError
from urlpresser.core.validators import normalize_original_url, sanitize_short_code
from urlpresser.services.redirect_service import RedirectService
from urlpresser.services.url_service import URLShorteningService
from urlpresser.services.url_store import URLStore


class TestShortCodeSanitizer:
    """Test short code validation."""

    def test_valid_codes(self):
        """Base62 codes up to the maximum key length are accepted."""
        for code in ["abc123", "ABCdef9", "0000000z"]:
            assert sanitize_short_code(code) == code

    def test_whitespace_is_rejected(self):
        assert sanitize_short_code(" abc123 ") is None
        assert sanitize_short_code("abc123\n") is None

    def test_invalid_codes(self):
        """Codes that could never have been issued are rejected."""
        invalid_codes = [
            "",
            None,
            "abc-12",
            "abc/12",
            "../etc",
            "abcdefghi",  # longer than any generated key
        ]
        for code in invalid_codes:
            assert sanitize_short_code(code) is None, f"Should be invalid: {code!r}"


class TestNormalizeOriginalURL:
    """Test trimming of submitted URLs."""

    def test_trims_whitespace(self):
        assert normalize_original_url("  https://example.com/ \r\n") == "https://example.com/"

    def test_none_is_empty(self):
        assert normalize_original_url(None) == ""

    def test_url_is_otherwise_untouched(self):
        """No scheme or format validation is applied."""
        assert normalize_original_url("not a url at all") == "not a url at all"


class TestURLShorteningService:
    """Test building complete short URLs."""

    @pytest.mark.asyncio
    async def test_short_url_is_base_plus_key(self, scripted_generator):
        store = URLStore.open(generator=scripted_generator("abc123"))
        service = URLShorteningService(store, base_url="http://localhost:8000/")

        assert await service.shorten("https://example.com/") == "http://localhost:8000/abc123"

    @pytest.mark.asyncio
    async def test_empty_url_is_rejected(self):
        service = URLShorteningService(URLStore.open(), base_url="http://localhost:8000/")
        with pytest.raises(InvalidRequestError):
            await service.shorten("  ")

    @pytest.mark.asyncio
    async def test_trimmed_url_is_stored(self, scripted_generator):
        store = URLStore.open(generator=scripted_generator("abc123"))
        service = URLShorteningService(store, base_url="http://localhost:8000/")

        await service.shorten(" https://example.com/ ")
        assert await store.resolve_original_url("abc123") == ("https://example.com/", True)


class TestRedirectService:
    """Test resolving short codes."""

    @pytest.mark.asyncio
    async def test_known_code(self, scripted_generator):
        store = URLStore.open(generator=scripted_generator("abc123"))
        await store.get_or_create_short_url("https://example.com/")

        assert await RedirectService(store).get_redirect_url("abc123") == "https://example.com/"

    @pytest.mark.asyncio
    async def test_unknown_code(self):
        with pytest.raises(ShortCodeNotFoundError):
            await RedirectService(URLStore.open()).get_redirect_url("abc123")

    @pytest.mark.asyncio
    async def test_malformed_code(self):
        with pytest.raises(ShortCodeNotFoundError):
            await RedirectService(URLStore.open()).get_redirect_url("abc-123")

    def test_not_found_is_a_bad_request(self):
        """Unknown codes are reported to clients like any other bad request."""
        assert issubclass(ShortCodeNotFoundError, InvalidRequestError)
