"""Logo resolution for provider cards."""

from __future__ import annotations

from urllib.parse import urlparse

from appylink_shared.constants import FALLBACK_FAVICON_HOST, FAVICON_URL
from appylink_shared.models import Provider


def get_logo(provider: Provider) -> str:
    """Explicit logo, then logo_url, then the website's favicon."""
    if provider.logo:
        return provider.logo
    if provider.logo_url:
        return provider.logo_url
    host = urlparse(provider.website or "").hostname
    return FAVICON_URL.format(host=host or FALLBACK_FAVICON_HOST)
