"""Normalization helpers for user-submitted profile values."""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*://")
_DEFAULT_PORTS = ("443", "80")


def normalize_url(url: str) -> str:
    """Rewrite a user-supplied URL into a canonical absolute https form.

    ``"example.com"`` becomes ``"https://example.com"``. Host is lowercased,
    a leading ``www.`` and default ports are dropped, tracking ``utm_*``
    query parameters are removed and the remaining ones sorted, and the
    trailing slash is stripped. Blank input yields ``""``.
    """
    url = url.strip()
    if not url:
        return ""

    if url.startswith("//"):
        url = f"https:{url}"
    elif not _SCHEME_RE.match(url):
        url = f"https://{url}"

    parts = urlsplit(url)

    scheme = parts.scheme.lower()
    if scheme == "http":
        scheme = "https"

    userinfo, at, host = parts.netloc.rpartition("@")
    host = host.lower()
    hostname, colon, port = host.rpartition(":")
    if colon and port in _DEFAULT_PORTS:
        host = hostname
    if host.startswith("www.") and "." in host[4:]:
        host = host[4:]
    netloc = f"{userinfo}{at}{host}"

    path = re.sub(r"/{2,}", "/", parts.path).rstrip("/")

    query = urlencode(
        sorted(
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if not key.lower().startswith("utm_")
        )
    )

    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def split_skills(skills: str | list[str]) -> list[str]:
    """Accept a list or a comma-separated string; trim and drop blanks.

    >>> split_skills("a, b , c")
    ['a', 'b', 'c']
    """
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item and item.strip()]
