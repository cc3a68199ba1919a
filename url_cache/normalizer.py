"""URL canonicalisation used to build stable cache keys.

Two URLs that only differ by tracking parameters, fragment or host casing map
to the same normalized form and therefore to the same ``url_hash``.
"""

import hashlib
import re
from typing import Final, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

TRACKING_PARAMS: Final[frozenset] = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "fbclid",
        "gclid",
        "ref",
        "affiliate_id",
        "source",
        "tag",
    }
)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Return the canonical form of ``url`` or ``None`` for blank input.

    Unparseable input is returned as-is (after the scheme prefix) so it can
    still be hashed.
    """
    if url is None or not str(url).strip():
        return None

    url = str(url).strip()
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    try:
        parts = urlsplit(url)
        netloc = _lowercase_host(parts.netloc)
        query = _strip_tracking(parts.query)
    except ValueError:
        return url

    return urlunsplit((parts.scheme, netloc, parts.path, query, ""))


def generate_hash(normalized_url: str) -> str:
    return hashlib.sha256(normalized_url.encode("utf-8")).hexdigest()


def _strip_tracking(query: str) -> str:
    if not query:
        return ""
    pairs = parse_qsl(query, keep_blank_values=True)
    kept = [(key, value) for key, value in pairs if key.lower() not in TRACKING_PARAMS]
    return urlencode(kept) if kept else ""


def _lowercase_host(netloc: str) -> str:
    # Userinfo keeps its casing, only host[:port] is folded.
    userinfo, sep, hostport = netloc.rpartition("@")
    return f"{userinfo}{sep}{hostport.lower()}"
