"""Derive the externally visible address from a forwarding header and patch a document with it.

Everything here is pure: no Flask request, no I/O. The endpoint calls these helpers
once per request with the header value and the path it was reached on locally.
"""
# Type hints
from typing import Any, Dict, Optional

# Standard library imports
import re
from urllib.parse import unquote, urlsplit

# Third-party imports
from pydantic import BaseModel, Field

# Header set by the upstream proxy with the full URL the client requested
DEFAULT_FORWARDED_URL_HEADER = "X-Original-Request-URL"

# Bracketed IPv6 literal (optional zone) or reg-name, then an optional numeric port
HOST_PATTERN = re.compile(r"^(\[[0-9A-Fa-f:.]+(%25[^\]]+)?\]|[A-Za-z0-9._~!$&'()*+,;=%-]+)(:[0-9]*)?$")

# A "%" not followed by two hex digits
BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _has_control_or_space(value: str) -> bool:
    return any(ord(c) < 0x21 or ord(c) == 0x7f or c.isspace() for c in value)


class ForwardedURL(BaseModel):
    """
    The parts of the client-facing URL that end up in the API description.

    scheme: lower-cased URL scheme, e.g. 'https'.
    host: host with optional port, without any user info.
    path: percent-decoded path, possibly empty.
    """
    scheme: str = Field(..., description="URL scheme the client used.")
    host: str = Field(..., description="Host (and port) the client used.")
    path: str = Field("", description="Decoded path the client requested.")


def parse_forwarded_url(value: Optional[str]) -> Optional[ForwardedURL]:
    """
    Parse a forwarding header value into a ForwardedURL.

    Args:
        value: raw header value, or None when the header was not sent.

    Returns:
        ForwardedURL for an absolute URL, otherwise None. Absent, blank and
        malformed values all return None so the caller serves the document as is.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    # urlsplit silently drops some control characters, so check the raw value
    if _has_control_or_space(value):
        return None
    try:
        parts = urlsplit(value)
        # Accessing .port validates it; a non-numeric port raises ValueError
        parts.port
    except ValueError:
        return None
    host = parts.netloc.rpartition("@")[2]
    if not parts.scheme or not host:
        return None
    if not HOST_PATTERN.match(host) or BAD_ESCAPE_PATTERN.search(parts.path):
        return None
    return ForwardedURL(scheme=parts.scheme.lower(), host=host, path=unquote(parts.path))


def compute_base_path(forwarded_path: str, local_path: str) -> str:
    """
    Work out the prefix the proxy puts in front of our locally mounted path.

    The comparison is an exact, case sensitive suffix match. When the forwarded
    path does not end with the local path the prefix cannot be known, and '/'
    is returned.

    >>> compute_base_path("/__publish-carousel/__api", "/__api")
    '/__publish-carousel'
    >>> compute_base_path("/__publish-carousel/hello", "/__api")
    '/'
    """
    if not local_path or not forwarded_path.endswith(local_path):
        return "/"
    base_path = forwarded_path[: -len(local_path)]
    return base_path or "/"


def rewrite_document(
    document: Dict[Any, Any],
    forwarded: ForwardedURL,
    local_path: str,
    version: str,
) -> Dict[Any, Any]:
    """
    Overwrite host, schemes, basePath and info.version in place.

    Args:
        document: freshly parsed description mapping; mutated and returned.
        forwarded: client-facing URL parts.
        local_path: path this endpoint was reached on by the proxy.
        version: build version to publish in the info section.

    Returns:
        The same mapping, for convenience.
    """
    document["host"] = forwarded.host
    # Only the scheme the client actually used is known to be reachable
    document["schemes"] = [forwarded.scheme]
    document["basePath"] = compute_base_path(forwarded.path, local_path)
    info = document.get("info")
    if isinstance(info, dict):
        info["version"] = version
    return document
