"""Input and output validation helpers.

``is_well_formed_http_url`` guards the request boundary: only absolute
``http``/``https`` URLs with a routable-looking host are handed to the
browser.  ``validate_scraped_record`` is a structural check on the record the
session manager returns, so extraction drift can never put a malformed
payload on the wire.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

_HTTP_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)

_SCHEME_PREFIXES: tuple[str, ...] = ("http://", "https://")

_LABEL_RE = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
_TLD_RE = re.compile(r"^(?:[a-z]{2,63}|xn--[a-z0-9-]{1,59})$")

#: Keys every scraped record must carry on the wire.
RECORD_TEXT_FIELDS: tuple[str, ...] = ("title", "metaDescription", "heading")
RECORD_STATUS_FIELD: str = "statusCode"


def sanitize_url(url: str) -> str:
    """Strip surrounding whitespace from a user-supplied URL."""
    return url.strip()


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
        return True
    except ValueError:
        pass

    labels = host.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not all(_LABEL_RE.match(label) for label in labels):
        return False
    return bool(_TLD_RE.match(labels[-1]))


def is_well_formed_http_url(value: str) -> bool:
    """Return ``True`` if *value* is an absolute http(s) URL.

    The scheme must be spelled out, the string may not contain inner
    whitespace, and the host must be an IP address or a dotted domain name
    ending in an alphabetic top-level domain.  ``localhost`` and other
    single-label hosts are rejected.

    Args:
        value: Raw candidate string; surrounding whitespace is ignored.

    Returns:
        Whether the browser may be pointed at the URL.
    """
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate.lower().startswith(_SCHEME_PREFIXES):
        return False
    if any(ch.isspace() for ch in candidate):
        return False

    try:
        parsed = _HTTP_URL_ADAPTER.validate_python(candidate)
    except ValidationError:
        return False

    if not parsed.host:
        return False
    return _is_valid_host(parsed.host.lower())


def validate_scraped_record(data: Any) -> bool:
    """Check the wire shape of a scraped record.

    All four keys must be present; ``title``, ``metaDescription`` and
    ``heading`` must each be ``None`` or a string; ``statusCode`` must be an
    integer in ``[100, 599]``.

    Args:
        data: Candidate record, normally ``ScrapedRecord.to_dict()``.

    Returns:
        ``True`` when the record is well formed.
    """
    if not isinstance(data, Mapping):
        return False

    for key in (*RECORD_TEXT_FIELDS, RECORD_STATUS_FIELD):
        if key not in data:
            return False

    for key in RECORD_TEXT_FIELDS:
        value = data[key]
        if value is not None and not isinstance(value, str):
            return False

    status = data[RECORD_STATUS_FIELD]
    # bool is an int subclass; True must not pass as a status code.
    if isinstance(status, bool) or not isinstance(status, int):
        return False
    return 100 <= status <= 599
