"""Full share links: assembly and carrier extraction."""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from .encoder import ShareEncoder
from .selection import Selection

CARRIER_PARAM = "b"


@dataclass(frozen=True)
class ShareLink:
    fragment: str
    url: str
    length: int
    too_long: bool
    blocked_count: int = 0
    too_long_to_decode: bool = False


def assemble_link(selection: Selection, origin: Optional[str] = None,
                  encoder: Optional[ShareEncoder] = None) -> ShareLink:
    """Encode ``selection`` and wrap it into a full link under ``origin``."""
    encoder = encoder or ShareEncoder()
    cfg = encoder.config
    encoded = encoder.encode(selection)
    base = (origin or cfg.origin).rstrip("/")
    url = f"{base}/?{CARRIER_PARAM}={encoded.fragment}"
    payload_length = len(encoded.fragment.partition(".")[2])
    undecodable = payload_length > cfg.max_payload_length
    if undecodable:
        logging.warning("Share payload is %s chars, over the %s char decode limit",
                        payload_length, cfg.max_payload_length)
    return ShareLink(
        fragment=encoded.fragment,
        url=url,
        length=len(url),
        too_long=len(url) > cfg.url_warning_threshold,
        blocked_count=encoded.blocked_count,
        too_long_to_decode=undecodable,
    )


def extract_share_param(text: str) -> str:
    """Return the ``b`` carrier value from a full URL, or ``text`` unchanged.

    Handles ``https://host/?b=...`` as well as the older
    ``https://host/#b=...`` form. Anything that is not a URL is returned as
    is and left to the decoder's own prefix handling.
    """
    text = text.strip()
    if "://" not in text:
        return text
    parts = urlsplit(text)
    values = parse_qs(parts.query).get(CARRIER_PARAM)
    if values:
        return values[0]
    if parts.fragment.startswith(f"{CARRIER_PARAM}="):
        return parts.fragment[len(CARRIER_PARAM) + 1:]
    return ""
