"""Wire record packing: compact JSON, zlib, unpadded base64url."""

import base64
import binascii
import json
import re
import zlib

from .exceptions import DecompressionError, MalformedStructureError

# Short keys in the order they are written. The order is part of the format.
VERSION_KEY = "v"
CPU_KEY = "c"
GPU_KEY = "g"
DNS_KEY = "d"
PERIPHERALS_KEY = "p"
MONITORS_KEY = "m"
OPTIMIZATIONS_KEY = "o"
PACKAGES_KEY = "s"
PERSONA_KEY = "r"

FIELD_ORDER = (
    VERSION_KEY, CPU_KEY, GPU_KEY, DNS_KEY, PERIPHERALS_KEY,
    MONITORS_KEY, OPTIMIZATIONS_KEY, PACKAGES_KEY, PERSONA_KEY,
)

_PAYLOAD_CHARS = re.compile(r"[A-Za-z0-9_-]+")


def pack(record: dict) -> str:
    """Serialize a wire record and return it as compressed base64url text."""
    ordered = {key: record[key] for key in FIELD_ORDER if key in record}
    json_str = json.dumps(ordered, separators=(",", ":"))
    compressed = zlib.compress(json_str.encode())
    return base64.urlsafe_b64encode(compressed).decode().rstrip("=")


def unpack(payload: str, max_bytes: int) -> str:
    """Reverse ``pack`` up to the JSON text, inflating at most ``max_bytes``."""
    if not _PAYLOAD_CHARS.fullmatch(payload):
        raise DecompressionError()
    # Fix missing base64 padding if needed
    padded = payload + "==="[:(4 - len(payload) % 4) % 4]
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise DecompressionError() from e

    inflater = zlib.decompressobj()
    try:
        data = inflater.decompress(raw, max_bytes)
    except zlib.error as e:
        raise DecompressionError() from e
    if inflater.unconsumed_tail or not inflater.eof:
        # either larger than max_bytes or truncated
        raise DecompressionError()

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedStructureError("not UTF-8 text") from e


def parse_record(text: str) -> dict:
    """Parse decompressed text into a wire record with an integer version."""
    try:
        record = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedStructureError() from e
    if not isinstance(record, dict):
        raise MalformedStructureError()
    version = record.get(VERSION_KEY)
    if not isinstance(version, int) or isinstance(version, bool):
        raise MalformedStructureError("missing schema version")
    return record
