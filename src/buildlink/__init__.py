"""Compact, versioned share links for build selections."""

from .catalog import PackageValidation, validate_packages
from .config import CodecConfig
from .decoder import DecodeFailure, DecodeResult, DecodeSuccess, ShareDecoder
from .encoder import EncodedShare, ShareEncoder
from .exceptions import FailureKind
from .selection import ResolvedSelection, Selection
from .url import ShareLink, assemble_link, extract_share_param

__version__ = "1.0.0"
