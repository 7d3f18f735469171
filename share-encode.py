#!/usr/bin/env python3
import sys
import json

from buildlink import Selection, assemble_link
from buildlink.config import CodecConfig
from buildlink.encoder import ShareEncoder
from buildlink.exceptions import InvalidSelectionError

def encode_selection(json_str: str) -> str:
    # Parse and validate the selection, then build the link
    config = CodecConfig.from_env()
    selection = Selection.from_dict(json.loads(json_str), config.personas)
    link = assemble_link(selection, encoder=ShareEncoder(config))
    if link.blocked_count:
        print(f"{link.blocked_count} optimization(s) left out of the link for safety", file=sys.stderr)
    if link.too_long:
        print(f"Warning: link is {link.length} characters long", file=sys.stderr)
    if link.too_long_to_decode:
        print("Warning: link payload is over the decode limit and will not open", file=sys.stderr)
    return link.url

def main():
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} '<selection_json>'", file=sys.stderr)
        sys.exit(1)

    try:
        print(encode_selection(sys.argv[1]))
    except (json.JSONDecodeError, InvalidSelectionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
