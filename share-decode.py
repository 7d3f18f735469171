#!/usr/bin/env python3
import sys
import json

from buildlink import ShareDecoder, extract_share_param

def decode_link(link: str) -> dict:
    # Accepts a full URL, a #b=/b= fragment or the bare version.payload
    result = ShareDecoder().decode(extract_share_param(link))
    if not result.ok:
        raise ValueError(result.message)
    return result.selection.to_dict()

def main():
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <share_link>", file=sys.stderr)
        sys.exit(1)
    try:
        decoded = decode_link(sys.argv[1])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    for warning in decoded["warnings"]:
        print(f"Warning: {warning}", file=sys.stderr)
    print(json.dumps(decoded, separators=(",", ":")))

if __name__ == "__main__":
    main()
