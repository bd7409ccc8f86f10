#!/usr/bin/env python3
"""Print the X-Embedly-Signature value for a payload, for local testing."""

import json
import sys
from typing import Optional

from embedly_webhooks.services.signature import compute_signature


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: embedly-sign <secret> <payload_json>", file=sys.stderr)
        return 1

    secret, payload = args
    if not secret.strip():
        print("Error: Secret must not be empty", file=sys.stderr)
        return 1

    # Validate payload is valid JSON
    try:
        json.loads(payload)
    except json.JSONDecodeError:
        print("Error: Payload must be valid JSON", file=sys.stderr)
        return 1

    print(compute_signature(secret, payload))
    return 0


if __name__ == "__main__":
    sys.exit(main())
