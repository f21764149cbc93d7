"""Print a password hash for a users.json entry.

Usage: python scripts/hash_password.py <password>
"""

from __future__ import annotations

import sys

from werkzeug.security import generate_password_hash


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("Usage: python scripts/hash_password.py <password>")
    print(generate_password_hash(sys.argv[1]))


if __name__ == "__main__":
    main()
