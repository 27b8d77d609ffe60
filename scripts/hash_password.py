#!/usr/bin/env python3
"""
Generate the admin password hash used by the login endpoint.
Usage: python scripts/hash_password.py [password]

Prompts for the password when it is not given on the command line.
"""

import getpass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from product_api.auth import hash_password


def main():
    if len(sys.argv) > 2:
        print("Usage: python scripts/hash_password.py [password]")
        sys.exit(1)

    if len(sys.argv) == 2:
        password = sys.argv[1]
    else:
        password = getpass.getpass("Admin password: ")
        if getpass.getpass("Repeat: ") != password:
            print("Passwords do not match")
            sys.exit(1)

    hashed = hash_password(password)

    print("\nAdd this to your .env file:\n")
    print(f"ADMIN_PASSWORD_HASH={hashed}")
    print()


if __name__ == "__main__":
    main()
