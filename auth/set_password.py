"""
Operator password setup.

Prompts for a password and prints the bcrypt hash to store in Vault at
dealer/operator (field password_hash).

Usage:
    python -m auth.set_password
"""

import getpass
import sys

from auth.service import hash_password


def main():
    """Prompt twice for a password and print its bcrypt hash."""
    password = getpass.getpass("New operator password: ")
    if not password:
        print("Error: Password cannot be empty.")
        sys.exit(1)

    if getpass.getpass("Confirm password: ") != password:
        print("Error: Passwords do not match.")
        sys.exit(1)

    print(hash_password(password))
    print("Store this as password_hash under dealer/operator in Vault.")


if __name__ == "__main__":
    main()
