#!/usr/bin/env python3
"""Hash the moderator password for ADMIN_PASSWORD."""
import sys

from campusvibe.core.security import get_password_hash

if len(sys.argv) != 2:
    print("Usage: python hash_password.py 'your-password-here'")
    sys.exit(1)

password = sys.argv[1]

if len(password) < 8:
    print("Error: Password must be at least 8 characters long")
    sys.exit(1)

print("Add this to your .env file:")
print(f"ADMIN_PASSWORD={get_password_hash(password)}")
