"""
Script to create the Admin account
Run this once to bootstrap the platform (public registration only creates students)
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from careernest.auth import ADMIN, generate_random_password
from careernest.errors import DomainError
from careernest.repositories import create_store
from careernest.services.identity_service import IdentityService


async def create_admin(username: str, email: str, name: str = None, password: str = None):
    """
    Create an admin user

    Args:
        username: Login username
        email: Admin email
        name: Display name
        password: Password (if None, will generate random)
    """
    store = create_store("sql")
    await store.connect()

    try:
        generated = password is None
        if generated:
            password = generate_random_password(12)

        user = await IdentityService(store).create_user({
            "username": username,
            "email": email,
            "name": name or "Administrator",
            "password": password,
            "role": ADMIN,
        })

        print("Admin created successfully!")
        print(f"   ID: {user['id']}")
        print(f"   Username: {username}")
        print(f"   Email: {email}")
        if generated:
            print(f"   Password: {password}")
            print("   IMPORTANT: Save this password, it is not stored in plain text.")

    except DomainError as e:
        print(f"Error creating admin: {e.message}")

    finally:
        await store.disconnect()


def main():
    parser = argparse.ArgumentParser(description="Create the CareerNest admin account")
    parser.add_argument("--username", help="Admin username")
    parser.add_argument("--email", help="Admin email")
    parser.add_argument("--name", help="Display name")
    parser.add_argument("--password", help="Password (prompted when omitted; generated when left blank)")
    args = parser.parse_args()

    username = args.username or input("Enter username: ").strip()
    email = args.email or input("Enter email: ").strip()

    password = args.password
    if password is None and sys.stdin.isatty():
        password = getpass.getpass("Password (leave blank to generate): ").strip() or None
        if password and password != getpass.getpass("Confirm password: ").strip():
            print("Passwords do not match!")
            return
    if password is not None and len(password) < 8:
        print("Password must be at least 8 characters!")
        return

    asyncio.run(create_admin(username, email, args.name, password))


if __name__ == "__main__":
    main()
