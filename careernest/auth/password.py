"""
Password Hashing and Generation
Uses bcrypt for secure password storage
"""

from passlib.context import CryptContext
import secrets
import string

# Password context for hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain password

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from the store

    Returns:
        True if password matches, False otherwise (including a missing hash)
    """
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_random_password(length: int = 8) -> str:
    """
    Generate a temporary password for accounts created on a user's behalf

    Args:
        length: Length of password (default 8)

    Returns:
        Random password of lowercase letters and digits
    """
    characters = string.ascii_lowercase + string.digits
    return ''.join(secrets.choice(characters) for _ in range(length))
