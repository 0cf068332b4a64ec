"""
Password hashing
"""

from werkzeug.security import generate_password_hash

def get_password_hash(password: str) -> str:
    return generate_password_hash(password)
