"""
auth.py
Password hashing utilities (bcrypt hash, verify).

Uses bcrypt directly rather than passlib's backend auto-detection.
"""

from __future__ import annotations

import bcrypt

import config


def _to_bcrypt_secret(password: str) -> bytes:
    """
    Member passwords longer than 72 UTF-8 bytes are cut down to bcrypt's limit,
    so hashing never fails and verification sees the same bytes.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    """
    Salted bcrypt hash of a member password, as text for the password_hash column.
    """
    secret = _to_bcrypt_secret(password)
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(secret, salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    True when the plaintext matches a stored member password_hash.
    """
    secret = _to_bcrypt_secret(password)
    stored = password_hash.encode("utf-8")
    return bcrypt.checkpw(secret, stored)
