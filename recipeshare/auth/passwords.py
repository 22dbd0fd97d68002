from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes and recent releases refuse longer input
MAX_PASSWORD_BYTES = 72


def check_password_length(plain: str) -> str:
    if len(plain.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return plain


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(plain.encode(), hashed.encode())
