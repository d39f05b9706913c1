import bcrypt

# bcrypt only looks at the first 72 bytes
_MAX_BYTES = 72

def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8")[:_MAX_BYTES], bcrypt.gensalt())
    return hashed.decode("utf-8")

def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:_MAX_BYTES], password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False
