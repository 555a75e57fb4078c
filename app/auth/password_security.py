from passlib.context import CryptContext

# ---------------------------
# Password hashing context
# ---------------------------
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# hashed once so unknown emails cost the same as wrong passwords
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verifies a plain password against the stored hash.
    A missing hash still runs one verification and returns False.
    """
    if not hashed_password:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain_password, hashed_password)
