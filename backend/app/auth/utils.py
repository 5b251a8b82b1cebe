from passlib.context import CryptContext

from app.core.config import settings

# Password hashing with bcrypt at a fixed cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.PASSWORD_HASH_ROUNDS,
)


def generate_password_hash(password: str) -> str:
    """
    Hash a password with bcrypt.
    The salt is generated per call, so equal passwords give different digests.
    """
    return pwd_context.hash(password)
