# freshbulk/services/user_service.py
import hashlib
import hmac
import secrets

from freshbulk.domain.schemas import UserCreate, UserRecordIn, UserInDB, UserRole
from freshbulk.repos.storage import Storage
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)

# parametry scrypt, klucz 64 bajty
_SCRYPT_N = 2 ** 14
_SCRYPT_R = 8
_SCRYPT_P = 1
_KEY_LEN = 64


def _scrypt(password: str, salt: str) -> str:
    return hashlib.scrypt(
        password.encode(),
        salt=salt.encode(),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_LEN,
    ).hex()


def hash_password(password: str) -> str:
    """Zwraca '<hash>.<salt>' (hex)."""
    salt = secrets.token_hex(16)
    return f"{_scrypt(password, salt)}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    hashed, sep, salt = stored.partition(".")
    if not sep or not salt:
        return False
    return hmac.compare_digest(_scrypt(password, salt), hashed)


class UserService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def register(self, payload: UserCreate) -> UserInDB:
        if self.storage.get_user_by_username(payload.username):
            raise ValueError("Nazwa uzytkownika jest juz zajeta")

        user = self.storage.create_user(
            UserRecordIn(
                username=payload.username,
                password=hash_password(payload.password),
                email=payload.email,
                role=payload.role,
            )
        )
        logger.info(f"Zarejestrowano uzytkownika {user.username} (rola: {user.role})")
        return user

    def authenticate(self, username: str, password: str) -> UserInDB | None:
        user = self.storage.get_user_by_username(username)
        if not user or not verify_password(password, user.password):
            logger.info(f"Nieudane logowanie dla {username}")
            return None
        return user

    def ensure_admin(self, username: str, password: str, email: str) -> UserInDB:
        """Tworzy admina jesli nazwa jest wolna, w przeciwnym razie zwraca istniejacego."""
        existing = self.storage.get_user_by_username(username)
        if existing:
            return existing

        return self.register(
            UserCreate(username=username, password=password, email=email, role=UserRole.ADMIN)
        )
