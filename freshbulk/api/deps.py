# freshbulk/api/deps.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from freshbulk.data.database import SessionLocal
from freshbulk.data.seed import seed_products
from freshbulk.domain.schemas import UserOut
from freshbulk.repos.mem_storage import MemStorage
from freshbulk.repos.sql_storage import SqlStorage
from freshbulk.repos.storage import Storage
from freshbulk.services.notification_service import NotificationService
from freshbulk.services.user_service import UserService
from freshbulk.utils.settings import (
    STORAGE_BACKEND,
    SEED_PRODUCTS,
    ADMIN_USERNAME,
    ADMIN_PASSWORD,
    ADMIN_EMAIL,
)

security = HTTPBasic()
optional_security = HTTPBasic(auto_error=False)

_mem_storage: MemStorage | None = None


def build_mem_storage(
    seed: bool = SEED_PRODUCTS,
    admin_password: str = ADMIN_PASSWORD,
) -> MemStorage:
    """Swiezy store w pamieci: przykladowe produkty i admin z ustawien."""
    storage = MemStorage()
    if seed:
        seed_products(storage)
    if admin_password:
        UserService(storage).ensure_admin(ADMIN_USERNAME, admin_password, ADMIN_EMAIL)
    return storage


def _get_mem_storage() -> MemStorage:
    global _mem_storage
    if _mem_storage is None:
        _mem_storage = build_mem_storage()
    return _mem_storage


def get_storage():
    if STORAGE_BACKEND == "sql":
        db = SessionLocal()
        try:
            yield SqlStorage(db)
        finally:
            db.close()
    else:
        yield _get_mem_storage()


def get_notification_service() -> NotificationService:
    return NotificationService()


def _authenticate(credentials: HTTPBasicCredentials, storage: Storage) -> UserOut:
    user = UserService(storage).authenticate(credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Nieprawidlowe dane logowania",
            headers={"WWW-Authenticate": "Basic"},
        )
    return UserOut.model_validate(user.model_dump())


def get_current_user(
    credentials: HTTPBasicCredentials = Depends(security),
    storage: Storage = Depends(get_storage),
) -> UserOut:
    return _authenticate(credentials, storage)


def get_optional_user(
    credentials: HTTPBasicCredentials | None = Depends(optional_security),
    storage: Storage = Depends(get_storage),
) -> UserOut | None:
    if credentials is None:
        return None
    return _authenticate(credentials, storage)


def require_admin(user: UserOut = Depends(get_current_user)) -> UserOut:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Wymagane uprawnienia administratora")
    return user
