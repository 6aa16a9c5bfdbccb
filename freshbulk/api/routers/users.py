from fastapi import APIRouter, Depends, HTTPException

from freshbulk.api.deps import get_current_user, get_optional_user, get_storage
from freshbulk.domain.schemas import UserCreate, UserOut, UserRole
from freshbulk.repos.storage import Storage
from freshbulk.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserOut, status_code=201)
def register(
    payload: UserCreate,
    caller: UserOut | None = Depends(get_optional_user),
    storage: Storage = Depends(get_storage),
):
    # konto admina moze zalozyc tylko inny admin
    if payload.role == UserRole.ADMIN.value and not (caller and caller.is_admin):
        raise HTTPException(status_code=403, detail="Tylko administrator moze tworzyc administratorow")

    service = UserService(storage)
    try:
        return service.register(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/me", response_model=UserOut)
def me(user: UserOut = Depends(get_current_user)):
    return user
