from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from campusmart.api.errors import service_errors
from campusmart.data.database import get_db
from campusmart.services.user_service import UserService
from campusmart.domain.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=UserRead)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    with service_errors("Failed to create user"):
        return service.create_user(payload)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    with service_errors("Failed to fetch user"):
        return service.get_user(user_id)
