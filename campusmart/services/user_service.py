from sqlalchemy.orm import Session
from campusmart.data.models.user import UserModel
from campusmart.domain.errors import NotFoundError
from campusmart.repos.user_repo import UserRepo
from campusmart.domain.schemas import UserCreate, UserRead


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.repo.get_by_username(payload.username)
        if existing:
            return UserRead.model_validate(existing)

        user = UserModel(
            username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        created = self.repo.create_user(user)
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def exists(self, user_id: int) -> bool:
        return self.repo.exists(user_id)

    def display_name(self, user_id: int) -> str:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.display_name
