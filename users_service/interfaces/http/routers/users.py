from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.repositories import UserRepository
from ....application.dto import CreateUserInput
from ....application.use_cases.users import CreateUser, ListUsers
from ..schemas import UserCreate, UserOut

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserOut)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    # ошибки хранилища не перехватываем: уходят в дефолтный обработчик (500)
    uc = CreateUser(repo=UserRepository(db))
    user = uc.execute(CreateUserInput(name=payload.name, email=payload.email))
    return UserOut(id=user.id, name=user.name, email=user.email)

@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    users = ListUsers(repo=UserRepository(db)).execute()
    return [UserOut(id=u.id, name=u.name, email=u.email) for u in users]
