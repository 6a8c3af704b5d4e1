import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import UserORM
from .metrics import store_operations_total
from ..domain.entities import User
from ..application.use_cases.users import IUserRepository

logger = structlog.get_logger()

def to_domain(u: UserORM) -> User:
    return User(id=u.id, name=u.name, email=u.email)

class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def create(self, fields: dict) -> User:
        store_operations_total.labels(operation="create").inc()
        row = UserORM(name=fields.get("name"), email=fields.get("email"))
        try:
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("store_create_failed", email=fields.get("email"))
            raise
        return to_domain(row)

    def list_all(self) -> list[User]:
        store_operations_total.labels(operation="list_all").inc()
        try:
            rows = self.db.execute(select(UserORM).order_by(UserORM.id)).scalars().all()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("store_list_failed")
            raise
        return [to_domain(r) for r in rows]
