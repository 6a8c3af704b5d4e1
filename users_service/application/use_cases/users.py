from ...domain.entities import User
from ..dto import CreateUserInput

class IUserRepository:
    def create(self, fields: dict) -> User: ...
    def list_all(self) -> list[User]: ...

class CreateUser:
    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, data: CreateUserInput) -> User:
        return self.repo.create(data.as_fields())

class ListUsers:
    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self) -> list[User]:
        return self.repo.list_all()
