from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        # проверяем адрес, но сохраняем его ровно в том виде, как прислали
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    class Config: from_attributes = True
