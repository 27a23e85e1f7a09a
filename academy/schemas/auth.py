from pydantic import BaseModel
from academy.schemas.common import StrictModel

class LoginIn(StrictModel):
    username: str
    password: str

class UserOut(BaseModel):
    id: str
    username: str
    name: str
    roles: list[str]
    activeRole: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
