from pydantic import Field
from factoryops.schemas.common import CamelModel
from factoryops.schemas.user import UserResponse


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(CamelModel):
    success: bool = True
    user: UserResponse
    access_token: str
