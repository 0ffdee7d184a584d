# ============================================================================
# FILE: songly/schemas/user.py
# ============================================================================
from pydantic import AfterValidator, BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, List

# bcrypt only hashes the first 72 bytes and rejects anything longer
BCRYPT_MAX_BYTES = 72

def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return value

Password = Annotated[str, Field(min_length=5, max_length=20), AfterValidator(_check_password_bytes)]

class UserRegister(BaseModel):
    """Schema for self-registration; never grants admin"""
    username: str = Field(..., min_length=1, max_length=25)
    password: Password
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class UserCreate(UserRegister):
    """Schema for admin-initiated user creation"""
    is_admin: bool = False

class UserUpdate(BaseModel):
    """Schema for updating a user; the username can never change"""
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: Password = None
    email: EmailStr = None

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class UserLogin(BaseModel):
    """Schema for user login"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"

class UserResponse(BaseModel):
    """Schema for user response"""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class UserOut(BaseModel):
    user: UserResponse

class UserListOut(BaseModel):
    users: List[UserResponse]

class UserCreatedOut(BaseModel):
    user: UserResponse
    token: str

class UserDeletedOut(BaseModel):
    deleted: str

class Token(BaseModel):
    """Schema for JWT token response"""
    token: str
