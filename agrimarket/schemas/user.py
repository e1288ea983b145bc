from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, ConfigDict
from agrimarket.schemas.base import TimestampSchema

class UserBase(BaseModel):
    username: str
    email: EmailStr
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Literal["farmer", "customer"] = "customer"

class UserCreate(UserBase):
    password: str

class User(TimestampSchema, UserBase):
    id: int
    is_active: bool
    
    model_config = ConfigDict(from_attributes=True)

class UserWithToken(BaseModel):
    user: User
    access_token: str
    token_type: str
    
    model_config = ConfigDict(from_attributes=True)

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenData(BaseModel):
    username: Optional[str] = None
