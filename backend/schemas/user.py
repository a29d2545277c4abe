from pydantic import BaseModel, Field
from typing import Optional

from utils.permissions import Role


# Input schema for account creation
class UserCreate(BaseModel):
    login: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)
    phone_num: Optional[str] = None


# Output schema for profile details
class UserProfile(BaseModel):
    login: str
    role: str
    fav_games: str = ""
    phone_num: Optional[str] = None
    num_overdue_games: int = 0

    class Config:
        from_attributes = True


# Authenticated operator, passed explicitly to every menu action
class UserSession(BaseModel):
    login: str
    role: Role
