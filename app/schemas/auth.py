from typing import List

from pydantic import BaseModel, EmailStr, Field, constr


class LoginRequest(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class VendorSignupRequest(BaseModel):
    email: EmailStr
    password: constr(min_length=6)
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    category_ids: List[int] = Field(default_factory=list)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)
