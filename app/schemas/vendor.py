from pydantic import BaseModel, Field, constr, model_validator
from typing import List, Optional


class VendorProfileRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    image_url: Optional[str] = None
    areas: List[str] = Field(default_factory=list)
    price_min: Optional[int] = Field(default=None, ge=0)
    price_max: Optional[int] = Field(default=None, ge=0)
    style_tags: List[str] = Field(default_factory=list)
    services: Optional[str] = None
    constraints: Optional[str] = None
    is_default: bool = False

    @model_validator(mode="after")
    def _price_range(self):
        if self.price_min is not None and self.price_max is not None:
            if self.price_min > self.price_max:
                raise ValueError("price_min must not exceed price_max")
        return self


class VendorProfileUpdateRequest(BaseModel):
    """Partial update; only the fields sent are applied."""

    name: constr(strip_whitespace=True, min_length=1, max_length=100) = None
    image_url: Optional[str] = None
    areas: List[str] = None
    price_min: Optional[int] = Field(default=None, ge=0)
    price_max: Optional[int] = Field(default=None, ge=0)
    style_tags: List[str] = None
    services: Optional[str] = None
    constraints: Optional[str] = None
    is_default: bool = None


class VendorUpdateRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100) = None
    bio: Optional[str] = None
    category_ids: List[int] = None


class DirectoryQuery(BaseModel):
    category: Optional[constr(strip_whitespace=True, min_length=1)] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
