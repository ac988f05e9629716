from pydantic import BaseModel, field_validator
from typing import Optional


def _clean_equipment(v):
    if v is None:
        return v
    return [item.strip() for item in v if item and item.strip()]


class RoomCreateRequest(BaseModel):
    name:        str
    description: Optional[str] = None
    capacity:    Optional[int] = None
    equipment:   list[str] = []
    color:       Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip(): raise ValueError("Room name cannot be empty")
        return v.strip()

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        if v is not None and v <= 0: raise ValueError("Capacity must be greater than 0")
        return v

    @field_validator("equipment")
    @classmethod
    def check_equipment(cls, v):
        return _clean_equipment(v)


class RoomUpdateRequest(BaseModel):
    """Only the fields actually sent are applied (exclude_unset)."""
    name:        Optional[str] = None
    description: Optional[str] = None
    capacity:    Optional[int] = None
    equipment:   Optional[list[str]] = None
    color:       Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip(): raise ValueError("Room name cannot be empty")
        return v.strip() if v else v

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        if v is not None and v <= 0: raise ValueError("Capacity must be greater than 0")
        return v

    @field_validator("equipment")
    @classmethod
    def check_equipment(cls, v):
        return _clean_equipment(v)
