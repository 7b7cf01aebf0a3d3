"""Activity catalog schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import validate_hex_color


class ActivityKindCreate(BaseModel):
    """Upsert payload: an existing code is updated, a new code is created"""

    code: str
    name: str
    color: str = "#6b7280"

    @field_validator("code", "name")
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class ActivityKindUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class ActivityKindResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    color: str
