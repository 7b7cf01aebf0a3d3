"""Roster schemas - Pydantic models for professionals"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import normalize_initials


class ProfessionalCreate(BaseModel):
    name: str
    initials: Optional[str] = None  # derived from the name when omitted
    active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("initials")
    @classmethod
    def validate_initials(cls, v):
        return normalize_initials(v)


class ProfessionalUpdate(BaseModel):
    name: Optional[str] = None
    initials: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("initials")
    @classmethod
    def validate_initials(cls, v):
        return normalize_initials(v)


class ProfessionalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    initials: str
    active: bool
