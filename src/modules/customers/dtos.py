"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CustomerDataDTO``: input for customer creation and full update.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class CustomerDataDTO(BaseModel):
    """Immutable DTO carrying every writable customer field.

    Used for both creation and update: an update always replaces
    all four fields.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    email: EmailStr
    address: str = ""
    phone: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Name is required.")
        return v
