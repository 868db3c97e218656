"""Customer domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, EmailStr, Field


class CustomerCreate(BaseModel):
    """Customer details collected on the invoice form. All fields are required."""

    full_name: str = Field(..., min_length=1, max_length=255)
    tax_registration_number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        validation_alias=AliasChoices("tax_registration_number", "trn"),
    )
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=50)
    email: EmailStr


class Customer(BaseModel):
    """Full customer entity as stored."""

    id: UUID | None = None
    full_name: str
    tax_registration_number: str = Field(
        validation_alias=AliasChoices("tax_registration_number", "trn"),
    )
    address: str
    phone: str
    email: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True, "populate_by_name": True}
