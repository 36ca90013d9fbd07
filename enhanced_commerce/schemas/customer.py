"""Customer Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Postal address. All parts optional."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    street: str | None = Field(default=None, description="Street address")
    city: str | None = Field(default=None, description="City")
    state: str | None = Field(default=None, description="State or province code")
    zip_code: str | None = Field(default=None, description="ZIP or postal code")
    country: str | None = Field(default=None, description="Country")


class CustomerInfo(BaseModel):
    """Customer details captured on a cart."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    email: str = Field(description="Email address")
    company: str | None = Field(default=None, description="Company name")
    address: Address | None = Field(default=None, description="Customer address")
