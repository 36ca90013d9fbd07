"""Customer model type definitions."""

from datetime import datetime
from typing import Literal, TypedDict


AddressType = Literal["billing", "shipping", "both"]


class CustomerAddressRow(TypedDict, total=False):
    """One entry in the customer's address book."""

    type: AddressType
    street: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    country: str | None


class CustomerRow(TypedDict, total=False):
    """Customers table row representation."""

    id: str
    first_name: str
    last_name: str
    email: str
    company: str | None
    phone: str | None
    addresses: list[CustomerAddressRow]
    customer_notes: str | None
    tags: list[str]
    created_at: datetime | str
