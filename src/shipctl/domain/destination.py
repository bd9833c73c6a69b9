"""Delivery destination as a tagged variant.

A shipment is delivered either to a free-text address or to a company
office, never both and never neither. Callers that receive the two
inputs separately (CLI options, request payloads) build the variant
through :func:`make_destination`, which is the only place the
exactly-one rule is checked.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

DESTINATION_ERROR = "must specify exactly one of address or office"


class AddressDestination(BaseModel):
    """Door delivery to a street address."""

    model_config = {"frozen": True}

    kind: Literal["address"] = "address"
    address: str = Field(min_length=1)


class OfficeDestination(BaseModel):
    """Pickup at a company office."""

    model_config = {"frozen": True}

    kind: Literal["office"] = "office"
    office_id: int


Destination = Annotated[AddressDestination | OfficeDestination, Field(discriminator="kind")]


class DestinationError(ValueError):
    """Raised when neither or both destination inputs are supplied."""

    def __init__(self) -> None:
        super().__init__(DESTINATION_ERROR)


def make_destination(
    address: str | None = None,
    office_id: int | None = None,
) -> AddressDestination | OfficeDestination:
    """Build a destination from two optional inputs.

    A blank or whitespace-only address counts as absent.

    Raises:
        DestinationError: If neither or both inputs are present.
    """
    has_address = address is not None and address.strip() != ""
    has_office = office_id is not None
    if has_address == has_office:
        raise DestinationError
    if office_id is not None:
        return OfficeDestination(office_id=office_id)
    return AddressDestination(address=(address or "").strip())


def is_office_delivery(destination: AddressDestination | OfficeDestination) -> bool:
    """True when the shipment is collected at an office."""
    return isinstance(destination, OfficeDestination)
