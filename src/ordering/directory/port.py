"""Directory port: read-only lookups of the people and places an order refers to.

Customers, addresses and locations live outside the ordering domain. The
mail data builder reads their display fields through this port.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerRecord:
    customer_id: str
    first_name: str
    last_name: str
    email: str
    telephone: str | None = None


@dataclass(frozen=True)
class AddressRecord:
    address_id: str
    address_1: str
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None

    def formatted(self) -> str:
        """Single-line postal address, blank parts left out."""
        parts = [self.address_1, self.address_2, self.city, self.state, self.postcode, self.country]
        return ", ".join(part for part in parts if part)


@dataclass(frozen=True)
class LocationRecord:
    location_id: str
    name: str
    email: str | None = None


class DirectoryPort(ABC):
    """Abstract interface for directory adapters. Missing records come back as None."""

    @abstractmethod
    def find_customer(self, customer_id: str) -> CustomerRecord | None: ...

    @abstractmethod
    def find_address(self, customer_id: str | None, address_id: str) -> AddressRecord | None: ...

    @abstractmethod
    def find_location(self, location_id: str) -> LocationRecord | None: ...
