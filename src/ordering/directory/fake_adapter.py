"""In-memory directory adapter for development and tests."""

from ordering.directory.port import (
    AddressRecord,
    CustomerRecord,
    DirectoryPort,
    LocationRecord,
)


class InMemoryDirectory(DirectoryPort):
    def __init__(self):
        self.customers: dict[str, CustomerRecord] = {}
        self.addresses: dict[str, AddressRecord] = {}
        self.locations: dict[str, LocationRecord] = {}

    def add_customer(self, record: CustomerRecord) -> CustomerRecord:
        self.customers[str(record.customer_id)] = record
        return record

    def add_address(self, record: AddressRecord) -> AddressRecord:
        self.addresses[str(record.address_id)] = record
        return record

    def add_location(self, record: LocationRecord) -> LocationRecord:
        self.locations[str(record.location_id)] = record
        return record

    def find_customer(self, customer_id):
        return self.customers.get(str(customer_id))

    def find_address(self, customer_id, address_id):
        return self.addresses.get(str(address_id))

    def find_location(self, location_id):
        return self.locations.get(str(location_id))

    def reset(self):
        self.customers.clear()
        self.addresses.clear()
        self.locations.clear()
