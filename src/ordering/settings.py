"""Workflow settings: the configuration the order workflow consults.

Settings are resolved once and handed to the workflow engine explicitly;
nothing in the workflow reads configuration from globals. ``from_env()``
builds them from ``ORDERDESK_*`` environment variables.
"""

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "ORDERDESK_"

_STATUS_SET_FIELDS = (
    "processing_order_status",
    "completed_order_status",
    "terminal_order_status",
)
_BOOL_FIELDS = ("auto_invoicing", "customer_order_email", "location_order_email")
_TRUTHY = {"1", "true", "yes", "on"}


class StockFailurePolicy(Enum):
    ABORT = "abort"
    SKIP = "skip"


class OrderEmailRecipient(Enum):
    CUSTOMER = "customer"
    LOCATION = "location"
    ADMIN = "admin"


def _split(value):
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    return list(value)


class WorkflowSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    processing_order_status: frozenset[str] = frozenset()
    completed_order_status: frozenset[str] = frozenset()
    terminal_order_status: frozenset[str] = frozenset()
    auto_invoicing: bool = False
    invoice_prefix: str = "INV{year}{month}{day}"

    site_name: str = "OrderDesk"
    site_email: str = "orders@orderdesk.local"
    site_url: str = "http://localhost"
    customer_order_email: bool = True
    location_order_email: bool = False
    order_email: list[OrderEmailRecipient] = Field(default_factory=list)

    stock_failure_policy: StockFailurePolicy = StockFailurePolicy.ABORT
    stock_floor: int = 0
    currency_symbol: str = "$"

    @field_validator(*_STATUS_SET_FIELDS, mode="before")
    @classmethod
    def _coerce_status_ids(cls, value):
        if value is None:
            return frozenset()
        return frozenset(str(part).strip() for part in _split(value) if str(part).strip())

    @field_validator("order_email", mode="before")
    @classmethod
    def _coerce_recipients(cls, value):
        if value is None:
            return []
        return [part for part in _split(value) if part]

    @field_validator("invoice_prefix")
    @classmethod
    def _prefix_not_blank(cls, value):
        if not value.strip():
            raise ValueError("invoice_prefix cannot be blank")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "WorkflowSettings":
        """Build settings from ``ORDERDESK_<FIELD>`` variables; unset fields keep defaults."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            if name in _BOOL_FIELDS:
                values[name] = raw.strip().lower() in _TRUTHY
            else:
                values[name] = raw
        return cls(**values)

    # -------------------------------------------------------------------
    # Status groups
    # -------------------------------------------------------------------
    def is_processing(self, status_id) -> bool:
        return str(status_id) in self.processing_order_status

    def is_completed(self, status_id) -> bool:
        return str(status_id) in self.completed_order_status

    def is_terminal(self, status_id) -> bool:
        return status_id is not None and str(status_id) in self.terminal_order_status

    def groups_for(self, status_id) -> set[str]:
        """Named status groups the status belongs to."""
        groups = set()
        if self.is_processing(status_id):
            groups.add("processing")
        if self.is_completed(status_id):
            groups.add("completed")
        if self.is_terminal(status_id):
            groups.add("terminal")
        return groups

    def wants_order_email(self, recipient: OrderEmailRecipient) -> bool:
        return recipient in self.order_email
