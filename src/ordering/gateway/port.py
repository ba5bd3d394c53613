"""Payment gateway port."""

from abc import ABC, abstractmethod


class PaymentGatewayPort(ABC):
    @abstractmethod
    def list_gateways(self) -> list[dict]:
        """Installed gateways in display order.

        Returns:
            list of dicts with keys: code, name (name may be empty)
        """
        ...
