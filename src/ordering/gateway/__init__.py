"""Payment gateway registry: which payment methods an order can name."""

import os

_gateway_instance = None


def get_gateways():
    """Return the configured gateway registry adapter (singleton).

    Uses StaticGatewayRegistry by default; PAYMENT_GATEWAY_ADAPTER selects
    another.
    """
    global _gateway_instance
    if _gateway_instance is None:
        adapter = os.environ.get("PAYMENT_GATEWAY_ADAPTER", "static")
        if adapter == "static":
            from ordering.gateway.fake_adapter import StaticGatewayRegistry

            _gateway_instance = StaticGatewayRegistry()
        else:
            raise ValueError(f"Unknown payment gateway adapter: {adapter}")
    return _gateway_instance


def set_gateways(registry):
    global _gateway_instance
    _gateway_instance = registry


def reset_gateways():
    """Reset the gateway singleton (useful for testing)."""
    global _gateway_instance
    _gateway_instance = None
