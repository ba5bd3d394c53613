"""Static gateway registry: a fixed list of gateways, configurable in tests."""

from ordering.gateway.port import PaymentGatewayPort

DEFAULT_GATEWAYS = [
    {"code": "cod", "name": "Cash On Delivery"},
    {"code": "stripe", "name": "Stripe"},
    {"code": "paypal_express", "name": "PayPal Express"},
]


class StaticGatewayRegistry(PaymentGatewayPort):
    def __init__(self, gateways: list[dict] | None = None):
        self.gateways = [dict(g) for g in (DEFAULT_GATEWAYS if gateways is None else gateways)]

    def configure(self, gateways: list[dict]):
        self.gateways = [dict(g) for g in gateways]

    def list_gateways(self) -> list[dict]:
        return list(self.gateways)
