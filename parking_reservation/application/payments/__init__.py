from .abstract_gateway import AbstractPaymentGateway, PaymentResult

__all__ = [
    "AbstractPaymentGateway",
    "PaymentResult",
]
