from abc import ABC, abstractmethod
from typing import Dict, Optional


class PaymentResult:
    def __init__(self, id: str, status: str, amount_cents: int):
        self.id = id
        self.status = status
        self.amount_cents = amount_cents

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"


class AbstractPaymentGateway(ABC):
    @abstractmethod
    async def charge(
        self,
        amount_cents: int,
        currency: str,
        payment_method_id: Optional[str],
        description: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentResult:
        pass

    @abstractmethod
    async def refund(self, payment_id: str, amount_cents: int) -> PaymentResult:
        pass
