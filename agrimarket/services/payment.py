"""
Payment capability used by the purchase workflow.

A gateway authorizes an amount before inventory is touched, captures it once
every record has been written, and voids the authorization when the
purchase is rolled back. ``DemoPaymentGateway`` approves everything.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import uuid4

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    pass


@dataclass
class Authorization:
    reference: str
    amount: Decimal
    payment_method: str
    authorization_id: str = field(default_factory=lambda: uuid4().hex)
    captured: bool = False
    voided: bool = False


class PaymentGateway(ABC):
    @abstractmethod
    def authorize(self, reference: str, amount: Decimal, payment_method: str) -> Authorization:
        raise NotImplementedError

    @abstractmethod
    def capture(self, authorization: Authorization) -> None:
        raise NotImplementedError

    @abstractmethod
    def void(self, authorization: Authorization) -> None:
        """Release an authorization, reversing it if it was already captured."""
        raise NotImplementedError


class DemoPaymentGateway(PaymentGateway):
    def authorize(self, reference, amount, payment_method):
        logger.info("Demo payment authorized: %s %s via %s", reference, amount, payment_method)
        return Authorization(reference=reference, amount=amount, payment_method=payment_method)

    def capture(self, authorization):
        authorization.captured = True

    def void(self, authorization):
        authorization.voided = True
        logger.info("Demo payment voided: %s", authorization.reference)
