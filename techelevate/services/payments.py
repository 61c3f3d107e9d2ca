"""Payment intents with pluggable providers."""
import hashlib
import logging
import re
from typing import Optional, Protocol

import httpx

from techelevate.services.errors import PaymentProcessingError, ValidationError
from techelevate.settings import settings

logger = logging.getLogger(__name__)


class PaymentProvider(Protocol):
    """Protocol for payment providers."""

    async def create_payment_intent(self, amount_cents: int) -> str:
        """Create a payment intent and return its client secret."""
        ...

    async def payment_succeeded(self, payment_intent_id: str) -> bool:
        """Whether the payment intent has been paid."""
        ...


class StripePaymentProvider:
    """Stripe PaymentIntents over the REST API."""

    def __init__(
        self,
        api_key: str,
        currency: str = "usd",
        api_base: str = "https://api.stripe.com",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.currency = currency
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def create_payment_intent(self, amount_cents: int) -> str:
        """Create a card PaymentIntent and return its client secret."""
        data = {
            "amount": str(amount_cents),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.api_base}/v1/payment_intents",
                    data=data,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Payment processor unreachable: {e}")
            raise PaymentProcessingError(f"Payment processor unreachable: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message")
            except ValueError:
                message = None
            message = message or f"Payment processor returned HTTP {response.status_code}"
            logger.error(f"Payment intent creation failed: {message}")
            raise PaymentProcessingError(message)

        client_secret = response.json().get("client_secret")
        if not client_secret:
            raise PaymentProcessingError("Payment processor response had no client secret")
        return client_secret

    async def payment_succeeded(self, payment_intent_id: str) -> bool:
        """Look up a PaymentIntent and check it reached ``succeeded``."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.api_base}/v1/payment_intents/{payment_intent_id}",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Payment processor unreachable: {e}")
            raise PaymentProcessingError(f"Payment processor unreachable: {e}") from e

        if response.status_code == 404:
            return False
        if response.status_code >= 400:
            logger.error(f"Payment intent lookup failed: HTTP {response.status_code}")
            raise PaymentProcessingError(f"Payment processor returned HTTP {response.status_code}")

        return response.json().get("status") == "succeeded"


STUB_INTENT_ID = re.compile(r"pi_stub_[0-9a-f]{24}")


class LocalStubPaymentProvider:
    """
    Deterministic stub provider for tests and local development.

    Returns a fake client secret derived from the amount; no external calls.
    The intent id is the client secret up to "_secret", and every
    well-formed stub id counts as paid.
    """

    def __init__(self, currency: str = "usd"):
        self.currency = currency

    async def create_payment_intent(self, amount_cents: int) -> str:
        digest = hashlib.sha256(f"{self.currency}:{amount_cents}".encode()).hexdigest()[:24]
        return f"pi_stub_{digest}_secret_stub"

    async def payment_succeeded(self, payment_intent_id: str) -> bool:
        return STUB_INTENT_ID.fullmatch(payment_intent_id or "") is not None


def get_payment_provider() -> PaymentProvider:
    """
    Get configured payment provider.

    Raises:
        ValueError: If provider is 'stripe' but the secret key is missing
    """
    if settings.PAYMENT_PROVIDER == "stripe":
        if not settings.STRIPE_SECRET_KEY:
            raise ValueError(
                "Stripe provider selected but STRIPE_SECRET_KEY is not configured. "
                "Set STRIPE_SECRET_KEY or change PAYMENT_PROVIDER to 'local_stub'."
            )
        return StripePaymentProvider(
            api_key=settings.STRIPE_SECRET_KEY,
            currency=settings.PAYMENT_CURRENCY,
            api_base=settings.STRIPE_API_BASE,
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
        )

    return LocalStubPaymentProvider(currency=settings.PAYMENT_CURRENCY)


def apply_discount(amount: float, discount: Optional[float]) -> float:
    """Apply a percentage discount and round to cents."""
    if not discount:
        return round(amount, 2)
    return round(amount * (100 - discount) / 100, 2)


async def create_payment_intent(
    amount: float,
    provider: Optional[PaymentProvider] = None,
) -> str:
    """
    Create a payment intent for ``amount`` in major currency units.

    Raises:
        ValidationError: If the amount is not positive
        PaymentProcessingError: If the provider fails
    """
    if amount is None or amount <= 0:
        raise ValidationError("Amount must be greater than zero")

    if provider is None:
        provider = get_payment_provider()

    amount_cents = int(round(amount * 100))
    client_secret = await provider.create_payment_intent(amount_cents)
    logger.info(f"Payment intent created for {amount_cents} cents")
    return client_secret
