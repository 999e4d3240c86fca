"""
Stripe payment gateway integration.

A payment intent is Stripe's handle for one attempted charge. The booking
flow creates one per reservation attempt, updates its amount while the
guest changes dates, and refunds or cancels it when a reservation cannot be
kept. Amounts are passed around as integer cents.
"""

from __future__ import annotations

import logging

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """Raised when a call to the payment processor fails."""


def _api_key() -> str:
    return settings.STRIPE_SECRET_KEY


def _fail(action: str, payment_intent_id: str | None, exc: Exception) -> PaymentGatewayError:
    logger.error("Stripe %s failed for intent %s: %s", action, payment_intent_id, exc)
    return PaymentGatewayError(f"Stripe {action} failed")


def create_intent(amount: int, currency: str) -> stripe.PaymentIntent:
    """Create a payment intent for ``amount`` cents with automatic methods."""
    try:
        intent = stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            automatic_payment_methods={"enabled": True},
            api_key=_api_key(),
        )
    except stripe.StripeError as exc:
        raise _fail("create", None, exc) from exc
    logger.info("Created payment intent %s for %s %s", intent.id, amount, currency)
    return intent


def retrieve_intent(payment_intent_id: str) -> stripe.PaymentIntent:
    try:
        return stripe.PaymentIntent.retrieve(payment_intent_id, api_key=_api_key())
    except stripe.StripeError as exc:
        raise _fail("retrieve", payment_intent_id, exc) from exc


def update_intent(payment_intent_id: str, amount: int) -> stripe.PaymentIntent:
    try:
        intent = stripe.PaymentIntent.modify(payment_intent_id, amount=amount, api_key=_api_key())
    except stripe.StripeError as exc:
        raise _fail("update", payment_intent_id, exc) from exc
    logger.info("Updated payment intent %s to %s", payment_intent_id, amount)
    return intent


def cancel_intent(payment_intent_id: str) -> stripe.PaymentIntent:
    try:
        intent = stripe.PaymentIntent.cancel(payment_intent_id, api_key=_api_key())
    except stripe.StripeError as exc:
        raise _fail("cancel", payment_intent_id, exc) from exc
    logger.warning("Cancelled payment intent %s", payment_intent_id)
    return intent


def refund_intent(payment_intent_id: str) -> stripe.Refund:
    """Refund the full captured amount of an intent."""
    try:
        refund = stripe.Refund.create(payment_intent=payment_intent_id, api_key=_api_key())
    except stripe.StripeError as exc:
        raise _fail("refund", payment_intent_id, exc) from exc
    logger.warning("Refunded payment intent %s (refund %s)", payment_intent_id, refund.id)
    return refund


def serialize_intent(intent) -> dict:
    """The subset of an intent the browser needs to complete the charge."""
    return {
        "id": intent["id"],
        "client_secret": intent["client_secret"],
        "amount": intent["amount"],
        "currency": intent["currency"],
        "status": intent["status"],
    }
