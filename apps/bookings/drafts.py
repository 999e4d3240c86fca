"""Reservation draft kept in the caller's session.

A guest picks dates on the room page, is sent to the payment page and may
reload it; the draft keeps the in-flight attempt (and the payment intent
created for it) until the payment is confirmed or the guest discards it.
"""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


def _empty_state() -> dict:
    return {"draft": None, "payment_intent_id": None, "client_secret": None}


class ReservationDraftStore:
    """One draft per session, stored as JSON-ready values only."""

    def __init__(self, session):
        self.session = session
        self.key = settings.BOOKING_DRAFT_SESSION_KEY

    @property
    def state(self) -> dict:
        stored = self.session.get(self.key)
        state = _empty_state()
        if isinstance(stored, dict):
            state.update({name: stored.get(name) for name in state})
        return state

    def _save(self, **changes) -> dict:
        state = self.state
        state.update(changes)
        self.session[self.key] = state
        self.session.modified = True
        return state

    def set_draft(self, draft: dict | None) -> dict:
        return self._save(draft=dict(draft) if draft is not None else None)

    def set_payment_intent_id(self, payment_intent_id: str | None) -> dict:
        return self._save(payment_intent_id=payment_intent_id)

    def set_client_secret(self, client_secret: str | None) -> dict:
        return self._save(client_secret=client_secret)

    def reset(self) -> dict:
        if self.key in self.session:
            del self.session[self.key]
            logger.debug("Reservation draft cleared")
        return _empty_state()
