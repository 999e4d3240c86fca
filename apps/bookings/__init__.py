"""Bookings app package.

This app encapsulates the reservation lifecycle: the session draft of a
booking attempt, payment intents at the processor, payment confirmation
with a locked overlap check, and the booking listings for guests and hosts.
"""
