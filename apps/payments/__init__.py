"""Payment processor integration (Stripe payment intents)."""
