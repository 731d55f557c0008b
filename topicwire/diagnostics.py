"""Diagnostic codes for soft (logged, never raised) publisher conditions."""

# Subscribe called with a subscriber already registered for that subject.
DUPLICATE_SUBSCRIPTION = "DUPLICATE_SUBSCRIPTION"

# Unsubscribe called for a subject/subscriber pair that is not registered.
UNKNOWN_SUBSCRIBER = "UNKNOWN_SUBSCRIBER"

# A subscriber's next callback raised while a notification was delivered.
DELIVERY_FAILED = "DELIVERY_FAILED"
