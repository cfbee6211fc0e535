# ABOUTME: Declares the typed errors raised by the tracker core.
# ABOUTME: Both derive from ValueError so callers can catch them generically.


class InvalidArgument(ValueError):
    """A caller broke a precondition (bad attempt count, unknown label, bad config)."""


class RecordLoadError(ValueError):
    """A record table could not be turned into canonical records."""
