"""lingochat: real-time two-party chat with automatic English/Tamil translation."""

__version__ = "1.0.0"
