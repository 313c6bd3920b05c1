"""chatdeck - multi-session chat client with ordered provider failover."""

__version__ = "0.1.0"
