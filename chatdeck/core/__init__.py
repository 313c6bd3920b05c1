"""Core infrastructure for chatdeck: configuration and logging."""
