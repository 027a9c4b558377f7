"""Base exceptions for ticketlink."""


class TicketLinkError(Exception):
    """Base exception for ticketlink errors."""


class ConfigError(TicketLinkError):
    """Raised when configuration is invalid or missing."""
