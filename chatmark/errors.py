class ChatmarkError(Exception):
    """Base exception for all application-specific errors."""


class ConfigError(ChatmarkError):
    """Raised when a render configuration file is structurally invalid."""


class StreamStateError(ChatmarkError):
    """Raised when a stream controller is driven through an illegal transition."""


class TransportError(ChatmarkError):
    """Raised when the fragment transport delivers a malformed or truncated stream."""
