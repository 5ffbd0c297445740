"""Failure taxonomy for the render-fetch pipeline."""

from urllib.parse import urlparse


class FetchError(Exception):
    """Base class for everything that can terminate a fetch."""

    kind = "fetch"

    def __init__(self, message: str, address: str | None = None):
        super().__init__(message)
        self.message = message
        self.address = address

    def __str__(self) -> str:
        if self.address:
            return f"{self.message} ({self.address})"
        return self.message


class NavigationFailure(FetchError):
    """The rendering surface failed to load the page."""

    kind = "navigation"


class NavigationTimeout(NavigationFailure):
    """The rendering surface never signalled that navigation settled."""

    kind = "navigation_timeout"


class SerializationFailure(FetchError):
    """The rendering surface could not produce document markup."""

    kind = "serialization"


class ExtractionFailure(FetchError):
    """An extraction strategy could not build its result from the document."""

    kind = "extraction"


class InvalidAddress(ValueError):
    """Raised synchronously for addresses that cannot be fetched."""


def check_address(address: str) -> str:
    """Return the address unchanged if it is a well-formed http(s) URL.

    Raises:
        InvalidAddress: If the address is empty, has another scheme or no host
    """
    if not isinstance(address, str) or not address.strip():
        raise InvalidAddress("Address must be a non-empty string")
    parsed = urlparse(address)
    if parsed.scheme not in ("http", "https"):
        raise InvalidAddress(f"Unsupported address scheme: '{parsed.scheme}'")
    if not parsed.netloc:
        raise InvalidAddress(f"Address has no host: '{address}'")
    return address
