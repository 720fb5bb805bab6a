"""Exception hierarchy for the tgwire options encoder and transport."""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Raised when an options value or options type is malformed.

    Always a programming mistake on the caller side: an unsupported field
    type, a wire-key collision between spliced groups, or a two-sided union
    with zero or two sides populated.  Raised before any I/O happens.

    Attributes:
        field: Wire key or attribute name at fault, when known.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        if field is not None:
            message = f"{field}: {message}"
        super().__init__(message)


class TransportPrepError(Exception):
    """Raised while assembling a request body when a local file can't be read.

    Attributes:
        wire_key: Form field the file was meant for.
        path: Filesystem path that failed.
    """

    def __init__(self, wire_key: str, path: str, reason: str) -> None:
        self.wire_key = wire_key
        self.path = path
        super().__init__(f"cannot read {path!r} for {wire_key!r}: {reason}")


class APIException(Exception):
    """Base exception for non-2xx responses from the Telegram Bot API.

    Attributes:
        status_code: HTTP status code returned by the API.
        response_body: Raw response body as a dict, when available.
    """

    def __init__(self, status_code: int, response_body: Optional[Dict[str, Any]] = None) -> None:
        """Initialise with the HTTP status code and optional body."""
        self.status_code = status_code
        self.response_body = response_body or {}
        description = self.response_body.get("description", "Unknown error")
        super().__init__(f"API error {status_code}: {description}")
