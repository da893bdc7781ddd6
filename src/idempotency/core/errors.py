class IdempotencyError(Exception):
    """Base class for every error raised by the idempotency package."""
    pass


class UnsupportedTypeError(IdempotencyError, TypeError):
    """Raised when input has no defined mapping to a canonical value."""

    def __init__(self, type_name: str, detail: str | None = None):
        self.type_name = type_name
        message = f"Unsupported data type: {type_name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedAlgorithmError(IdempotencyError, ValueError):
    """Raised when an algorithm name matches no known hash algorithm."""
    pass


class UnsupportedVersionError(IdempotencyError, ValueError):
    """Raised when a versioned string carries a version other than the current one."""
    pass


class InvalidVersionedStringError(IdempotencyError, ValueError):
    """Raised when a versioned string is malformed."""
    pass


class InvalidHashError(InvalidVersionedStringError):
    """Raised when the hex digest inside a versioned string fails validation."""
    pass


class InvalidArgumentError(IdempotencyError, ValueError):
    """Raised when an argument value is outside what the operation accepts."""
    pass


class CanonicalizationError(IdempotencyError, ValueError):
    """Raised when a value tree cannot be encoded canonically (NaN, infinities, lone surrogates)."""
    pass
