class KZGError(Exception):
    """Base exception class."""


class ConfigurationError(KZGError):
    """Raise for configuration errors."""


class NoPolynomialError(KZGError):
    """Raised when a prover is asked to open or prove before committing."""


class PointNotOnPolynomialError(KZGError):
    """Raised when a claimed evaluation ``P(x) = y`` does not hold."""


class PolynomialCapacityError(KZGError, ValueError):
    """Raised when a polynomial would need more coefficients than its capacity."""
