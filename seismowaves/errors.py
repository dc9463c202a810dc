"""Exception and warning types shared across the package."""


class ConfigurationError(ValueError):
    """Raised when medium parameters or settings cannot describe a valid problem."""


class NumericalWarning(RuntimeWarning):
    """Non-fatal numerical issue, e.g. a rejected root candidate."""
