class CrashGuardError(Exception):
    """Base class for crashguard errors."""


class InvalidSampleError(CrashGuardError, ValueError):
    """A sensor reading is missing a value or carries NaN/inf."""
