class TrackingError(Exception):
    """Base exception for the tracking engine."""


class SeedDataError(TrackingError):
    """Raised when seed routes/vehicles fail validation at load time."""
