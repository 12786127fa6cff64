from .tracking import SeedDataError, TrackingError

__all__ = ["SeedDataError", "TrackingError"]
