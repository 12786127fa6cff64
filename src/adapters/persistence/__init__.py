from .local_seed_repository import LocalSeedRepository

__all__ = [
    "LocalSeedRepository",
]
