from .memory import InMemoryDatastore

__all__ = ("InMemoryDatastore",)
