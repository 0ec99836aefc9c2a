from .local_store import KeyValueBackend, LocalStore

__all__ = ["LocalStore", "KeyValueBackend"]
