"""Directory adapter abstraction: customer, address and location lookups."""

import os

_directory_instance = None


def get_directory():
    """Return the configured directory adapter (singleton).

    Uses InMemoryDirectory by default. Other adapters are selected with the
    DIRECTORY_ADAPTER environment variable.
    """
    global _directory_instance
    if _directory_instance is None:
        adapter = os.environ.get("DIRECTORY_ADAPTER", "memory")
        if adapter == "memory":
            from ordering.directory.fake_adapter import InMemoryDirectory

            _directory_instance = InMemoryDirectory()
        else:
            raise ValueError(f"Unknown directory adapter: {adapter}")
    return _directory_instance


def set_directory(directory):
    global _directory_instance
    _directory_instance = directory


def reset_directory():
    """Reset the directory singleton (useful for testing)."""
    global _directory_instance
    _directory_instance = None
