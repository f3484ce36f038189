"""Base class with a per-instance result cache.
"""

from typing import Any


class _HironakaBase:
    """Base class for objects that memoize derived data.
    """

    def __init__(self):
        self._cache = {}

    def cache_get(self, key: Any, default: Any = None) -> Any:
        """Get item from cache.

        Parameters
        ----------
        key : Any
            The cache key.
        default : Any, optional
            The default value to return if the key is not found.
            
        Returns
        -------
        Any
            The cached value or the default value if the key is not found.
        """
        return self._cache.get(key, default)
    
    def cache_set(self, key: Any, value: Any) -> Any:
        """Set item in cache and return it."""
        self._cache[key] = value
        return value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
