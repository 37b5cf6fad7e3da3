"""Name -> component registry for pluggable parts (distribution families, execution engines)."""

import logging
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Registry(Generic[T]):
    """Maps string names to classes, factories or specs so components can be picked from config."""

    def __init__(self, name: str = "registry") -> None:
        self._name = name
        self._store: dict[str, T] = {}

    def register(self, name: str | None = None) -> Callable[[T], T]:
        """Decorator registering an object under ``name`` (defaults to its __name__)."""

        def decorator(obj: T) -> T:
            key = name if name is not None else getattr(obj, "__name__", str(obj))
            if key in self._store and self._store[key] is not obj:
                logger.warning("Overriding %s '%s'", self._name, key)
            self._store[key] = obj
            return obj

        return decorator

    def add(self, name: str, obj: T) -> None:
        self.register(name)(obj)

    def get(self, name: str) -> T:
        """Get a registered component by name."""
        if name not in self._store:
            raise KeyError(f"Unknown {self._name} '{name}'. Available: {self.list_names()}")
        return self._store[name]

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Look up a registered class or factory and call it with the given arguments."""
        factory = self.get(name)
        if not callable(factory):
            raise TypeError(f"{self._name} '{name}' is not callable")
        return factory(*args, **kwargs)

    def list_names(self) -> list[str]:
        return list(self._store.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)
