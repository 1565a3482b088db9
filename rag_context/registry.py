from __future__ import annotations

"""Named service registry used to resolve summarizers and search drivers."""

from typing import Any, Callable, Dict, Tuple

from .utils.logging import logger


class ServiceRegistry:
    """Map service names to factories or ready-made instances."""

    def __init__(self) -> None:
        self._factories: Dict[str, Tuple[Callable[[], Any], bool]] = {}
        self._instances: Dict[str, Any] = {}

    def bind(self, name: str, factory: Callable[[], Any], singleton: bool = False) -> None:
        self._instances.pop(name, None)
        self._factories[name] = (factory, singleton)

    def instance(self, name: str, obj: Any) -> None:
        self._factories.pop(name, None)
        self._instances[name] = obj

    def bound(self, name: str) -> bool:
        return name in self._instances or name in self._factories

    def make(self, name: str) -> Any:
        if name in self._instances:
            return self._instances[name]
        try:
            factory, singleton = self._factories[name]
        except KeyError:
            raise KeyError(f"service not bound: {name}") from None
        obj = factory()
        if singleton:
            self._instances[name] = obj
        logger.debug("registry_make name=%s singleton=%s", name, singleton)
        return obj

    def unbind(self, name: str) -> None:
        self._factories.pop(name, None)
        self._instances.pop(name, None)


__all__ = ["ServiceRegistry"]
