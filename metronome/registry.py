"""
Trigger registry and factory for Metronome.

Trigger implementations register themselves under a type name so hosts can
instantiate them from configuration.
"""

from collections.abc import Callable

from metronome.core import Trigger


class TriggerRegistry:
    """Mapping of trigger type names to implementation classes."""

    def __init__(self) -> None:
        self._triggers: dict[str, type[Trigger]] = {}

    def register(self, type_name: str, cls: type[Trigger]) -> None:
        """Register a trigger implementation."""
        self._triggers[type_name] = cls

    def get(self, type_name: str) -> type[Trigger]:
        """Get a trigger class by type name."""
        if type_name not in self._triggers:
            raise ValueError(f"Unknown trigger type: {type_name}")
        return self._triggers[type_name]

    def list_triggers(self) -> list[str]:
        """List registered trigger type names."""
        return list(self._triggers.keys())


# Global registry instance
_registry = TriggerRegistry()


def create_trigger(type_name: str) -> Trigger:
    """Create an idle trigger instance of the given type."""
    cls = _registry.get(type_name)
    return cls()


def register_trigger(type_name: str) -> Callable[[type[Trigger]], type[Trigger]]:
    """Decorator to register a trigger class."""
    def decorator(cls: type[Trigger]) -> type[Trigger]:
        _registry.register(type_name, cls)
        return cls
    return decorator


def get_registry() -> TriggerRegistry:
    """Get the global trigger registry."""
    return _registry
