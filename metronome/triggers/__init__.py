"""
Built-in trigger implementations for Metronome.

Every module in this package is imported on package import; the names a
module lists in __all__ are re-exported here after checking that they are
Trigger subclasses. Importing a module also registers its trigger type.
"""

import importlib
import inspect
import pkgutil
from types import ModuleType

from metronome.core import Trigger as BaseTrigger
from metronome.logging_config import get_logger

logger = get_logger(__name__)


def _exported_triggers(module: ModuleType) -> dict[str, type[BaseTrigger]]:
    """Collect the valid trigger classes a module exports."""
    short_name = module.__name__.rsplit(".", 1)[-1]
    exported: dict[str, type[BaseTrigger]] = {}

    for name in getattr(module, "__all__", []):
        obj = getattr(module, name, None)
        if not inspect.isclass(obj):
            logger.warning(
                "Export '%s' in module '%s' is not a class - skipping",
                name,
                short_name
            )
        elif not issubclass(obj, BaseTrigger):
            logger.warning(
                "Export '%s' in module '%s' is not a Trigger subclass - skipping",
                name,
                short_name
            )
        else:
            exported[name] = obj

    return exported


def _discover() -> dict[str, type[BaseTrigger]]:
    """Import all trigger modules of this package."""
    found: dict[str, type[BaseTrigger]] = {}

    for module_info in pkgutil.iter_modules(__path__):
        module = importlib.import_module(f"{__name__}.{module_info.name}")

        for name, cls in _exported_triggers(module).items():
            if name in found:
                logger.warning(
                    "Duplicate trigger name '%s' in module '%s' - skipping",
                    name,
                    module_info.name
                )
                continue
            found[name] = cls

    return found


_triggers = _discover()
globals().update(_triggers)
__all__ = sorted(_triggers)
