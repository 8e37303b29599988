"""
Plugin initialization for Metronome.

This module imports all built-in triggers to register them with the registry.
Import this module to ensure all trigger types are available.
"""

# Import all plugin modules to trigger registration decorators
# pylint: disable=unused-import
# ruff: noqa: F401
from metronome import triggers

# Re-export registry functions for convenience
from metronome.registry import create_trigger, get_registry

__all__ = [
    "create_trigger",
    "get_registry",
]
