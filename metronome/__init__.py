"""
Metronome - Repeating timer triggers for task orchestration hosts.

This package provides a pluggable trigger primitive that waits an initial
delay and then fires at a fixed interval until stopped, together with
sibling manual and file event triggers and a small host daemon.
"""

__version__ = "0.1.0"
