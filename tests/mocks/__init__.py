"""
Mock implementations for testing EnvKit components.

Stand-ins for external processes so that pipelines can be exercised
without touching the host.
"""

from .process import RecordingRunner, make_executables

__all__ = [
    "RecordingRunner",
    "make_executables",
]
