"""
Collaborators and configuration for running a pool outside a chain
"""

from .config import load_pool_config
from .memory import BoundToken, InMemoryHost, InMemoryToken, RecordingVerifier

__all__ = [
    "load_pool_config",
    "BoundToken",
    "InMemoryHost",
    "InMemoryToken",
    "RecordingVerifier",
]
