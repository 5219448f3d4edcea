"""
Root of the client's exception hierarchy.
Concrete errors live beside the code that raises them and derive from PolarisError.
"""

from __future__ import annotations


class PolarisError(Exception):
    """Base class for every error raised by this package."""
    pass
