"""
Lookup cache Python package.

This package hosts the read-through ``ThingCache`` with its lookup service
implementations, and the ``FileSender`` filtering pipeline. See README.md for
usage.
"""

from .__version__ import __version__

__all__ = ["__version__"]
