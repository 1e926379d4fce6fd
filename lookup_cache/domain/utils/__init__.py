"""
Shared utilities for domain logic.

Modules
-------
timestamps
    Timezone normalization and calendar month arithmetic
"""

__all__ = []
