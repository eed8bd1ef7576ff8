"""
The ``stairsearch.core`` module is considered private API and should not be imported
directly by 3rd-party code; use the names re-exported from ``stairsearch``.
"""

from __future__ import annotations
