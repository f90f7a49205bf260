"""IFO factory source package.

This package contains:
- config: Configuration loading and management
- ifo: Offering factory, registry, access control and the chain it runs on
"""

from __future__ import annotations

__all__: list[str] = []
