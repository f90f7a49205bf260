"""Centralized constants for the ifo module.

Policy values and template names live here to avoid literals scattered
across modules.
"""

# Furthest an offering window may end beyond the creation time (seconds)
MAX_WINDOW_DURATION = 7 * 24 * 60 * 60

# Tranche names, used as template keys and in query params
TRANCHE_PUBLIC = "public"
TRANCHE_PRIVATE = "private"
TRANCHES = (TRANCHE_PUBLIC, TRANCHE_PRIVATE)

# Prefix byte for deterministic instance identifiers
IDENTIFIER_PREFIX = b"\xff"

# Width of an instance identifier in bytes (rendered as 0x + 40 hex chars)
IDENTIFIER_BYTES = 20
