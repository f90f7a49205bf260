"""Deterministic instance identifiers.

An identifier depends only on public inputs: the deploying factory's
identity, the salt and the template's code hash. Anyone can compute where
an offering will live before it is created.

    salt = sha3_256(len(a) ‖ a ‖ len(b) ‖ b ‖ start_time[32])
    id   = "0x" + sha3_256(0xff ‖ deployer ‖ salt ‖ code_hash)[-20:].hex()
"""

from __future__ import annotations

import hashlib
import logging

from .constants import IDENTIFIER_BYTES, IDENTIFIER_PREFIX
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


def _length_prefixed(value: str) -> bytes:
    raw = value.encode("utf-8")
    return len(raw).to_bytes(4, "big") + raw


def code_hash(source: bytes) -> bytes:
    """Content identifier of a code template."""
    return hashlib.sha3_256(source).digest()


def offering_salt(asset_a: str, asset_b: str, start_time: int) -> bytes:
    """Salt shared by both tranches of one create request."""
    if start_time < 0:
        raise InvalidArgument("start_time must be non-negative", start_time=start_time)
    packed = (
        _length_prefixed(asset_a)
        + _length_prefixed(asset_b)
        + start_time.to_bytes(32, "big")
    )
    return hashlib.sha3_256(packed).digest()


def derive_identifier(template_id: bytes, salt: bytes, deployer: str) -> str:
    """Compute the identifier an instance of template_id will occupy.

    Args:
        template_id: Template code hash (see ``code_hash``)
        salt: Salt bytes (see ``offering_salt``)
        deployer: Identity of the creating factory

    Returns:
        Lowercase hex identifier with 0x prefix
    """
    digest = hashlib.sha3_256(
        IDENTIFIER_PREFIX + _length_prefixed(deployer) + salt + template_id
    ).digest()
    identifier = "0x" + digest[-IDENTIFIER_BYTES:].hex()
    logger.debug("Derived %s for deployer '%s'", identifier, deployer)
    return identifier


def address_for(label: str) -> str:
    """Stable identifier for a named account (factories, tokens, people)."""
    return "0x" + hashlib.sha3_256(label.encode("utf-8")).digest()[-IDENTIFIER_BYTES:].hex()
