"""Single-administrator access control.

Every mutating factory operation calls ``Ownable.require_owner`` with the
caller's identity before doing anything else. The administrator identity is
set once at construction and can be handed over with ``transfer_ownership``
or given up with ``renounce_ownership``.
"""

from __future__ import annotations

import logging
from typing import Callable

from .errors import InvalidArgument, Unauthorized

logger = logging.getLogger(__name__)

# Called with (previous_owner, new_owner) after every ownership change
OwnershipListener = Callable[[str | None, str | None], None]


class Ownable:
    """Holds the single administrator identity.

    One-step transfer: the new owner takes effect immediately. After
    ``renounce_ownership`` the owner is ``None`` and no caller passes
    ``require_owner`` again.
    """

    _owner: str | None
    _listeners: list[OwnershipListener]

    def __init__(self, owner: str) -> None:
        if not owner:
            raise InvalidArgument("Owner identity must be a non-empty string")
        self._owner = owner
        self._listeners = []

    @property
    def owner(self) -> str | None:
        """Current administrator, or None once renounced."""
        return self._owner

    def is_owner(self, caller: str) -> bool:
        return self._owner is not None and caller == self._owner

    def require_owner(self, caller: str) -> None:
        """Raise Unauthorized unless caller is the administrator."""
        if not self.is_owner(caller):
            logger.warning("Rejected caller '%s': not the owner", caller)
            raise Unauthorized(
                f"Caller '{caller}' is not the owner",
                caller=caller,
            )

    def on_ownership_transferred(self, listener: OwnershipListener) -> None:
        """Register a callback fired after each ownership change."""
        self._listeners.append(listener)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the administrator capability to new_owner.

        Raises:
            Unauthorized: caller is not the current owner
            InvalidArgument: new_owner is empty
        """
        self.require_owner(caller)
        if not new_owner:
            raise InvalidArgument(
                "New owner must be a non-empty identity",
                new_owner=new_owner,
            )
        self._set_owner(new_owner)

    def renounce_ownership(self, caller: str) -> None:
        """Give up the administrator capability for good."""
        self.require_owner(caller)
        self._set_owner(None)

    def _set_owner(self, new_owner: str | None) -> None:
        previous = self._owner
        self._owner = new_owner
        logger.info("Ownership transferred from '%s' to '%s'", previous, new_owner)
        for listener in self._listeners:
            listener(previous, new_owner)
