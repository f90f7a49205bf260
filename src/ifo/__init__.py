# IFO factory package
from .access import Ownable
from .chain import AssetInfo, Chain
from .constants import MAX_WINDOW_DURATION, TRANCHE_PRIVATE, TRANCHE_PUBLIC
from .errors import (
    ErrorCategory, ErrorCode, FactoryError,
    Unauthorized, ConfigError, DuplicateAsset, WindowTooFar, InvertedWindow,
    WindowNotFuture, NoTrancheSelected, InvalidArgument,
    IdentifierCollision, AlreadyInitialized,
    NothingToRecover, UnknownAsset, InsufficientBalance,
)
from .events import EventLog
from .factory import CreationResult, OfferingFactory
from .identifiers import address_for, derive_identifier, offering_salt
from .interface import FactoryInterface
from .offerings import Offering, OfferingTemplate, PrivateOffering, PublicOffering
from .registry import OfferingRecord, OfferingRegistry
from .window import WindowSpec, validate_window

__all__ = [
    "Ownable",
    "AssetInfo", "Chain",
    "MAX_WINDOW_DURATION", "TRANCHE_PRIVATE", "TRANCHE_PUBLIC",
    "ErrorCategory", "ErrorCode", "FactoryError",
    "Unauthorized", "ConfigError", "DuplicateAsset", "WindowTooFar", "InvertedWindow",
    "WindowNotFuture", "NoTrancheSelected", "InvalidArgument",
    "IdentifierCollision", "AlreadyInitialized",
    "NothingToRecover", "UnknownAsset", "InsufficientBalance",
    "EventLog",
    "CreationResult", "OfferingFactory",
    "address_for", "derive_identifier", "offering_salt",
    "FactoryInterface",
    "Offering", "OfferingTemplate", "PrivateOffering", "PublicOffering",
    "OfferingRecord", "OfferingRegistry",
    "WindowSpec", "validate_window",
]
