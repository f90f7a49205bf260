"""Dict-in / dict-out surface over the factory.

Mutations go through ``invoke`` and reads through ``query``. Both return
``{"success": True, ...}`` on success and a standardized error dict (see
``errors.ErrorResponse``) on failure, never raising for caller mistakes.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import ErrorCode, FactoryError, InvalidArgument, validation_error
from .factory import OfferingFactory

logger = logging.getLogger(__name__)


# Mutating methods: ordered positional arguments
INVOKE_SCHEMA: dict[str, list[str]] = {
    "create_ifo": [
        "asset_a", "asset_b", "start_time", "end_time",
        "private_start_time", "private_end_time",
        "admin", "is_public", "is_private",
    ],
    "recover_wrong_tokens": ["asset_id"],
    "transfer_ownership": ["new_owner"],
    "renounce_ownership": [],
}

# Valid query types and their required/optional parameters
QUERY_SCHEMA: dict[str, dict[str, list[str]]] = {
    "offerings": {
        "params": ["count", "offset"],
        "required": [],
    },
    "offering": {
        "params": ["index"],
        "required": ["index"],
    },
    "offering_count": {
        "params": [],
        "required": [],
    },
    "predict": {
        "params": ["asset_a", "asset_b", "start_time", "tranche"],
        "required": ["asset_a", "asset_b", "start_time", "tranche"],
    },
    "balance": {
        "params": ["asset_id", "holder"],
        "required": ["asset_id"],
    },
    "events": {
        "params": ["limit", "event_type"],
        "required": [],
    },
}

_INT_PARAMS = ("count", "offset", "index", "start_time", "limit")


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid timestamp or count
    return isinstance(value, int) and not isinstance(value, bool)


class FactoryInterface:
    """Routes named operations to an OfferingFactory."""

    def __init__(self, factory: OfferingFactory, default_count: int = 10) -> None:
        self._factory = factory
        self._default_count = default_count

    @property
    def factory(self) -> OfferingFactory:
        return self._factory

    # ===== INVOKE =====

    def invoke(self, method: str, args: list[Any], caller: str) -> dict[str, Any]:
        """Run a mutating operation as caller.

        Args:
            method: One of INVOKE_SCHEMA
            args: Positional arguments in schema order
            caller: Identity of the caller

        Returns:
            Result dict with success flag
        """
        if method not in INVOKE_SCHEMA:
            return validation_error(
                f"Unknown method '{method}'. Valid methods: {', '.join(sorted(INVOKE_SCHEMA))}",
                method=method,
            )
        expected = INVOKE_SCHEMA[method]
        if len(args) != len(expected):
            return validation_error(
                f"{method} requires {expected}, got {len(args)} argument(s)",
                code=ErrorCode.MISSING_ARGUMENT,
                required=expected,
            )

        handler = getattr(self, f"_invoke_{method}")
        try:
            result: dict[str, Any] = handler(args, caller)
        except FactoryError as e:
            logger.warning("%s by '%s' failed: %s", method, caller, e.message)
            return e.to_dict()
        except (TypeError, ValueError) as e:
            return validation_error(
                f"Bad arguments for {method}: {e}",
                code=ErrorCode.INVALID_ARGUMENT,
                required=expected,
            )
        return {"success": True, "method": method, **result}

    def _invoke_create_ifo(self, args: list[Any], caller: str) -> dict[str, Any]:
        (asset_a, asset_b, start_time, end_time,
         private_start_time, private_end_time, admin, is_public, is_private) = args
        for name, value in (
            ("start_time", start_time),
            ("end_time", end_time),
            ("private_start_time", private_start_time),
            ("private_end_time", private_end_time),
        ):
            if not _is_int(value):
                raise InvalidArgument(
                    f"Argument '{name}' must be an integer, got '{type(value).__name__}'",
                    param=name,
                )
        for name, value in (("is_public", is_public), ("is_private", is_private)):
            if not isinstance(value, bool):
                raise InvalidArgument(
                    f"Argument '{name}' must be a boolean, got '{type(value).__name__}'",
                    param=name,
                )
        result = self._factory.create_ifo(
            caller, asset_a, asset_b,
            start_time, end_time,
            private_start_time, private_end_time,
            admin, is_public, is_private,
        )
        return result.to_dict()

    def _invoke_recover_wrong_tokens(self, args: list[Any], caller: str) -> dict[str, Any]:
        asset_id = args[0]
        amount = self._factory.recover_wrong_tokens(caller, asset_id)
        return {"asset_id": asset_id, "amount": amount}

    def _invoke_transfer_ownership(self, args: list[Any], caller: str) -> dict[str, Any]:
        self._factory.transfer_ownership(caller, args[0])
        return {"owner": self._factory.owner}

    def _invoke_renounce_ownership(self, args: list[Any], caller: str) -> dict[str, Any]:
        self._factory.renounce_ownership(caller)
        return {"owner": None}

    # ===== QUERY =====

    def query(self, query_type: str, params: dict[str, Any]) -> dict[str, Any]:
        """Execute a read-only query.

        Args:
            query_type: One of QUERY_SCHEMA
            params: Query parameters

        Returns:
            Query result dict with success, data, and optional error info
        """
        if query_type not in QUERY_SCHEMA:
            valid_types = ", ".join(sorted(QUERY_SCHEMA.keys()))
            return validation_error(
                f"Unknown query_type '{query_type}'. Valid types: {valid_types}",
                query_type=query_type,
            )

        schema = QUERY_SCHEMA[query_type]
        for param in params:
            if param not in schema["params"]:
                return validation_error(
                    f"Unknown param '{param}' for {query_type} query. "
                    f"Valid params: {', '.join(schema['params'])}",
                    param=param,
                )
        for required in schema["required"]:
            if required not in params:
                return validation_error(
                    f"Query '{query_type}' requires '{required}' param",
                    code=ErrorCode.MISSING_ARGUMENT,
                    required=schema["required"],
                )
        for name in _INT_PARAMS:
            value = params.get(name)
            if value is not None and not _is_int(value):
                return validation_error(
                    f"Param '{name}' must be an integer, got '{type(value).__name__}'",
                    param=name,
                )

        handler = getattr(self, f"_query_{query_type}")
        try:
            result: dict[str, Any] = handler(params)
        except FactoryError as e:
            return e.to_dict()
        return {"success": True, "query_type": query_type, **result}

    def _query_offerings(self, params: dict[str, Any]) -> dict[str, Any]:
        count = params.get("count", self._default_count)
        offset = params.get("offset", 0)
        records = self._factory.get_offering_records(count, offset)
        return {
            "total": self._factory.offering_count(),
            "offset": offset,
            "returned": len(records),
            "results": [r.to_dict() for r in records],
        }

    def _query_offering(self, params: dict[str, Any]) -> dict[str, Any]:
        index = params["index"]
        record = self._factory.registry.get(index)
        if record is None:
            raise InvalidArgument(
                f"No offering at index {index}",
                index=index,
                total=self._factory.offering_count(),
            )
        instances = {}
        for handle in (record.public_instance, record.private_instance):
            if handle is not None:
                instance = self._factory.chain.get_instance(handle)
                if instance is not None:
                    instances[handle] = instance.to_dict()
        return {"index": index, **record.to_dict(), "instances": instances}

    def _query_offering_count(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"total": self._factory.offering_count()}

    def _query_predict(self, params: dict[str, Any]) -> dict[str, Any]:
        tranche = params["tranche"]
        address = self._factory.predict_offering_address(
            params["asset_a"], params["asset_b"], params["start_time"], tranche
        )
        return {
            "tranche": tranche,
            "address": address,
            "exists": self._factory.chain.instance_exists(address),
        }

    def _query_balance(self, params: dict[str, Any]) -> dict[str, Any]:
        asset_id = params["asset_id"]
        holder = params.get("holder", self._factory.address)
        return {
            "asset_id": asset_id,
            "holder": holder,
            "balance": self._factory.chain.balance_of(asset_id, holder),
        }

    def _query_events(self, params: dict[str, Any]) -> dict[str, Any]:
        log = self._factory.chain.event_log
        event_type = params.get("event_type")
        if event_type is None:
            events = log.read_recent(params.get("limit"))
        else:
            limit = params.get("limit", log.default_recent)
            events = log.events(event_type)[-limit:] if limit > 0 else []
        return {"events": events, "returned": len(events)}
