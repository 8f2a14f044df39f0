"""
Indicator snapshots.

A snapshot is a plain dictionary:

    {"indicator": <registered name>, "params": {...}, "state": {...}}

``load`` rebuilds the indicator through the factory and restores the state,
so feeding the restored indicator produces exactly the outputs the original
would have produced. ``to_json``/``from_json`` serialize snapshots; Decimal
values are written as ``{"__decimal__": "<text>"}`` so no precision is lost.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict

from .base import BaseIndicator
from .exceptions import SnapshotError
from .factory import create, registry_name

logger = logging.getLogger(__name__)

_DECIMAL_KEY = "__decimal__"


def dump(indicator: BaseIndicator) -> Dict[str, Any]:
    """Capture an indicator's identity, parameters and full state."""
    return {
        'indicator': registry_name(indicator),
        'params': indicator.params,
        'state': indicator.get_state(),
    }


def load(snapshot: Dict[str, Any]) -> BaseIndicator:
    """
    Rebuild an indicator from ``dump`` output.

    Raises:
        SnapshotError: If the snapshot is malformed or its state does not fit.
        IndicatorNotFoundError: If the named indicator is not registered.
        InvalidParameterError: If the recorded parameters are rejected.
    """
    try:
        name = snapshot['indicator']
        params = snapshot['params']
        state = snapshot['state']
    except (KeyError, TypeError) as e:
        raise SnapshotError(f"malformed snapshot ({e})") from e

    indicator = create(name, **params)
    indicator.set_state(state)
    logger.debug(f"Restored {indicator} from snapshot")
    return indicator


class _SnapshotEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return {_DECIMAL_KEY: str(o)}
        return super().default(o)


def _decode_object(obj: Dict[str, Any]) -> Any:
    if len(obj) == 1 and _DECIMAL_KEY in obj:
        return Decimal(obj[_DECIMAL_KEY])
    return obj


def to_json(indicator: BaseIndicator, **kwargs) -> str:
    """Serialize an indicator snapshot to JSON text."""
    return json.dumps(dump(indicator), cls=_SnapshotEncoder, **kwargs)


def from_json(text: str) -> BaseIndicator:
    """Rebuild an indicator from ``to_json`` output."""
    try:
        snapshot = json.loads(text, object_hook=_decode_object)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid JSON ({e})") from e
    return load(snapshot)
