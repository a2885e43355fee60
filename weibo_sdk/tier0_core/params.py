"""
weibo_sdk.tier0_core.params
────────────────────────────
Parameter bag and the encoding helpers every endpoint builder shares.

Wire rules:
  - booleans are sent as the literal tokens "1"/"0", never true/false
  - id lists are sent as one comma-joined string, never empty, never
    longer than the endpoint's documented batch limit
  - binary values (image uploads) travel as multipart files, everything
    else as text fields
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Union

from weibo_sdk.tier0_core.errors import (
    BatchSizeExceeded,
    EmptyBatchError,
    RequestStateError,
    ValidationError,
)

ParamValue = Union[int, str, bytes]

# Documented per-endpoint batch limits.
COMMENTS_SHOW_BATCH_LIMIT = 50
COMMENTS_DESTROY_BATCH_LIMIT = 20
USERS_COUNTS_LIMIT = 100
PIC_ID_LIMIT = 9


def encode_bool_as_int(value: bool) -> str:
    """True → "1", False → "0"."""
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return "1" if value else "0"


def join_batch(values: Sequence[str], *, limit: int | None = None, field: str = "ids") -> str:
    """
    Join string ids with ``,``. An empty batch is an error, not an empty
    string, and a batch over *limit* is rejected rather than truncated.
    """
    items = list(values)
    if not items:
        raise EmptyBatchError(field)
    if limit is not None and len(items) > limit:
        raise BatchSizeExceeded(field, size=len(items), limit=limit)
    for item in items:
        if not isinstance(item, str) or not item or "," in item:
            raise ValidationError(
                user_message=f"{field} entries must be non-empty strings without commas.",
                fields={field: repr(item)},
            )
    return ",".join(items)


def join_ids(ids: Sequence[int], *, limit: int | None = None, field: str = "ids") -> str:
    """Join integer ids with ``,``; same emptiness and limit rules as join_batch."""
    items = list(ids)
    if not items:
        raise EmptyBatchError(field)
    for item in items:
        # bool is an int subclass; an id list of True/False is a caller bug
        if isinstance(item, bool) or not isinstance(item, int) or item < 0:
            raise ValidationError(
                user_message=f"{field} entries must be non-negative integers.",
                fields={field: repr(item)},
            )
    return join_batch([str(i) for i in items], limit=limit, field=field)


class ParameterBag:
    """
    Ordered key → value mapping sent as query string or form body.

    ``put`` overwrites an existing key (last write wins). Booleans are
    encoded as "1"/"0" on insertion, floats as their str(). Once frozen by
    the request builder the bag is read-only.
    """

    def __init__(self, initial: Mapping[str, object] | None = None) -> None:
        self._items: dict[str, ParamValue] = {}
        self._frozen = False
        if initial:
            for key, value in initial.items():
                self.put(key, value)

    def put(self, key: str, value: object) -> "ParameterBag":
        if self._frozen:
            raise RequestStateError(
                user_message="Parameter bag is frozen.",
                detail=f"put({key!r}) on a bag already consumed by a request",
            )
        if not isinstance(key, str) or not key:
            raise TypeError("parameter keys must be non-empty strings")
        self._items[key] = _coerce(key, value)
        return self

    def put_optional(self, key: str, value: object) -> "ParameterBag":
        """put() unless value is None or an empty string."""
        if value is None or value == "":
            return self
        return self.put(key, value)

    def freeze(self) -> "ParameterBag":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "ParameterBag":
        """Unfrozen copy with the same contents."""
        clone = ParameterBag()
        clone._items = dict(self._items)
        return clone

    def to_wire(self) -> dict[str, str]:
        """Text fields, stringified, in insertion order."""
        return {k: str(v) for k, v in self._items.items() if not isinstance(v, bytes)}

    def files(self) -> dict[str, bytes]:
        return {k: v for k, v in self._items.items() if isinstance(v, bytes)}

    def keys(self) -> list[str]:
        return list(self._items)

    def get(self, key: str, default: ParamValue | None = None) -> ParamValue | None:
        return self._items.get(key, default)

    def __getitem__(self, key: str) -> ParamValue:
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterBag):
            return self._items == other._items
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        shown = {k: (f"<{len(v)} bytes>" if isinstance(v, bytes) else v) for k, v in self._items.items()}
        return f"ParameterBag({shown!r})"


def _coerce(key: str, value: object) -> ParamValue:
    if isinstance(value, bool):
        return encode_bool_as_int(value)
    if isinstance(value, (int, str, bytes)):
        return value
    if isinstance(value, float):
        return str(value)
    if value is None:
        raise TypeError(f"parameter {key!r} is None; use put_optional() for optional fields")
    raise TypeError(f"parameter {key!r} has unsupported type {type(value).__name__}")


__all__ = [
    "ParameterBag",
    "ParamValue",
    "encode_bool_as_int",
    "join_ids",
    "join_batch",
    "COMMENTS_SHOW_BATCH_LIMIT",
    "COMMENTS_DESTROY_BATCH_LIMIT",
    "USERS_COUNTS_LIMIT",
    "PIC_ID_LIMIT",
]
