from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from .types import *


def _identity(value):
    return value


def _bounded_int(name: str, dtype) -> Callable[[Any], int]:
    """builds a coercion that truncates to int and rejects values outside the dtype's range"""
    info = np.iinfo(dtype)
    low, high = int(info.min), int(info.max)

    def coerce(value) -> int:
        result = int(value)
        if result < low or result > high:
            raise OverflowError(f"{result} is out of range for {name} ({low}..{high})")
        return result
    return coerce


@dataclass(frozen=True)
class ElementKind:
    """
    the value category a query is specialised over.
    one generic operator set serves every kind; the kind only supplies the
    hooks that differ between them (coercion, additive identity, numpy dtype, sorting).
    """
    name: str
    coerce: Callable[[Any], Any]
    zero: Any
    dtype: Any = None

    @property
    def is_primitive(self) -> bool:
        return self.dtype is not None

    def coerced(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """wrap fn so every result it produces belongs to this kind"""
        if not self.is_primitive:
            return fn
        coerce = self.coerce
        return lambda *args: coerce(fn(*args))

    def sort(self, items: List[Any], key: Optional[Callable] = None, reverse: bool = False) -> List[Any]:
        """natural-order sort of a fully buffered sequence"""
        if self.is_primitive and key is None and items:
            # numpy sorts a homogeneous numeric buffer in c, then hand back python scalars
            ordered = np.sort(np.asarray(items, dtype=self.dtype))
            if reverse: ordered = ordered[::-1]
            return ordered.tolist()
        return sorted(items, key=key, reverse=reverse)

    def __repr__(self) -> str:
        return f"ElementKind({self.name})"


OBJECT = ElementKind('object', _identity, 0)
INT = ElementKind('int', _bounded_int('int', np.int32), 0, np.dtype(np.int32))
LONG = ElementKind('long', _bounded_int('long', np.int64), 0, np.dtype(np.int64))
DOUBLE = ElementKind('double', float, 0.0, np.dtype(np.float64))
