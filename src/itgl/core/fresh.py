"""Fresh identifier supply for type variables and type parameters."""

from __future__ import annotations

import itertools
import threading

from itgl.core.types import TypeParam, TypeVar


class FreshSupply:
    """Two independent, strictly increasing counters.

    One supply belongs to one top-level inference and is threaded through
    generation, unification and generalization. Allocation is serialized so
    a supply may be shared between threads without handing out an id twice.
    """

    def __init__(self, start: int = 1):
        self._tyvars = itertools.count(start)
        self._typarams = itertools.count(start)
        self._lock = threading.Lock()

    def tyvar(self) -> TypeVar:
        with self._lock:
            return TypeVar(next(self._tyvars))

    def typaram(self) -> TypeParam:
        with self._lock:
            return TypeParam(next(self._typarams))

    def tyvar_pair(self) -> tuple[TypeVar, TypeVar]:
        with self._lock:
            return TypeVar(next(self._tyvars)), TypeVar(next(self._tyvars))
