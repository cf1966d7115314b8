# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

import threading
from types import MappingProxyType
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from . import curves
from .curves import CurveParams
from .logging import get_logger
from .util import OID, CurveRegistrationError, normalize_oid, oid_to_str


_logger = get_logger(__name__)


# algo OID
OID_PUBLIC_KEY_ECGDSA = (1, 3, 36, 3, 3, 2, 5, 2, 1)

# named curve OIDs
OID_NAMED_CURVE_P224 = (1, 3, 132, 0, 33)
OID_NAMED_CURVE_P256 = (1, 2, 840, 10045, 3, 1, 7)
OID_NAMED_CURVE_P384 = (1, 3, 132, 0, 34)
OID_NAMED_CURVE_P521 = (1, 3, 132, 0, 35)

OID_BRAINPOOL_P224R1 = (1, 3, 36, 3, 3, 2, 1, 1, 5)
OID_BRAINPOOL_P224T1 = (1, 3, 36, 3, 3, 2, 1, 1, 6)
OID_BRAINPOOL_P256R1 = (1, 3, 36, 3, 3, 2, 1, 1, 7)
OID_BRAINPOOL_P256T1 = (1, 3, 36, 3, 3, 2, 1, 1, 8)
OID_BRAINPOOL_P384R1 = (1, 3, 36, 3, 3, 2, 1, 1, 11)
OID_BRAINPOOL_P384T1 = (1, 3, 36, 3, 3, 2, 1, 1, 12)
OID_BRAINPOOL_P512R1 = (1, 3, 36, 3, 3, 2, 1, 1, 13)
OID_BRAINPOOL_P512T1 = (1, 3, 36, 3, 3, 2, 1, 1, 14)

DEFAULT_NAMED_CURVES = (
    (curves.P224, OID_NAMED_CURVE_P224),
    (curves.P256, OID_NAMED_CURVE_P256),
    (curves.P384, OID_NAMED_CURVE_P384),
    (curves.P521, OID_NAMED_CURVE_P521),

    (curves.BRAINPOOL_P224R1, OID_BRAINPOOL_P224R1),
    (curves.BRAINPOOL_P224T1, OID_BRAINPOOL_P224T1),
    (curves.BRAINPOOL_P256R1, OID_BRAINPOOL_P256R1),
    (curves.BRAINPOOL_P256T1, OID_BRAINPOOL_P256T1),
    (curves.BRAINPOOL_P384R1, OID_BRAINPOOL_P384R1),
    (curves.BRAINPOOL_P384T1, OID_BRAINPOOL_P384T1),
    (curves.BRAINPOOL_P512R1, OID_BRAINPOOL_P512R1),
    (curves.BRAINPOOL_P512T1, OID_BRAINPOOL_P512T1),
)


class CurveRegistry:
    """Bijection between curve handles and named curve OIDs.

    Curves are registered during a single-threaded setup phase, then the
    registry is frozen. Lookups on a frozen registry only read immutable
    mappings and can be done from any thread.
    """

    def __init__(self):
        self._oid_from_curve = {}
        self._curve_from_oid = {}
        self._frozen = False
        self._lock = threading.Lock()

    def register(self, curve: CurveParams, oid: Union[str, Sequence[int]]) -> None:
        oid = normalize_oid(oid)
        with self._lock:
            if self._frozen:
                raise CurveRegistrationError('curve registry is frozen')
            if curve in self._oid_from_curve:
                raise CurveRegistrationError(
                    f"curve {curve.name} already registered as {oid_to_str(self._oid_from_curve[curve])}")
            if oid in self._curve_from_oid:
                raise CurveRegistrationError(
                    f"OID {oid_to_str(oid)} already registered for {self._curve_from_oid[oid].name}")
            self._oid_from_curve[curve] = oid
            self._curve_from_oid[oid] = curve

    def freeze(self) -> 'CurveRegistry':
        with self._lock:
            if not self._frozen:
                self._oid_from_curve = MappingProxyType(dict(self._oid_from_curve))
                self._curve_from_oid = MappingProxyType(dict(self._curve_from_oid))
                self._frozen = True
        return self

    def is_frozen(self) -> bool:
        return self._frozen

    def oid_for(self, curve: CurveParams) -> Optional[OID]:
        return self._oid_from_curve.get(curve)

    def curve_for(self, oid: Union[str, Sequence[int]]) -> Optional[CurveParams]:
        try:
            oid = normalize_oid(oid)
        except ValueError:
            return None
        return self._curve_from_oid.get(oid)

    def items(self) -> List[Tuple[CurveParams, OID]]:
        return list(self._oid_from_curve.items())

    def __contains__(self, curve) -> bool:
        return curve in self._oid_from_curve

    def __iter__(self) -> Iterator[CurveParams]:
        return iter(list(self._oid_from_curve))

    def __len__(self) -> int:
        return len(self._oid_from_curve)


def build_registry(named_curves=DEFAULT_NAMED_CURVES) -> CurveRegistry:
    registry = CurveRegistry()
    for curve, oid in named_curves:
        registry.register(curve, oid)
    return registry.freeze()


_default_registry = None  # type: Optional[CurveRegistry]
_default_registry_lock = threading.Lock()


def init_default_registry() -> CurveRegistry:
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = build_registry()
            _logger.debug(f"curve registry initialized with {len(_default_registry)} curves")
        return _default_registry


def get_default_registry() -> CurveRegistry:
    registry = _default_registry
    if registry is None:
        registry = init_default_registry()
    return registry
