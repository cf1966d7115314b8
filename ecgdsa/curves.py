# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

"""Elliptic curve domain parameters.

The arithmetic itself is done by python-ecdsa. This module only adapts its
curve objects to the small capability the key codecs need (CurveParams), so
that NIST and brainpool curves can be used through one interface.
"""

from typing import Protocol, Tuple

import attr
from ecdsa import curves as ecdsa_curves
from ecdsa import ellipticcurve

from .util import bits_to_bytes


class CurveParams(Protocol):
    """What the key codecs need to know about a curve."""

    name: str

    def field_byte_width(self) -> int: ...

    def scalar_byte_width(self) -> int: ...

    def order(self) -> int: ...

    def is_on_curve(self, x: int, y: int) -> bool: ...

    def derive_public_point(self, d: int) -> Tuple[int, int]: ...


@attr.s(frozen=True, slots=True, eq=False, repr=False)
class WeierstrassCurve:
    """Short Weierstrass curve backed by an ecdsa.curves.Curve.

    Instances are handles: they compare and hash by identity.
    """
    name = attr.ib(type=str)
    _ecdsa_curve = attr.ib(type=ecdsa_curves.Curve)

    @property
    def ecdsa_curve(self) -> ecdsa_curves.Curve:
        return self._ecdsa_curve

    def _curve_fp(self) -> ellipticcurve.CurveFp:
        return self._ecdsa_curve.curve

    def field_byte_width(self) -> int:
        return bits_to_bytes(self._curve_fp().p().bit_length())

    def scalar_byte_width(self) -> int:
        return bits_to_bytes(self.order().bit_length())

    def order(self) -> int:
        return self._ecdsa_curve.order

    def is_on_curve(self, x: int, y: int) -> bool:
        if not (isinstance(x, int) and isinstance(y, int)):
            return False
        curve_fp = self._curve_fp()
        p = curve_fp.p()
        if not (0 <= x < p and 0 <= y < p):
            return False
        if not curve_fp.contains_point(x, y):
            return False
        if curve_fp.cofactor() != 1:
            # also require the point to be in the prime order subgroup
            point = ellipticcurve.Point(curve_fp, x, y)
            return point * self.order() == ellipticcurve.INFINITY
        return True

    def derive_public_point(self, d: int) -> Tuple[int, int]:
        if not (0 < d < self.order()):
            raise ValueError('scalar not within curve order')
        point = self._ecdsa_curve.generator * d
        return point.x(), point.y()

    def __repr__(self):
        return f"<WeierstrassCurve {self.name}>"


P224 = WeierstrassCurve('P-224', ecdsa_curves.NIST224p)
P256 = WeierstrassCurve('P-256', ecdsa_curves.NIST256p)
P384 = WeierstrassCurve('P-384', ecdsa_curves.NIST384p)
P521 = WeierstrassCurve('P-521', ecdsa_curves.NIST521p)

BRAINPOOL_P224R1 = WeierstrassCurve('brainpoolP224r1', ecdsa_curves.BRAINPOOLP224r1)
BRAINPOOL_P224T1 = WeierstrassCurve('brainpoolP224t1', ecdsa_curves.BRAINPOOLP224t1)
BRAINPOOL_P256R1 = WeierstrassCurve('brainpoolP256r1', ecdsa_curves.BRAINPOOLP256r1)
BRAINPOOL_P256T1 = WeierstrassCurve('brainpoolP256t1', ecdsa_curves.BRAINPOOLP256t1)
BRAINPOOL_P384R1 = WeierstrassCurve('brainpoolP384r1', ecdsa_curves.BRAINPOOLP384r1)
BRAINPOOL_P384T1 = WeierstrassCurve('brainpoolP384t1', ecdsa_curves.BRAINPOOLP384t1)
BRAINPOOL_P512R1 = WeierstrassCurve('brainpoolP512r1', ecdsa_curves.BRAINPOOLP512r1)
BRAINPOOL_P512T1 = WeierstrassCurve('brainpoolP512t1', ecdsa_curves.BRAINPOOLP512t1)
