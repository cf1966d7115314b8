# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

from typing import Tuple

import attr
from ecdsa.util import string_to_number

from .curves import CurveParams
from .util import assert_bytes, InvalidECPointException, ScalarOutOfRange


def point_to_ser(curve: CurveParams, x: int, y: int) -> bytes:
    """Uncompressed SEC1 encoding: 0x04 || X || Y, both padded to the field width."""
    width = curve.field_byte_width()
    return (b'\x04'
            + int.to_bytes(x, length=width, byteorder='big', signed=False)
            + int.to_bytes(y, length=width, byteorder='big', signed=False))


def ser_to_point(curve: CurveParams, ser: bytes) -> Tuple[int, int]:
    assert_bytes(ser)
    width = curve.field_byte_width()
    if len(ser) != 1 + 2 * width:
        raise InvalidECPointException(
            f'unexpected size for {curve.name} point. should be {1 + 2 * width} bytes, not {len(ser)}')
    if ser[0] != 0x04:
        raise InvalidECPointException('Unexpected first byte: {}'.format(ser[0]))
    x = string_to_number(ser[1:1 + width])
    y = string_to_number(ser[1 + width:])
    if not curve.is_on_curve(x, y):
        raise InvalidECPointException(f'point is not on curve {curve.name}')
    return x, y


def _is_int(instance, attribute, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{attribute.name} must be an int, not {type(value)}")


@attr.s(frozen=True, slots=True)
class PublicKey:
    curve = attr.ib()  # type: CurveParams
    x = attr.ib(validator=_is_int, repr=lambda v: hex(v))
    y = attr.ib(validator=_is_int, repr=lambda v: hex(v))

    def point(self) -> Tuple[int, int]:
        return self.x, self.y

    def is_on_curve(self) -> bool:
        return self.curve.is_on_curve(self.x, self.y)

    def get_public_key_bytes(self) -> bytes:
        return point_to_ser(self.curve, self.x, self.y)

    def get_public_key_hex(self) -> str:
        return self.get_public_key_bytes().hex()

    @classmethod
    def from_bytes(cls, curve: CurveParams, ser: bytes) -> 'PublicKey':
        x, y = ser_to_point(curve, ser)
        return cls(curve=curve, x=x, y=y)


def is_secret_within_curve_range(curve: CurveParams, secret: int) -> bool:
    return 0 < secret < curve.order()


@attr.s(frozen=True, slots=True)
class PrivateKey:
    curve = attr.ib()  # type: CurveParams
    d = attr.ib(validator=_is_int, repr=False)
    x = attr.ib(validator=_is_int, repr=lambda v: hex(v))
    y = attr.ib(validator=_is_int, repr=lambda v: hex(v))

    @classmethod
    def from_scalar(cls, curve: CurveParams, d: int) -> 'PrivateKey':
        if not is_secret_within_curve_range(curve, d):
            raise ScalarOutOfRange(f'invalid {curve.name} private key value (not within curve order)')
        x, y = curve.derive_public_point(d)
        return cls(curve=curve, d=d, x=x, y=y)

    def public_key(self) -> PublicKey:
        return PublicKey(curve=self.curve, x=self.x, y=self.y)

    def get_secret_bytes(self) -> bytes:
        """The scalar as canonical fixed-width big-endian octets."""
        return int.to_bytes(self.d, length=self.curve.scalar_byte_width(), byteorder='big', signed=False)
