# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

"""Public keys as PKIX SubjectPublicKeyInfo.

    SubjectPublicKeyInfo ::= SEQUENCE {
        algorithm         AlgorithmIdentifier,
        subjectPublicKey  BIT STRING }
"""

from typing import Optional

from ecdsa import der

from .asn1 import (der_errors, expect_empty, encode_algorithm_identifier,
                   decode_algorithm_identifier, check_algorithm, decode_named_curve_oid)
from .curve_registry import CurveRegistry, get_default_registry
from .ecc import PublicKey, point_to_ser, ser_to_point
from .logging import get_logger
from .util import assert_bytes, InvalidPublicKey, InvalidECPointException, UnsupportedCurve


_logger = get_logger(__name__)


def marshal_public_key(pub: PublicKey, *, registry: Optional[CurveRegistry] = None) -> bytes:
    if registry is None:
        registry = get_default_registry()
    oid = registry.oid_for(pub.curve)
    if oid is None:
        raise UnsupportedCurve(f"unsupported ecgdsa curve: {pub.curve.name}")
    if not pub.curve.is_on_curve(pub.x, pub.y):
        raise InvalidPublicKey("invalid elliptic curve public key")
    point = point_to_ser(pub.curve, pub.x, pub.y)
    return der.encode_sequence(
        encode_algorithm_identifier(oid),
        der.encode_bitstring(point, 0))


def parse_public_key(der_bytes: bytes, *, registry: Optional[CurveRegistry] = None) -> PublicKey:
    assert_bytes(der_bytes)
    if registry is None:
        registry = get_default_registry()
    der_bytes = bytes(der_bytes)
    with der_errors('public key'):
        body, rest = der.remove_sequence(der_bytes)
    expect_empty(rest, 'public key')

    algorithm, params, body = decode_algorithm_identifier(body)
    with der_errors('public key'):
        point_bytes, rest = der.remove_bitstring(body, 0)
    expect_empty(rest, 'public key bit string')

    check_algorithm(algorithm, kind='public key')
    curve_oid = decode_named_curve_oid(params)
    curve = registry.curve_for(curve_oid)
    if curve is None:
        raise UnsupportedCurve(oid=curve_oid)

    try:
        x, y = ser_to_point(curve, point_bytes)
    except InvalidECPointException as e:
        _logger.debug(f"rejecting {curve.name} public key: {e}")
        raise InvalidPublicKey(f"failed to unmarshal elliptic curve point: {e}") from e
    return PublicKey(curve=curve, x=x, y=y)
