# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

"""Private keys as PKCS#8 PrivateKeyInfo wrapping an RFC 5915 ECPrivateKey.

    PrivateKeyInfo ::= SEQUENCE {
        version              INTEGER,
        privateKeyAlgorithm  AlgorithmIdentifier,
        privateKey           OCTET STRING,
        attributes       [0] IMPLICIT Attributes OPTIONAL }

    ECPrivateKey ::= SEQUENCE {
        version        INTEGER { ecPrivkeyVer1(1) },
        privateKey     OCTET STRING,
        parameters [0] EXPLICIT OBJECT IDENTIFIER OPTIONAL,
        publicKey  [1] EXPLICIT BIT STRING OPTIONAL }

Per RFC 5915 the curve OID inside ECPrivateKey is OPTIONAL. We never write
it, since the PKCS#8 envelope already names the curve, but we accept keys
that carry it.

The PrivateKeyInfo version must be 0 or 1 (PKCS8_ACCEPTED_VERSIONS). Other
readers of this format only check the ECPrivateKey version and ignore the
PrivateKeyInfo one, so we are stricter than they are here.
"""

from typing import Optional

from ecdsa import der

from .asn1 import (der_errors, expect_empty, encode_algorithm_identifier,
                   decode_algorithm_identifier, check_algorithm, decode_named_curve_oid)
from .curve_registry import CurveRegistry, get_default_registry
from .ecc import PrivateKey, point_to_ser, is_secret_within_curve_range
from .logging import get_logger
from .util import (OID, assert_bytes, oid_to_str, MalformedInput, UnsupportedCurve, UnknownCurve,
                   UnsupportedVersion, InvalidPrivateKey, InvalidKeyLength, ScalarOutOfRange)


_logger = get_logger(__name__)


EC_PRIV_KEY_VERSION = 1
PKCS8_VERSION = 1
# v1 (RFC 5208) and v2 (RFC 5958)
PKCS8_ACCEPTED_VERSIONS = (0, 1)

TAG_EC_PARAMETERS = 0
TAG_EC_PUBLIC_KEY = 1
TAG_PKCS8_ATTRIBUTES = 0


def marshal_private_key(key: PrivateKey, *, registry: Optional[CurveRegistry] = None) -> bytes:
    if registry is None:
        registry = get_default_registry()
    oid = registry.oid_for(key.curve)
    if oid is None:
        raise UnsupportedCurve(f"unsupported ecgdsa curve: {key.curve.name}")
    # the curve is named by the envelope, not repeated inside
    ec_private_key = marshal_ec_private_key(key, oid=None)
    return der.encode_sequence(
        der.encode_integer(PKCS8_VERSION),
        encode_algorithm_identifier(oid),
        der.encode_octet_string(ec_private_key))


def marshal_ec_private_key(key: PrivateKey, *, oid: Optional[OID] = None) -> bytes:
    """Marshals an ECPrivateKey, with the curve OID set to oid, or omitted if oid is None."""
    if not key.curve.is_on_curve(key.x, key.y):
        raise InvalidPrivateKey("invalid elliptic curve private key: public point not on curve")
    if not is_secret_within_curve_range(key.curve, key.d):
        raise ScalarOutOfRange("invalid elliptic curve private key value")
    fields = [
        der.encode_integer(EC_PRIV_KEY_VERSION),
        der.encode_octet_string(key.get_secret_bytes()),
    ]
    if oid is not None:
        fields.append(der.encode_constructed(TAG_EC_PARAMETERS, der.encode_oid(*oid)))
    public_point = point_to_ser(key.curve, key.x, key.y)
    fields.append(der.encode_constructed(TAG_EC_PUBLIC_KEY, der.encode_bitstring(public_point, 0)))
    return der.encode_sequence(*fields)


def parse_private_key(
        der_bytes: bytes,
        *,
        registry: Optional[CurveRegistry] = None,
        strict_curve_params: bool = False,
) -> PrivateKey:
    assert_bytes(der_bytes)
    if registry is None:
        registry = get_default_registry()
    der_bytes = bytes(der_bytes)
    with der_errors('private key'):
        body, rest = der.remove_sequence(der_bytes)
    expect_empty(rest, 'private key')
    with der_errors('private key'):
        version, body = der.remove_integer(body)
    algorithm, params, body = decode_algorithm_identifier(body)
    with der_errors('private key'):
        ec_private_key, body = der.remove_octet_string(body)
        if body:
            tag, _attributes, body = der.remove_constructed(body)
            if tag != TAG_PKCS8_ATTRIBUTES:
                raise MalformedInput(f"unexpected tag {tag} in private key, expected attributes")
    expect_empty(body, 'private key attributes')
    if version not in PKCS8_ACCEPTED_VERSIONS:
        raise UnsupportedVersion(version, structure='PKCS#8')

    check_algorithm(algorithm, kind='private key')

    # Undecodable curve parameters are treated as absent, and the curve is
    # then taken from the ECPrivateKey itself. strict_curve_params turns this
    # into an error instead.
    named_curve_oid = None
    if params is not None:
        try:
            named_curve_oid = decode_named_curve_oid(params)
        except MalformedInput as e:
            if strict_curve_params:
                raise
            _logger.debug(f"ignoring PKCS#8 algorithm parameters: {e}")

    return parse_ec_private_key(ec_private_key, named_curve_oid=named_curve_oid, registry=registry)


def parse_ec_private_key(
        der_bytes: bytes,
        *,
        named_curve_oid: Optional[OID] = None,
        registry: Optional[CurveRegistry] = None,
) -> PrivateKey:
    """Parses an ECPrivateKey.

    The curve OID may be provided from another source (such as the PKCS#8
    container). If it is, it is used instead of the OID that may exist in
    the ECPrivateKey structure.
    """
    assert_bytes(der_bytes)
    if registry is None:
        registry = get_default_registry()
    der_bytes = bytes(der_bytes)
    inner_oid = None
    embedded_point = None
    with der_errors('EC private key'):
        body, rest = der.remove_sequence(der_bytes)
        version, body = der.remove_integer(body)
        private_key, body = der.remove_octet_string(body)
        if body[:1] == b'\xa0':
            _tag, oid_body, body = der.remove_constructed(body)
            inner_oid, oid_rest = der.remove_object(oid_body)
            expect_empty(oid_rest, 'EC private key parameters')
        if body[:1] == b'\xa1':
            _tag, bits_body, body = der.remove_constructed(body)
            embedded_point, bits_rest = der.remove_bitstring(bits_body, 0)
            expect_empty(bits_rest, 'EC private key public key')
    expect_empty(body, 'EC private key fields')
    expect_empty(rest, 'EC private key')

    if version != EC_PRIV_KEY_VERSION:
        raise UnsupportedVersion(version)

    if named_curve_oid is not None:
        curve = registry.curve_for(named_curve_oid)
        if curve is None:
            raise UnsupportedCurve(oid=named_curve_oid)
    elif inner_oid is not None:
        curve = registry.curve_for(inner_oid)
        if curve is None:
            raise UnknownCurve(f"unknown elliptic curve: {oid_to_str(inner_oid)}", oid=inner_oid)
    else:
        raise UnknownCurve("unknown elliptic curve")

    # Some producers pad the scalar with extra zero bytes. Strip those, but
    # only down to the canonical width.
    width = curve.scalar_byte_width()
    while len(private_key) > width:
        if private_key[0] != 0:
            raise InvalidKeyLength("invalid private key length")
        private_key = private_key[1:]

    k = int.from_bytes(private_key, byteorder='big', signed=False)
    if not is_secret_within_curve_range(curve, k):
        raise ScalarOutOfRange("invalid elliptic curve private key value")

    secret = private_key.rjust(width, b'\x00')
    d = int.from_bytes(secret, byteorder='big', signed=False)
    # the embedded public key is never trusted, it is always recomputed
    x, y = curve.derive_public_point(d)
    if embedded_point is not None and embedded_point != point_to_ser(curve, x, y):
        _logger.debug("embedded public key does not match the private scalar, using the derived one")
    return PrivateKey(curve=curve, d=d, x=x, y=y)
