# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

import binascii
from typing import List, Optional, Union

from .curve_registry import CurveRegistry
from .ecc import PublicKey, PrivateKey
from .pkcs8 import marshal_private_key, parse_private_key, parse_ec_private_key
from .pkix import marshal_public_key, parse_public_key
from .util import to_bytes, MalformedInput


PEM_PUBLIC_KEY = "PUBLIC KEY"
PEM_PRIVATE_KEY = "PRIVATE KEY"
PEM_EC_PRIVATE_KEY = "EC PRIVATE KEY"


class PemError(MalformedInput):
    pass


def a2b_base64(s: str) -> bytes:
    try:
        b = binascii.a2b_base64(s)
    except (binascii.Error, ValueError) as e:
        raise PemError("base64 error: %s" % e) from e
    return b


def b2a_base64(b: bytes) -> str:
    return binascii.b2a_base64(b, newline=False).decode('ascii')


def dePem(s: str, name: str) -> bytes:
    """Decode a PEM string into the bytes of its payload.

    The input must contain an appropriate PEM prefix and postfix
    based on the input name string, e.g. for name="PUBLIC KEY":

    -----BEGIN PUBLIC KEY-----
    MFIwFAYJKyQDAwIFAgEBBgcqhkjOPQMBBwM6AAT...
    -----END PUBLIC KEY-----

    The first such PEM block in the input will be found, and its
    payload will be base64 decoded and returned.
    """
    prefix = "-----BEGIN %s-----" % name
    postfix = "-----END %s-----" % name
    start = s.find(prefix)
    if start == -1:
        raise PemError("Missing PEM prefix")
    end = s.find(postfix, start + len(prefix))
    if end == -1:
        raise PemError("Missing PEM postfix")
    s = s[start + len(prefix):end]
    return a2b_base64(s)


def dePemList(s: str, name: str) -> List[bytes]:
    """Decode a sequence of PEM blocks into a list of bytes.

    Arbitrary text can appear between, before and after the PEM blocks.
    The result may have zero elements if no PEM blocks are found.
    """
    bList = []
    prefix = "-----BEGIN %s-----" % name
    postfix = "-----END %s-----" % name
    while True:
        start = s.find(prefix)
        if start == -1:
            return bList
        end = s.find(postfix, start + len(prefix))
        if end == -1:
            raise PemError("Missing PEM postfix")
        bList.append(a2b_base64(s[start + len(prefix):end]))
        s = s[end + len(postfix):]


def pem(b: bytes, name: str) -> str:
    """Encode a payload into a PEM string, in lines of 64 characters."""
    s1 = b2a_base64(b)
    s2 = ""
    while s1:
        s2 += s1[:64] + "\n"
        s1 = s1[64:]
    return ("-----BEGIN %s-----\n" % name) + s2 + ("-----END %s-----\n" % name)


def pemSniff(inStr: str, name: str) -> bool:
    searchStr = "-----BEGIN %s-----" % name
    return searchStr in inStr


def public_key_to_pem(pub: PublicKey, *, registry: Optional[CurveRegistry] = None) -> str:
    return pem(marshal_public_key(pub, registry=registry), PEM_PUBLIC_KEY)


def public_key_from_pem(s: str, *, registry: Optional[CurveRegistry] = None) -> PublicKey:
    return parse_public_key(dePem(s, PEM_PUBLIC_KEY), registry=registry)


def private_key_to_pem(key: PrivateKey, *, registry: Optional[CurveRegistry] = None) -> str:
    return pem(marshal_private_key(key, registry=registry), PEM_PRIVATE_KEY)


def private_key_from_pem(
        s: str,
        *,
        registry: Optional[CurveRegistry] = None,
        strict_curve_params: bool = False,
) -> PrivateKey:
    if pemSniff(s, PEM_EC_PRIVATE_KEY):
        return parse_ec_private_key(dePem(s, PEM_EC_PRIVATE_KEY), registry=registry)
    if pemSniff(s, PEM_PRIVATE_KEY):
        return parse_private_key(dePem(s, PEM_PRIVATE_KEY), registry=registry,
                                 strict_curve_params=strict_curve_params)
    raise PemError("Not a PEM private key file")


def load_key(
        data: Union[str, bytes],
        *,
        registry: Optional[CurveRegistry] = None,
        strict_curve_params: bool = False,
) -> Union[PublicKey, PrivateKey]:
    """Load a public or private key from PEM text or raw DER."""
    data = to_bytes(data)
    if data.lstrip().startswith(b"-----BEGIN "):
        try:
            text = data.decode('ascii')
        except UnicodeDecodeError as e:
            raise PemError("PEM data is not ascii") from e
        if pemSniff(text, PEM_PUBLIC_KEY):
            return public_key_from_pem(text, registry=registry)
        return private_key_from_pem(text, registry=registry, strict_curve_params=strict_curve_params)
    return load_der_key(data, registry=registry, strict_curve_params=strict_curve_params)


def load_der_key(
        der_bytes: bytes,
        *,
        registry: Optional[CurveRegistry] = None,
        strict_curve_params: bool = False,
) -> Union[PublicKey, PrivateKey]:
    # a PrivateKeyInfo starts with an INTEGER, a SubjectPublicKeyInfo with a SEQUENCE
    if der_bytes[:1] == b'\x30' and _first_field_tag(der_bytes) == 0x02:
        return parse_private_key(der_bytes, registry=registry, strict_curve_params=strict_curve_params)
    return parse_public_key(der_bytes, registry=registry)


def _first_field_tag(der_bytes: bytes) -> Optional[int]:
    if len(der_bytes) < 2:
        return None
    length_byte = der_bytes[1]
    offset = 2 if length_byte < 0x80 else 2 + (length_byte & 0x7f)
    if offset >= len(der_bytes):
        return None
    return der_bytes[offset]
