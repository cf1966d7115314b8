# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

"""DER plumbing shared by the public and private key envelopes.

    AlgorithmIdentifier ::= SEQUENCE {
        algorithm   OBJECT IDENTIFIER,
        parameters  ANY DEFINED BY algorithm OPTIONAL }

For ecgdsa keys the parameters are the named curve OID.
"""

from contextlib import contextmanager
from typing import Optional, Tuple

from ecdsa import der

from .curve_registry import OID_PUBLIC_KEY_ECGDSA
from .util import OID, MalformedInput, UnknownAlgorithm


@contextmanager
def der_errors(what: str):
    """Turn DER decoding failures into MalformedInput.

    Some ecdsa.der decoders index into their input without checking its
    length first, so an empty field shows up as IndexError.
    """
    try:
        yield
    except (der.UnexpectedDER, IndexError) as e:
        raise MalformedInput(f"failed to parse {what}: {e}") from e


def expect_empty(rest: bytes, what: str) -> None:
    if rest:
        raise MalformedInput(f"trailing data after ASN.1 of {what}: {len(rest)} bytes")


def encode_algorithm_identifier(curve_oid: OID) -> bytes:
    return der.encode_sequence(
        der.encode_oid(*OID_PUBLIC_KEY_ECGDSA),
        der.encode_oid(*curve_oid))


def decode_algorithm_identifier(data: bytes) -> Tuple[OID, Optional[bytes], bytes]:
    """Returns (algorithm, raw parameters or None, rest)."""
    with der_errors('algorithm identifier'):
        body, rest = der.remove_sequence(data)
        algorithm, params = der.remove_object(body)
    return algorithm, (params or None), rest


def check_algorithm(algorithm: OID, *, kind: str) -> None:
    if algorithm != OID_PUBLIC_KEY_ECGDSA:
        raise UnknownAlgorithm(algorithm, kind=kind)


def decode_named_curve_oid(params: Optional[bytes]) -> OID:
    """The parameters must be exactly one OBJECT IDENTIFIER."""
    if not params:
        raise MalformedInput("missing algorithm parameters")
    with der_errors('algorithm parameters'):
        oid, rest = der.remove_object(params)
    if rest:
        raise MalformedInput("invalid algorithm parameters: not a single object identifier")
    return oid
