# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

from typing import Optional, Sequence, Tuple, Union


OID = Tuple[int, ...]


def assert_bytes(*args):
    for x in args:
        if not isinstance(x, (bytes, bytearray)):
            raise TypeError(f"expected bytes, not {type(x)}")


def to_bytes(something, encoding='utf8') -> bytes:
    if isinstance(something, bytes):
        return something
    if isinstance(something, bytearray):
        return bytes(something)
    if isinstance(something, str):
        return something.encode(encoding)
    raise TypeError("Not a string or bytes like object")


def bits_to_bytes(bits: int) -> int:
    return (bits + 7) // 8


def oid_to_str(oid: Sequence[int]) -> str:
    return '.'.join(map(str, oid))


def normalize_oid(oid: Union[str, Sequence[int]]) -> OID:
    """Accepts '1.2.840.10045.3.1.7' or (1, 2, 840, 10045, 3, 1, 7)."""
    if isinstance(oid, str):
        try:
            parts = tuple(int(x) for x in oid.strip().split('.'))
        except ValueError as e:
            raise ValueError(f"invalid object identifier: {oid!r}") from e
    else:
        parts = tuple(oid)
    if len(parts) < 2 or any((not isinstance(x, int)) or x < 0 for x in parts):
        raise ValueError(f"invalid object identifier: {oid!r}")
    if parts[0] > 2 or (parts[0] < 2 and parts[1] > 39):
        raise ValueError(f"invalid object identifier: {oid!r}")
    return parts


class KeyCodecError(Exception):
    """Base class of every error raised while marshalling or parsing keys."""


class UnsupportedCurve(KeyCodecError):

    def __init__(self, message: str = '', *, oid: Optional[OID] = None):
        if not message:
            if oid is not None:
                message = f"unsupported ecgdsa curve: {oid_to_str(oid)}"
            else:
                message = "unsupported ecgdsa curve"
        KeyCodecError.__init__(self, message)
        self.oid = oid


class UnknownCurve(UnsupportedCurve):
    """Neither the outer envelope nor the inner structure names a usable curve."""


class UnknownAlgorithm(KeyCodecError):

    def __init__(self, oid: OID, *, kind: str = 'key'):
        KeyCodecError.__init__(self, f"unknown {kind} algorithm: {oid_to_str(oid)}")
        self.oid = oid


class MalformedInput(KeyCodecError):
    pass


class InvalidPublicKey(KeyCodecError):
    pass


class InvalidECPointException(InvalidPublicKey):
    """e.g. not on curve, bad tag or wrong length"""


class InvalidPrivateKey(KeyCodecError):
    pass


class InvalidKeyLength(InvalidPrivateKey):
    pass


class ScalarOutOfRange(InvalidPrivateKey):
    pass


class UnsupportedVersion(KeyCodecError):

    def __init__(self, version: int, *, structure: str = 'EC private key'):
        KeyCodecError.__init__(self, f"unknown {structure} version {version}")
        self.version = version


class CurveRegistrationError(Exception):
    """Misuse of the curve registry. This is a programming error."""


class UserFacingException(Exception):
    """Exception that contains information intended to be shown to the user."""
