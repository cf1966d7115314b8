from .version import ECGDSA_VERSION
from .util import (KeyCodecError, UnsupportedCurve, UnknownCurve, UnknownAlgorithm, MalformedInput,
                   InvalidPublicKey, InvalidECPointException, InvalidPrivateKey, InvalidKeyLength,
                   ScalarOutOfRange, UnsupportedVersion, CurveRegistrationError)
from .curves import CurveParams, WeierstrassCurve
from .curve_registry import CurveRegistry, get_default_registry, init_default_registry
from .ecc import PublicKey, PrivateKey, point_to_ser, ser_to_point
from .pkix import marshal_public_key, parse_public_key
from .pkcs8 import marshal_private_key, parse_private_key
from .pem import (public_key_to_pem, public_key_from_pem, private_key_to_pem,
                  private_key_from_pem, load_key)
from .logging import get_logger


__version__ = ECGDSA_VERSION
