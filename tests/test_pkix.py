from ecdsa import der
from ecdsa import curves as ecdsa_curves

from ecgdsa import curves
from ecgdsa.curves import WeierstrassCurve
from ecgdsa.curve_registry import (get_default_registry, OID_PUBLIC_KEY_ECGDSA,
                                   OID_NAMED_CURVE_P256, OID_BRAINPOOL_P256R1)
from ecgdsa.ecc import PublicKey, PrivateKey, point_to_ser
from ecgdsa.pkix import marshal_public_key, parse_public_key
from ecgdsa.util import (MalformedInput, UnsupportedCurve, UnknownAlgorithm, InvalidPublicKey,
                         KeyCodecError)

from . import KeyCodecTestCase


def spki(point: bytes, *, algorithm=OID_PUBLIC_KEY_ECGDSA, params=None) -> bytes:
    if params is None:
        params = der.encode_oid(*OID_NAMED_CURVE_P256)
    return der.encode_sequence(
        der.encode_sequence(der.encode_oid(*algorithm), params),
        der.encode_bitstring(point, 0))


def p256_point(d: int = 5) -> bytes:
    return point_to_ser(curves.P256, *curves.P256.derive_public_point(d))


class TestMarshalPublicKey(KeyCodecTestCase):

    def test_roundtrip_all_curves(self):
        registry = get_default_registry()
        for curve in registry:
            with self.subTest(curve=curve.name):
                pub = PrivateKey.from_scalar(curve, 0x1234567).public_key()
                der_bytes = marshal_public_key(pub)
                parsed = parse_public_key(der_bytes)
                self.assertIs(curve, parsed.curve)
                self.assertEqual(pub.point(), parsed.point())

    def test_structure(self):
        pub = PrivateKey.from_scalar(curves.BRAINPOOL_P256R1, 42).public_key()
        der_bytes = marshal_public_key(pub)
        body, rest = der.remove_sequence(der_bytes)
        self.assertEqual(b'', rest)
        algid, body = der.remove_sequence(body)
        algorithm, params = der.remove_object(algid)
        self.assertEqual(OID_PUBLIC_KEY_ECGDSA, algorithm)
        curve_oid, params_rest = der.remove_object(params)
        self.assertEqual(OID_BRAINPOOL_P256R1, curve_oid)
        self.assertEqual(b'', params_rest)
        point, body = der.remove_bitstring(body, 0)
        self.assertEqual(b'', body)
        self.assertEqual(pub.get_public_key_bytes(), point)
        self.assertEqual(65, len(point))

    def test_deterministic(self):
        pub = PrivateKey.from_scalar(curves.P384, 77).public_key()
        self.assertEqual(marshal_public_key(pub), marshal_public_key(pub))
        self.assertEqual(spki(p256_point()), marshal_public_key(PublicKey.from_bytes(curves.P256, p256_point())))

    def test_unregistered_curve(self):
        secp256k1 = WeierstrassCurve('secp256k1', ecdsa_curves.SECP256k1)
        pub = PrivateKey.from_scalar(secp256k1, 3).public_key()
        with self.assertRaises(UnsupportedCurve):
            marshal_public_key(pub)

    def test_point_not_on_curve(self):
        x, y = curves.P256.derive_public_point(5)
        with self.assertRaises(InvalidPublicKey):
            marshal_public_key(PublicKey(curve=curves.P256, x=x, y=y + 1))

    def test_point_on_another_curve(self):
        x, y = curves.P384.derive_public_point(5)
        with self.assertRaises(InvalidPublicKey):
            marshal_public_key(PublicKey(curve=curves.P256, x=x, y=y))


class TestParsePublicKey(KeyCodecTestCase):

    def test_parse(self):
        pub = parse_public_key(spki(p256_point(9)))
        self.assertIs(curves.P256, pub.curve)
        self.assertEqual(curves.P256.derive_public_point(9), pub.point())

    def test_accepts_bytearray(self):
        pub = parse_public_key(bytearray(spki(p256_point(9))))
        self.assertIs(curves.P256, pub.curve)

    def test_unknown_algorithm(self):
        # id-ecPublicKey instead of the ecgdsa algorithm
        der_bytes = spki(p256_point(), algorithm=(1, 2, 840, 10045, 2, 1))
        with self.assertRaises(UnknownAlgorithm) as ctx:
            parse_public_key(der_bytes)
        self.assertEqual((1, 2, 840, 10045, 2, 1), ctx.exception.oid)

    def test_unregistered_curve_oid(self):
        der_bytes = spki(p256_point(), params=der.encode_oid(1, 3, 132, 0, 10))
        with self.assertRaises(UnsupportedCurve) as ctx:
            parse_public_key(der_bytes)
        self.assertEqual((1, 3, 132, 0, 10), ctx.exception.oid)

    def test_params_not_an_oid(self):
        der_bytes = spki(p256_point(), params=der.encode_integer(7))
        with self.assertRaises(MalformedInput):
            parse_public_key(der_bytes)

    def test_params_missing(self):
        der_bytes = der.encode_sequence(
            der.encode_sequence(der.encode_oid(*OID_PUBLIC_KEY_ECGDSA)),
            der.encode_bitstring(p256_point(), 0))
        with self.assertRaises(MalformedInput):
            parse_public_key(der_bytes)

    def test_trailing_data(self):
        with self.assertRaises(MalformedInput):
            parse_public_key(spki(p256_point()) + b'\x00')

    def test_truncated(self):
        der_bytes = spki(p256_point())
        for cut in (1, 10, len(der_bytes) - 1):
            with self.assertRaises(MalformedInput):
                parse_public_key(der_bytes[:cut])
        with self.assertRaises(MalformedInput):
            parse_public_key(b'')

    def test_missing_fields(self):
        algid = der.encode_sequence(der.encode_oid(*OID_PUBLIC_KEY_ECGDSA),
                                    der.encode_oid(*OID_NAMED_CURVE_P256))
        cases = [
            # no BIT STRING after the algorithm
            der.encode_sequence(algid),
            # no algorithm identifier
            der.encode_sequence(der.encode_bitstring(p256_point(), 0)),
            # empty algorithm identifier
            der.encode_sequence(der.encode_sequence(), der.encode_bitstring(p256_point(), 0)),
            der.encode_sequence(),
        ]
        for der_bytes in cases:
            with self.subTest(der_bytes=der_bytes.hex()):
                with self.assertRaises(MalformedInput):
                    parse_public_key(der_bytes)

    def test_bad_points(self):
        x, y = curves.P256.derive_public_point(5)
        bad_points = [
            point_to_ser(curves.P256, x, y + 1),
            p256_point()[:-1],
            b'\x02' + p256_point()[1:33],
            point_to_ser(curves.P384, *curves.P384.derive_public_point(5)),
        ]
        for point in bad_points:
            with self.assertRaises(InvalidPublicKey):
                parse_public_key(spki(point))

    def test_bitstring_with_unused_bits(self):
        der_bytes = der.encode_sequence(
            der.encode_sequence(der.encode_oid(*OID_PUBLIC_KEY_ECGDSA),
                                der.encode_oid(*OID_NAMED_CURVE_P256)),
            der.encode_bitstring(p256_point()[:-1] + b'\x00', 4))
        with self.assertRaises(MalformedInput):
            parse_public_key(der_bytes)

    def test_all_errors_are_codec_errors(self):
        for der_bytes in (b'\x30\x00', spki(b'\x04')):
            with self.assertRaises(KeyCodecError):
                parse_public_key(der_bytes)
