# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

import argparse
import sys
from typing import List, Optional, Union

from .curve_registry import CurveRegistry, init_default_registry
from .ecc import PublicKey, PrivateKey
from .logging import Logger, configure_logging
from .pem import load_key, pem, public_key_to_pem, PEM_PUBLIC_KEY, PEM_PRIVATE_KEY
from .pkcs8 import marshal_private_key
from .pkix import marshal_public_key
from .simple_config import SimpleConfig, read_user_config
from .util import oid_to_str, KeyCodecError, UserFacingException
from .version import ECGDSA_VERSION


class Commands(Logger):

    def __init__(self, *, config: SimpleConfig, registry: CurveRegistry, out=None):
        Logger.__init__(self)
        self.config = config
        self.registry = registry
        self.out = out if out is not None else sys.stdout

    def _print(self, text: str = '') -> None:
        print(text, file=self.out)

    def _load(self, path: str):
        with open(path, 'rb') as f:
            data = f.read()
        self.logger.debug(f"loading key from {path} ({len(data)} bytes)")
        return load_key(data, registry=self.registry,
                        strict_curve_params=self.config.PKCS8_STRICT_CURVE_PARAMS)

    def _write(self, data: Union[bytes, str], path: Optional[str]) -> None:
        if path is None:
            if isinstance(data, str):
                self.out.write(data)
            else:
                buffer = getattr(self.out, 'buffer', None)
                if buffer is None:
                    raise UserFacingException("cannot write DER to a text stream, use -o FILE")
                buffer.write(data)
                buffer.flush()
            return
        with open(path, 'w' if isinstance(data, str) else 'wb') as f:
            f.write(data)

    def curves(self) -> None:
        """List the registered curves."""
        for curve, oid in self.registry.items():
            self._print(f"{curve.name:<18} {oid_to_str(oid):<22} "
                        f"field {curve.field_byte_width()} bytes, scalar {curve.scalar_byte_width()} bytes")

    def info(self, path: str) -> None:
        """Describe a key file."""
        key = self._load(path)
        kind = 'private' if isinstance(key, PrivateKey) else 'public'
        oid = self.registry.oid_for(key.curve)
        self._print(f"type:  {kind} key")
        self._print(f"curve: {key.curve.name}")
        self._print(f"oid:   {oid_to_str(oid)}")
        self._print(f"point: {PublicKey(curve=key.curve, x=key.x, y=key.y).get_public_key_hex()}")

    def pubkey(self, path: str, output: Optional[str] = None) -> None:
        """Write the public key of a private key file."""
        key = self._load(path)
        pub = key.public_key() if isinstance(key, PrivateKey) else key
        if self.config.KEYTOOL_OUTPUT_FORMAT == 'der':
            self._write(marshal_public_key(pub, registry=self.registry), output)
        else:
            self._write(public_key_to_pem(pub, registry=self.registry), output)

    def convert(self, path: str, to: Optional[str] = None, output: Optional[str] = None) -> None:
        """Re-encode a key file as PEM or DER."""
        key = self._load(path)
        if isinstance(key, PrivateKey):
            der_bytes, name = marshal_private_key(key, registry=self.registry), PEM_PRIVATE_KEY
        else:
            der_bytes, name = marshal_public_key(key, registry=self.registry), PEM_PUBLIC_KEY
        to = to or self.config.KEYTOOL_OUTPUT_FORMAT
        if to == 'der':
            self._write(der_bytes, output)
        else:
            self._write(pem(der_bytes, name), output)


def add_global_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group('global options')
    group.add_argument("-v", "--verbosity", dest=SimpleConfig.VERBOSITY.key(), metavar="VERBOSITY", default=None,
                       help="Set verbosity (log levels), e.g. 'debug' or 'warning,pkcs8=debug'")
    group.add_argument("--strict-curve-params", dest=SimpleConfig.PKCS8_STRICT_CURVE_PARAMS.key(),
                       action='store_const', const=True, default=None,
                       help="Reject private keys whose algorithm parameters are not a curve OID")
    group.add_argument("--config", dest="config_path", default=None,
                       help="Path to a JSON config file")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ecgdsa-keytool',
        description="Inspect and convert EC-GDSA keys (PKIX / PKCS#8, PEM or DER).",
        epilog="Run 'ecgdsa-keytool <command> -h' to see the help for a command")
    parser.add_argument("--version", action='version', version=f"%(prog)s {ECGDSA_VERSION}")
    add_global_options(parser)
    subparsers = parser.add_subparsers(dest='cmd', metavar='<command>')
    subparsers.required = True

    subparsers.add_parser('curves', help="List the registered curves and their OIDs")

    parser_info = subparsers.add_parser('info', help="Describe a public or private key file")
    parser_info.add_argument("path", help="key file (PEM or DER)")

    parser_pubkey = subparsers.add_parser('pubkey', help="Extract the public key of a private key file")
    parser_pubkey.add_argument("path", help="private key file (PEM or DER)")
    parser_pubkey.add_argument("-o", "--output", dest="output", default=None, help="output file (default: stdout)")
    parser_pubkey.add_argument("--to", dest=SimpleConfig.KEYTOOL_OUTPUT_FORMAT.key(), choices=['pem', 'der'],
                               default=None, help="output encoding")

    parser_convert = subparsers.add_parser('convert', help="Convert a key file between PEM and DER")
    parser_convert.add_argument("path", help="key file (PEM or DER)")
    parser_convert.add_argument("--to", dest="to", choices=['pem', 'der'], default=None, help="output encoding")
    parser_convert.add_argument("-o", "--output", dest="output", default=None, help="output file (default: stdout)")
    return parser


def main(argv: Optional[List[str]] = None, *, out=None, err=None) -> int:
    err = err if err is not None else sys.stderr
    parser = get_parser()
    args = parser.parse_args(argv)
    config_options = dict(vars(args))
    config_path = config_options.pop('config_path')
    cmdname = config_options.pop('cmd')
    try:
        user_config = read_user_config(config_path)
    except ValueError as e:
        print(f"error: {e}", file=err)
        return 1
    config = SimpleConfig(config_options, user_config=user_config)
    configure_logging(config)
    registry = init_default_registry()
    cmds = Commands(config=config, registry=registry, out=out)
    try:
        if cmdname == 'curves':
            cmds.curves()
        elif cmdname == 'info':
            cmds.info(args.path)
        elif cmdname == 'pubkey':
            cmds.pubkey(args.path, output=args.output)
        elif cmdname == 'convert':
            cmds.convert(args.path, to=args.to, output=args.output)
        else:
            parser.error(f"unknown command {cmdname!r}")
    except (KeyCodecError, UserFacingException, OSError) as e:
        print(f"error: {e}", file=err)
        return 1
    return 0
