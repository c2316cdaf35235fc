"""
Key management for vesting parties

Owners and beneficiaries are identified on-chain by a 28 byte key-hash.
"""

import hashlib
from typing import Iterable, Optional, Tuple

from cryptography.hazmat.primitives import hashes
from ecdsa import BadSignatureError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.errors import MalformedPointError

KEY_HASH_SIZE = 28


def key_hash(public_key: bytes) -> bytes:
    """SHA3-224 digest of a serialized public key"""
    digest = hashes.Hash(hashes.SHA3_224())
    digest.update(public_key)
    return digest.finalize()


class VestingKey:
    """secp256k1 key pair of a vesting party"""

    def __init__(self, private_key: Optional[bytes] = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @property
    def public_key_bytes(self) -> bytes:
        return self.public_key.to_string("compressed")

    def get_public_key_hex(self) -> str:
        """Compressed public key in hex format"""
        return self.public_key_bytes.hex()

    @property
    def key_hash(self) -> bytes:
        return key_hash(self.public_key_bytes)

    def sign_message(self, message: bytes) -> str:
        """Sign message and return signature in hex"""
        signature = self.private_key.sign_deterministic(message, hashfunc=hashlib.sha256)
        return signature.hex()

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, public_key_hex)"""
        key = VestingKey()
        return key.private_key.to_string().hex(), key.get_public_key_hex()


def verify_witness(message: bytes, signature_hex: str, public_key_hex: str) -> bool:
    """Check a signature against a compressed or uncompressed public key"""
    try:
        vk = VerifyingKey.from_string(bytes.fromhex(public_key_hex), curve=SECP256k1)
        return vk.verify(bytes.fromhex(signature_hex), message, hashfunc=hashlib.sha256)
    except (BadSignatureError, MalformedPointError, ValueError):
        return False


def collect_signatories(message: bytes, witnesses: Iterable[Tuple[str, str]]) -> frozenset:
    """Key-hashes of every (public_key_hex, signature_hex) witness that signed ``message``

    Witnesses whose signature does not verify are left out.
    """
    signatories = set()
    for public_key_hex, signature_hex in witnesses:
        if verify_witness(message, signature_hex, public_key_hex):
            # hash the compressed form whatever encoding the witness used
            vk = VerifyingKey.from_string(bytes.fromhex(public_key_hex), curve=SECP256k1)
            signatories.add(key_hash(vk.to_string("compressed")))
    return frozenset(signatories)
