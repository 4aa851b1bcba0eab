"""
Postcard hash generation.
The hash is written to the NFC tag and doubles as the claim token, so it comes
from a CSPRNG. Length and alphabet stay at 32 chars of [0-9a-z].
"""
import secrets
import string

HASH_LENGTH = 32
HASH_ALPHABET = string.digits + string.ascii_lowercase


def generate_postcard_hash() -> str:
    return "".join(secrets.choice(HASH_ALPHABET) for _ in range(HASH_LENGTH))
