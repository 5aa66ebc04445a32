"""
Obfuscation Codec

Reversible transform between JSON-serializable values and printable text:
compact JSON, XOR against a repeating static key, then Base64.

This is NOT encryption. The key ships with every client, so anyone holding
it can read the data back. It only keeps tokens from being read at a glance
in storage or in backup files.
"""

import base64
import binascii
import json
from typing import Any

from tokenvault.domain.errors import DecodeError

DEFAULT_OBFUSCATION_KEY = "AIPreweddingPhotographerSecretKey2024"


def compact_json(value: Any) -> str:
    """Serialize without whitespace, matching JSON.stringify output"""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class ObfuscationCodec:
    """Static-key XOR + Base64 codec"""

    def __init__(self, key: str = DEFAULT_OBFUSCATION_KEY):
        if not key:
            raise ValueError("Obfuscation key must not be empty")
        self._key = key.encode("utf-8")

    def _xor(self, data: bytes) -> bytes:
        key = self._key
        key_length = len(key)
        return bytes(byte ^ key[i % key_length] for i, byte in enumerate(data))

    def encode(self, value: Any) -> str:
        """
        Obfuscate a JSON-serializable value.

        Args:
            value: Any value json.dumps accepts

        Returns:
            Base64 text safe to store or write to a file
        """
        payload = self._xor(compact_json(value).encode("utf-8"))
        return base64.b64encode(payload).decode("ascii")

    def decode(self, text: str) -> Any:
        """
        Reverse encode().

        Args:
            text: Base64 text produced by encode(). Line breaks and other
                whitespace are ignored, so wrapped text decodes too.

        Returns:
            The original value

        Raises:
            DecodeError: text is not Base64, or does not decipher to JSON
        """
        if not isinstance(text, str):
            raise DecodeError(f"Expected text, got {type(text).__name__}")

        try:
            payload = base64.b64decode("".join(text.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError("Input is not valid Base64") from exc

        try:
            return json.loads(self._xor(payload).decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError("Deciphered data is not valid JSON") from exc
