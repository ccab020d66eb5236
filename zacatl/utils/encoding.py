"""문자열 인코딩/디코딩 및 HMAC 유틸리티 모듈.

String encoding/decoding and HMAC utility module.
Supported encodings: utf-8, utf8, ascii, latin1, binary, base64, base64url, hex.
"""

import base64
import binascii
import hashlib
import hmac
from typing import Literal

Encoding = Literal["utf-8", "utf8", "ascii", "latin1", "binary", "base64", "base64url", "hex"]

# 텍스트 코덱 매핑 — "binary"는 latin1과 동일 (binary is an alias of latin1)
_TEXT_CODECS: dict[str, str] = {
    "utf-8": "utf-8",
    "utf8": "utf-8",
    "ascii": "ascii",
    "latin1": "latin-1",
    "binary": "latin-1",
}


def _to_bytes(value: str, encoding: str) -> bytes:
    if encoding in _TEXT_CODECS:
        return value.encode(_TEXT_CODECS[encoding])
    if encoding == "base64":
        return base64.b64decode(value)
    if encoding == "base64url":
        # 패딩 없는 입력 허용 (Accept unpadded input)
        return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
    if encoding == "hex":
        return binascii.unhexlify(value)
    raise ValueError(f"Unsupported encoding: {encoding}")


def _from_bytes(value: bytes, encoding: str) -> str:
    if encoding in _TEXT_CODECS:
        return value.decode(_TEXT_CODECS[encoding])
    if encoding == "base64":
        return base64.b64encode(value).decode("ascii")
    if encoding == "base64url":
        return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")
    if encoding == "hex":
        return value.hex()
    raise ValueError(f"Unsupported encoding: {encoding}")


def encode(value: str, input_encoding: Encoding = "utf-8", output_encoding: Encoding = "base64") -> str:
    """문자열을 다른 인코딩으로 변환합니다.

    Re-encode ``value`` from ``input_encoding`` into ``output_encoding``.

    Example:
        encode("Hello World")                         # "SGVsbG8gV29ybGQ="
        encode("Hello World", output_encoding="hex")  # "48656c6c6f20576f726c64"
    """
    return _from_bytes(_to_bytes(value, input_encoding), output_encoding)


def decode(value: str, input_encoding: Encoding = "base64", output_encoding: Encoding = "utf-8") -> str:
    """인코딩된 문자열을 복원합니다 (Inverse defaults of ``encode``)."""
    return _from_bytes(_to_bytes(value, input_encoding), output_encoding)


def encode_base64(value: str) -> str:
    return encode(value, "utf-8", "base64")


def decode_base64(value: str) -> str:
    return decode(value, "base64", "utf-8")


def generate_hmac(message: str, secret_key: str) -> str:
    """HMAC-SHA256 다이제스트를 16진수로 반환합니다.

    Return the hex HMAC-SHA256 digest of ``message`` keyed by ``secret_key``.
    """
    return hmac.new(secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()
