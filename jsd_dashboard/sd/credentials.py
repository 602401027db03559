"""
Basic-auth credential encoding.
"""

import base64


def encode_basic_token(username: str, password: str) -> str:
    if not username or not password:
        raise ValueError("username and password must be non-empty")
    raw = f"{username}:{password}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")
