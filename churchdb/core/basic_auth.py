"""Basic Auth Check — pure decoding and comparison of a `Basic` Authorization header.

Invariants:
    - Gate disabled (always admits) when no username is configured
    - Credentials split on the first colon: passwords may contain ':'
    - Malformed headers deny, never raise
"""

import base64
import binascii
import secrets


def parse_basic_header(header: str | None) -> tuple[str, str] | None:
    """Decode `Basic <b64(user:pass)>`. Returns None when malformed."""
    if not header:
        return None
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, password = decoded.partition(":")
    if not sep:
        return None
    return user, password


def basic_auth_admits(
    header: str | None, username: str | None, password: str | None,
) -> bool:
    if not username:
        return True
    creds = parse_basic_header(header)
    if creds is None:
        return False
    user, pw = creds
    return (
        secrets.compare_digest(user.encode("utf-8"), username.encode("utf-8"))
        and secrets.compare_digest(pw.encode("utf-8"), (password or "").encode("utf-8"))
    )
