"""
Email address helpers.

Workers that share one inbox sign in with a per-attempt *tagged* variant of
its address (``local+login-<ts>-<rand>@domain``) so each one can pick out
its own verification email.
"""

import random
import re
import string
import time
from typing import Optional

TAG_PREFIX = "login-"

_ALPHABET = string.digits + string.ascii_lowercase
_TAG_PATTERN = re.compile(r"\+" + re.escape(TAG_PREFIX) + r"[^@]*(?=@)")


def to_base36(value: int) -> str:
    """Encode a non-negative integer in base 36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    while True:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
        if value == 0:
            break
    return "".join(reversed(digits))


def random_token(length: int = 6) -> str:
    """Short random base-36 token."""
    return "".join(random.choices(_ALPHABET, k=length))


def _timestamp_token(now: Optional[float]) -> str:
    seconds = time.time() if now is None else now
    return to_base36(int(seconds * 1000))


def tag_address(
    address: str,
    *,
    now: Optional[float] = None,
    rand: Optional[str] = None,
) -> str:
    """
    Insert a unique ``+login-<ts>-<rand>`` tag before the ``@``.

    Args:
        address: Base inbox address.
        now: Timestamp in seconds, defaults to the current time.
        rand: Random suffix, defaults to six random base-36 characters.

    Returns:
        The tagged address.
    """
    local, sep, domain = address.rpartition("@")
    if not sep or not local or not domain:
        raise ValueError(f"Not an email address: {address!r}")
    suffix = rand if rand is not None else random_token()
    return f"{local}+{TAG_PREFIX}{_timestamp_token(now)}-{suffix}@{domain}"


def untag_address(address: str) -> str:
    """Strip a login tag added by :func:`tag_address`, if present."""
    return _TAG_PATTERN.sub("", address, count=1)


def generate_email(domain: str = "example.com") -> str:
    """Random throwaway address for sign-in form tests."""
    return f"user_{_timestamp_token(None)}_{random_token()}@{domain}"
