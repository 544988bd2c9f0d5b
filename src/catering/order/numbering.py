"""Human-facing order numbers: ``VG-<YYYYMMDD>-<6 base36 chars>``."""

import secrets
import string
from datetime import UTC, datetime

ORDER_NUMBER_PREFIX = "VG"

_ALPHABET = string.digits + string.ascii_uppercase
_SUFFIX_LENGTH = 6


def generate_order_number(now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{suffix}"
