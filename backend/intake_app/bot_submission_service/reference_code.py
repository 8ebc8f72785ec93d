"""Reference codes handed to customers: BOT-XXXXX-XXXXX."""

import re
import secrets

# Uppercase letters and digits without look-alikes (0/O, 1/I)
REFERENCE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
REFERENCE_PREFIX = "BOT"
SEGMENT_LENGTH = 5
SEGMENT_COUNT = 2

REFERENCE_CODE_PATTERN = re.compile(
    rf"^{REFERENCE_PREFIX}(-[{REFERENCE_ALPHABET}]{{{SEGMENT_LENGTH}}}){{{SEGMENT_COUNT}}}$"
)


def _segment() -> str:
    return "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(SEGMENT_LENGTH))


def generate_reference_code() -> str:
    """
    Generate a new reference code.

    Each character is drawn independently from REFERENCE_ALPHABET. The code is
    not checked against existing submissions; the unique index on the
    reference_code column rejects duplicates.
    """
    segments = [_segment() for _ in range(SEGMENT_COUNT)]
    return "-".join([REFERENCE_PREFIX] + segments)


def is_reference_code(value: str) -> bool:
    return isinstance(value, str) and REFERENCE_CODE_PATTERN.match(value) is not None
