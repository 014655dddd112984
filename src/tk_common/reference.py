"""Order reference generator.

Format: ORD-<epoch milliseconds>-<8 lowercase hex chars>

No uniqueness retry: a collision needs the same millisecond and the same
32-bit random suffix, which is treated as an accepted risk.
"""

import re
import time
import uuid

REFERENCE_PATTERN = re.compile(r"^ORD-\d+-[a-z0-9]{8}$")


class OrderReferenceGenerator:
    """Builds order references from a millisecond clock and a uuid4 suffix."""

    _PREFIX = "ORD"
    _SUFFIX_LEN = 8

    def next_reference(self) -> str:
        return f"{self._PREFIX}-{self._current_ms()}-{self._random_suffix()}"

    def _current_ms(self) -> int:
        return int(time.time() * 1000)

    def _random_suffix(self) -> str:
        return uuid.uuid4().hex[: self._SUFFIX_LEN]


_default_generator = OrderReferenceGenerator()


def generate_reference() -> str:
    """Generate an order reference using the module-level default generator."""
    return _default_generator.next_reference()


def is_valid_reference(value: str) -> bool:
    return REFERENCE_PATTERN.match(value) is not None
