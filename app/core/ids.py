"""
Identifier generation for new records.
"""

import secrets
import string
from typing import Collection


ALPHABET = string.digits + string.ascii_uppercase


class IdGenerator:
    """Short opaque upper-case base-36 identifiers."""

    def __init__(self, length: int = 7):
        if length < 1:
            raise ValueError("length must be positive")
        self.length = length

    def generate(self) -> str:
        return "".join(secrets.choice(ALPHABET) for _ in range(self.length))

    def new_id(self, taken: Collection[str] = ()) -> str:
        """Return an id not present in ``taken``."""
        while True:
            candidate = self.generate()
            if candidate not in taken:
                return candidate
