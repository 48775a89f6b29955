"""
Short Key Generator

Produces random fixed-length aliases from the base62 alphabet.
Keys are not cryptographically secure; uniqueness is enforced by the
store, which rejects keys it has already issued and asks for another.
"""

import random
from typing import Optional

BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

MIN_KEY_LENGTH = 6
MAX_KEY_LENGTH = 8


class KeyGenerator:
    """
    Random short key generator.

    Each call to generate() draws `length` characters uniformly from the
    alphabet. A seeded random.Random may be injected for reproducible tests.
    """

    def __init__(
        self,
        length: int = MIN_KEY_LENGTH,
        alphabet: str = BASE62_CHARS,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the generator.

        Args:
            length: Number of characters per key (6 to 8)
            alphabet: Characters keys are drawn from
            rng: Random source (default: a fresh random.Random)

        Raises:
            ValueError: If length is out of range or the alphabet is empty
        """
        if not MIN_KEY_LENGTH <= length <= MAX_KEY_LENGTH:
            raise ValueError(
                f"Key length must be between {MIN_KEY_LENGTH} and {MAX_KEY_LENGTH}, got {length}"
            )
        if not alphabet:
            raise ValueError("Alphabet must not be empty")

        self.length = length
        self.alphabet = alphabet
        self._rng = rng or random.Random()

    def generate(self) -> str:
        """Return a new random key."""
        return "".join(self._rng.choices(self.alphabet, k=self.length))

    def __call__(self) -> str:
        return self.generate()
