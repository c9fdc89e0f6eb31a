"""
Short id generation strategies for the shortlink service.
Uses Strategy Pattern so the shortening service can be given any candidate source.
"""

import secrets
import string
from abc import ABC, abstractmethod


class ShortIdStrategy(ABC):
    """Abstract base class for short id generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Produce a candidate short id.

        Candidates are not guaranteed unique; the store's unique
        constraint decides.

        Returns:
            A candidate short id string
        """
        pass


class RandomShortIdStrategy(ShortIdStrategy):
    """
    Random fixed-length ids from a URL-safe alphanumeric alphabet.

    Uses `secrets` (OS CSPRNG) so ids cannot be predicted from earlier ones.
    With 62 symbols and length 8 there are 62**8 (~2.2e14) possible ids.
    """

    ALPHABET = string.ascii_letters + string.digits

    def __init__(self, length: int = 8):
        if length < 1:
            raise ValueError(f"Short id length must be positive, got {length}")
        self.length = length

    def generate(self) -> str:
        return ''.join(secrets.choice(self.ALPHABET) for _ in range(self.length))
