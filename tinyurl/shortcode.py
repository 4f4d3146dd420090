"""Short code generation utilities."""

import secrets
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase

    def __init__(self, default_length: int = 8):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes

        Raises:
            ValueError: If default_length is not positive
        """
        if default_length <= 0:
            raise ValueError(f"default_length must be positive, got {default_length}")
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every character is drawn independently and uniformly from the base62
        alphabet using the ``secrets`` CSPRNG, so codes are unpredictable.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code of exactly ``length`` characters

        Raises:
            ValueError: If length is not positive
        """
        if length is None:
            length = self.default_length
        if length <= 0:
            raise ValueError(f"length must be positive, got {length}")
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    @property
    def keyspace_size(self) -> int:
        """Number of distinct codes at the default length."""
        return len(self.BASE62_CHARS) ** self.default_length
