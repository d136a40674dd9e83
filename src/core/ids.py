"""Short random ids for new records (nanoid-style)."""

import secrets
from string import ascii_letters, digits

ID_ALPHABET = ascii_letters + digits + "_-"
ID_LENGTH = 8


def generate_gamer_id(length: int = ID_LENGTH) -> str:
    """
    Random id drawn from a 64 character url-safe alphabet.

    NOTE uniqueness is not checked against stored records; with 64**8 possible ids collisions are negligible for this service.
    """
    if length <= 0:
        raise ValueError(f"Id length must be positive, got {length}.")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
