"""Password hashing with bcrypt.

``get_hasher()`` returns the process-wide hasher. Tests lower the work factor
through ``set_hasher(BcryptHasher(rounds=4))``.
"""

import bcrypt

from authentication.domain import logger

DEFAULT_ROUNDS = 12


class BcryptHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def matches(self, password_hash: str, password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Unreadable password hash")
            return False


_current_hasher: BcryptHasher | None = None


def get_hasher() -> BcryptHasher:
    global _current_hasher
    if _current_hasher is None:
        _current_hasher = BcryptHasher()
    return _current_hasher


def set_hasher(hasher: BcryptHasher) -> None:
    global _current_hasher
    _current_hasher = hasher


def reset_hasher() -> None:
    global _current_hasher
    _current_hasher = None
