"""Password hashing with a process-wide salt."""
from passlib.context import CryptContext


class PasswordHasher:
    """Hashes and verifies passwords as ``password + salt``.

    Registration and authentication must share one instance (or two built from
    the same settings), otherwise stored hashes will never verify.
    bcrypt_sha256 pre-hashes the secret, so long passwords and salts are not
    truncated at bcrypt's 72 byte limit.
    """

    def __init__(self, salt: str, rounds: int = 12):
        self._salt = salt
        self._context = CryptContext(
            schemes=["bcrypt_sha256"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
        )

    def _salted(self, password: str) -> str:
        return password + self._salt

    def hash(self, password: str) -> str:
        return self._context.hash(self._salted(password))

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(self._salted(password), hashed)

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification (unknown username)."""
        self._context.dummy_verify()
