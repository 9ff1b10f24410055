"""Value types shared by the parsers, the OTP engine and the front-ends."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import GenerationFailed, NoAccountsFound


@dataclass(frozen=True)
class Account:
    """One OTP account recovered from a scanned payload."""

    secret: str
    issuer: str = ""
    label: str = ""

    @property
    def display_name(self) -> str:
        if self.issuer:
            return f"{self.issuer} ({self.label})"
        return self.label

    def to_dict(self) -> dict:
        return {"secret": self.secret, "issuer": self.issuer, "label": self.label}


@dataclass(frozen=True)
class ScanResult:
    """
    All accounts found in one scanned payload, in encounter order.

    The first account is the default; when there is more than one the caller
    is expected to show ``candidates()`` and let the user pick.
    """

    accounts: Tuple[Account, ...]

    def __post_init__(self):
        if not self.accounts:
            raise NoAccountsFound("No OTP accounts found in scanned data")

    @classmethod
    def of(cls, accounts: List[Account]) -> "ScanResult":
        return cls(tuple(accounts))

    @property
    def default(self) -> Account:
        return self.accounts[0]

    @property
    def is_ambiguous(self) -> bool:
        return len(self.accounts) > 1

    def select(self, index: int = 0) -> Account:
        """Pick an account by zero-based index."""
        if not 0 <= index < len(self.accounts):
            raise IndexError(
                f"Account index {index} out of range (1..{len(self.accounts)} available)"
            )
        return self.accounts[index]

    def candidates(self) -> List[str]:
        """Numbered display lines, e.g. ``"1. Example (alice@example.com)"``."""
        return [
            f"{idx}. {account.display_name}"
            for idx, account in enumerate(self.accounts, 1)
        ]


@dataclass(frozen=True)
class TotpResult:
    """Outcome of generate(): exactly one of ``code`` / ``error`` is set."""

    code: Optional[str] = None
    error: Optional[GenerationFailed] = None
    counter: Optional[int] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None
