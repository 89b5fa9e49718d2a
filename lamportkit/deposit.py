"""A per-user deposit account that can be funded and drawn down."""

from __future__ import annotations

from dataclasses import dataclass

U64_MAX = 2**64 - 1
ACCOUNT_SPACE = 8 + 8


class InsufficientFundsError(Exception):
    """A withdrawal asked for more than the account's balance."""

    code = 6000

    def __init__(self, message: str = "Insufficient funds for withdrawal") -> None:
        super().__init__(message)


@dataclass
class UserAccount:
    """Tracked deposit balance and the lamports the account holds."""

    balance: int = 0
    lamports: int = 0


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError("amount must be an integer")
    if not 0 <= amount <= U64_MAX:
        raise ValueError(f"amount must fit in 64 unsigned bits, got {amount}")


def initialize(account: UserAccount) -> None:
    """Reset the tracked balance to zero."""
    account.balance = 0


def deposit(account: UserAccount, amount: int) -> None:
    """Add ``amount`` to both the lamports and the tracked balance."""
    _check_amount(amount)
    if account.lamports + amount > U64_MAX or account.balance + amount > U64_MAX:
        raise OverflowError("deposit would overflow the account")
    account.lamports += amount
    account.balance += amount


def withdraw(account: UserAccount, amount: int) -> None:
    """Take ``amount`` out; raise InsufficientFundsError if the balance is too low."""
    _check_amount(amount)
    if account.balance < amount:
        raise InsufficientFundsError()
    if account.lamports < amount:
        raise OverflowError("withdrawal would underflow the account lamports")
    account.lamports -= amount
    account.balance -= amount