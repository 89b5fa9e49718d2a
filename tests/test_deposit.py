import pytest

from lamportkit.deposit import (
    U64_MAX,
    InsufficientFundsError,
    UserAccount,
    deposit,
    initialize,
    withdraw,
)


def test_initialize_resets_balance():
    account = UserAccount(balance=77, lamports=77)
    initialize(account)
    assert account.balance == 0
    assert account.lamports == 77


def test_deposit_then_withdraw_round_trip():
    account = UserAccount()
    initialize(account)
    deposit(account, 1_000_000)
    assert account.balance == 1_000_000
    assert account.lamports == 1_000_000
    withdraw(account, 500_000)
    assert account.balance == 1_000_000 - 500_000
    assert account.lamports == account.balance
    withdraw(account, account.balance)
    assert account.balance == 0


def test_withdraw_more_than_balance_fails_and_leaves_state():
    account = UserAccount()
    deposit(account, 1_000_000)
    with pytest.raises(InsufficientFundsError, match="Insufficient funds for withdrawal"):
        withdraw(account, 1_000_001)
    assert account.balance == 1_000_000
    assert account.lamports == 1_000_000


def test_insufficient_funds_error_code():
    with pytest.raises(InsufficientFundsError) as info:
        withdraw(UserAccount(), 1)
    assert info.value.code == 6000


def test_deposit_overflow_is_rejected():
    account = UserAccount(balance=U64_MAX, lamports=U64_MAX)
    with pytest.raises(OverflowError):
        deposit(account, 1)
    assert account.balance == U64_MAX


@pytest.mark.parametrize("amount", [-1, U64_MAX + 1])
def test_amount_out_of_range(amount):
    account = UserAccount()
    with pytest.raises(ValueError):
        deposit(account, amount)
    with pytest.raises(ValueError):
        withdraw(account, amount)


def test_non_integer_amount():
    with pytest.raises(TypeError):
        deposit(UserAccount(), 1.5)


def test_zero_amounts_keep_state():
    account = UserAccount(balance=10, lamports=10)
    deposit(account, 0)
    withdraw(account, 0)
    assert account == UserAccount(balance=10, lamports=10)