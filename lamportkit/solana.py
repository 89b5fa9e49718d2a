"""Core ledger types: keys, hashes, messages, transactions, metadata and blocks."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

PUBKEY_BYTES = 32
SIGNATURE_BYTES = 64
HASH_BYTES = 32

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_INDEX = {char: value for value, char in enumerate(_ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    raw = bytes(data)
    body = raw.lstrip(b"\0")
    leading_zeros = len(raw) - len(body)
    number = int.from_bytes(body, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * leading_zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string; raise ValueError on characters outside the alphabet."""
    body = text.lstrip("1")
    leading_zeros = len(text) - len(body)
    number = 0
    for char in body:
        try:
            number = number * 58 + _ALPHABET_INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    decoded = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading_zeros + decoded


def _require_u8(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must fit in an unsigned byte, got {value}")


@dataclass(frozen=True)
class _FixedBytes:
    """Immutable byte string of a fixed length, shown in base58."""

    data: bytes
    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        value = bytes(self.data)
        if len(value) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self.SIZE} bytes, got {len(value)}"
            )
        object.__setattr__(self, "data", value)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return b58encode(self.data)


class Pubkey(_FixedBytes):
    """A 32-byte account address."""

    SIZE = PUBKEY_BYTES

    @classmethod
    def from_base58(cls, text: str) -> Pubkey:
        """Parse a base58 address."""
        return cls(b58decode(text))

    def to_base58(self) -> str:
        """Return the base58 form of the address."""
        return b58encode(self.data)


class Signature(_FixedBytes):
    """A 64-byte ed25519 signature."""

    SIZE = SIGNATURE_BYTES

    @classmethod
    def from_base58(cls, text: str) -> Signature:
        """Parse a base58 signature."""
        return cls(b58decode(text))

    def to_base58(self) -> str:
        """Return the base58 form of the signature."""
        return b58encode(self.data)


class Hash(_FixedBytes):
    """A 32-byte hash such as a blockhash."""

    SIZE = HASH_BYTES

    @classmethod
    def from_base58(cls, text: str) -> Hash:
        """Parse a base58 hash."""
        return cls(b58decode(text))

    def to_base58(self) -> str:
        """Return the base58 form of the hash."""
        return b58encode(self.data)


@dataclass
class Account:
    """Account state: balance, data and owning program."""

    lamports: int
    data: bytes
    owner: Pubkey
    executable: bool
    rent_epoch: int


@dataclass
class MessageHeader:
    """Signature and read-only account counts of a message."""

    num_required_signatures: int
    num_readonly_signed_accounts: int
    num_readonly_unsigned_accounts: int

    def __post_init__(self) -> None:
        _require_u8("num_required_signatures", self.num_required_signatures)
        _require_u8("num_readonly_signed_accounts", self.num_readonly_signed_accounts)
        _require_u8("num_readonly_unsigned_accounts", self.num_readonly_unsigned_accounts)


@dataclass
class CompiledInstruction:
    """An instruction referring to accounts by index into the message keys."""

    program_id_index: int
    accounts: bytes = b""
    data: bytes = b""

    def __post_init__(self) -> None:
        _require_u8("program_id_index", self.program_id_index)
        self.accounts = bytes(self.accounts)
        self.data = bytes(self.data)


@dataclass
class MessageAddressTableLookup:
    """Accounts loaded from an address lookup table."""

    account_key: Pubkey
    writable_indexes: bytes = b""
    readonly_indexes: bytes = b""

    def __post_init__(self) -> None:
        self.writable_indexes = bytes(self.writable_indexes)
        self.readonly_indexes = bytes(self.readonly_indexes)


@dataclass
class LegacyMessage:
    """A message in the legacy, unversioned format."""

    header: MessageHeader
    account_keys: list[Pubkey]
    recent_blockhash: Hash
    instructions: list[CompiledInstruction] = field(default_factory=list)


@dataclass
class MessageV0:
    """A version 0 message, which may load accounts from lookup tables."""

    header: MessageHeader
    account_keys: list[Pubkey]
    recent_blockhash: Hash
    instructions: list[CompiledInstruction] = field(default_factory=list)
    address_table_lookups: list[MessageAddressTableLookup] = field(default_factory=list)


VersionedMessage = Union[LegacyMessage, MessageV0]


@dataclass
class VersionedTransaction:
    """Signatures together with the message they sign."""

    signatures: list[Signature]
    message: VersionedMessage


@dataclass
class InnerInstruction:
    """An instruction invoked by a program during execution."""

    instruction: CompiledInstruction
    stack_height: int | None = None


@dataclass
class InnerInstructions:
    """Inner instructions raised by the top-level instruction at ``index``."""

    index: int
    instructions: list[InnerInstruction] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_u8("index", self.index)


@dataclass
class UiTokenAmount:
    """A token amount in raw and human-readable forms."""

    ui_amount: float | None
    decimals: int
    amount: str
    ui_amount_string: str

    def __post_init__(self) -> None:
        _require_u8("decimals", self.decimals)


@dataclass
class TransactionTokenBalance:
    """The token balance of one account of a transaction."""

    account_index: int
    mint: str
    ui_token_amount: UiTokenAmount
    owner: str = ""
    program_id: str = ""

    def __post_init__(self) -> None:
        _require_u8("account_index", self.account_index)


class RewardType(Enum):
    """Why a reward was paid."""

    FEE = "fee"
    RENT = "rent"
    STAKING = "staking"
    VOTING = "voting"


@dataclass
class Reward:
    """A reward credited to an account."""

    pubkey: str
    lamports: int
    post_balance: int
    reward_type: RewardType | None = None
    commission: int | None = None

    def __post_init__(self) -> None:
        if self.commission is not None:
            _require_u8("commission", self.commission)


@dataclass
class RewardsAndNumPartitions:
    """Block rewards and the number of partitions they were paid in."""

    rewards: list[Reward] = field(default_factory=list)
    num_partitions: int | None = None


@dataclass
class LoadedAddresses:
    """Addresses loaded from lookup tables, split by writability."""

    writable: list[Pubkey] = field(default_factory=list)
    readonly: list[Pubkey] = field(default_factory=list)


@dataclass
class TransactionReturnData:
    """Data returned by the last program that set it."""

    program_id: Pubkey
    data: bytes = b""


@dataclass(frozen=True)
class TransactionError:
    """A transaction failure, kept as its bincode enum variant and payload."""

    variant: int
    payload: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.variant <= 0xFFFFFFFF:
            raise ValueError(f"variant must fit in 32 bits, got {self.variant}")
        object.__setattr__(self, "payload", bytes(self.payload))

    def encode(self) -> bytes:
        """Serialize in bincode form: little-endian u32 variant, then payload."""
        return struct.pack("<I", self.variant) + self.payload

    @classmethod
    def decode(cls, data: bytes) -> TransactionError:
        """Parse the bincode form; raise ValueError if it is too short."""
        raw = bytes(data)
        if len(raw) < 4:
            raise ValueError("transaction error needs at least 4 bytes")
        (variant,) = struct.unpack_from("<I", raw)
        return cls(variant, raw[4:])


@dataclass
class TransactionStatusMeta:
    """Execution outcome of a transaction; ``status`` is None on success."""

    status: TransactionError | None
    fee: int
    pre_balances: list[int] = field(default_factory=list)
    post_balances: list[int] = field(default_factory=list)
    inner_instructions: list[InnerInstructions] | None = None
    log_messages: list[str] | None = None
    pre_token_balances: list[TransactionTokenBalance] | None = None
    post_token_balances: list[TransactionTokenBalance] | None = None
    rewards: list[Reward] | None = None
    loaded_addresses: LoadedAddresses = field(default_factory=LoadedAddresses)
    return_data: TransactionReturnData | None = None
    compute_units_consumed: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is None


@dataclass
class TransactionWithStatusMeta:
    """A transaction and its metadata; ``meta`` is None when it is missing."""

    transaction: VersionedTransaction
    meta: TransactionStatusMeta | None = None


@dataclass
class ConfirmedBlock:
    """A confirmed block with its transactions and rewards."""

    previous_blockhash: str
    blockhash: str
    parent_slot: int
    transactions: list[TransactionWithStatusMeta] = field(default_factory=list)
    rewards: list[Reward] = field(default_factory=list)
    num_partitions: int | None = None
    block_time: int | None = None
    block_height: int | None = None