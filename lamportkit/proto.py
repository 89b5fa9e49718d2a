"""Wire-level message types of the subscription protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


@dataclass
class MessageHeader:
    num_required_signatures: int = 0
    num_readonly_signed_accounts: int = 0
    num_readonly_unsigned_accounts: int = 0


@dataclass
class CompiledInstruction:
    program_id_index: int = 0
    accounts: bytes = b""
    data: bytes = b""


@dataclass
class MessageAddressTableLookup:
    account_key: bytes = b""
    writable_indexes: bytes = b""
    readonly_indexes: bytes = b""


@dataclass
class Message:
    header: MessageHeader | None = None
    account_keys: list[bytes] = field(default_factory=list)
    recent_blockhash: bytes = b""
    instructions: list[CompiledInstruction] = field(default_factory=list)
    versioned: bool = False
    address_table_lookups: list[MessageAddressTableLookup] = field(default_factory=list)


@dataclass
class Transaction:
    signatures: list[bytes] = field(default_factory=list)
    message: Message | None = None


@dataclass
class TransactionError:
    err: bytes = b""


@dataclass
class InnerInstruction:
    program_id_index: int = 0
    accounts: bytes = b""
    data: bytes = b""
    stack_height: int | None = None


@dataclass
class InnerInstructions:
    index: int = 0
    instructions: list[InnerInstruction] = field(default_factory=list)


@dataclass
class UiTokenAmount:
    ui_amount: float = 0.0
    decimals: int = 0
    amount: str = ""
    ui_amount_string: str = ""


@dataclass
class TokenBalance:
    account_index: int = 0
    mint: str = ""
    ui_token_amount: UiTokenAmount | None = None
    owner: str = ""
    program_id: str = ""


class RewardType(IntEnum):
    UNSPECIFIED = 0
    FEE = 1
    RENT = 2
    STAKING = 3
    VOTING = 4


@dataclass
class Reward:
    pubkey: str = ""
    lamports: int = 0
    post_balance: int = 0
    reward_type: int = RewardType.UNSPECIFIED
    commission: str = ""


@dataclass
class NumPartitions:
    num_partitions: int = 0


@dataclass
class Rewards:
    rewards: list[Reward] = field(default_factory=list)
    num_partitions: NumPartitions | None = None


@dataclass
class ReturnData:
    program_id: bytes = b""
    data: bytes = b""


@dataclass
class BlockHeight:
    block_height: int = 0


@dataclass
class UnixTimestamp:
    timestamp: int = 0


@dataclass
class TransactionStatusMeta:
    err: TransactionError | None = None
    fee: int = 0
    pre_balances: list[int] = field(default_factory=list)
    post_balances: list[int] = field(default_factory=list)
    inner_instructions: list[InnerInstructions] = field(default_factory=list)
    inner_instructions_none: bool = False
    log_messages: list[str] = field(default_factory=list)
    log_messages_none: bool = False
    pre_token_balances: list[TokenBalance] = field(default_factory=list)
    post_token_balances: list[TokenBalance] = field(default_factory=list)
    rewards: list[Reward] = field(default_factory=list)
    loaded_writable_addresses: list[bytes] = field(default_factory=list)
    loaded_readonly_addresses: list[bytes] = field(default_factory=list)
    return_data: ReturnData | None = None
    return_data_none: bool = False
    compute_units_consumed: int | None = None


@dataclass
class SubscribeUpdateTransactionInfo:
    signature: bytes = b""
    is_vote: bool = False
    transaction: Transaction | None = None
    meta: TransactionStatusMeta | None = None
    index: int = 0


@dataclass
class SubscribeUpdateBlock:
    slot: int = 0
    blockhash: str = ""
    rewards: Rewards | None = None
    block_time: UnixTimestamp | None = None
    block_height: BlockHeight | None = None
    parent_slot: int = 0
    parent_blockhash: str = ""
    transactions: list[SubscribeUpdateTransactionInfo] = field(default_factory=list)


@dataclass
class SubscribeUpdateAccountInfo:
    pubkey: bytes = b""
    lamports: int = 0
    owner: bytes = b""
    executable: bool = False
    rent_epoch: int = 0
    data: bytes = b""
    write_version: int = 0
    txn_signature: bytes | None = None