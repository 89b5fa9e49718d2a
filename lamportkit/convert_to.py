"""Conversion of ledger types into their wire-level message form."""

from __future__ import annotations

from collections.abc import Iterable

from lamportkit import proto
from lamportkit.solana import (
    CompiledInstruction,
    InnerInstruction,
    InnerInstructions,
    LegacyMessage,
    MessageAddressTableLookup,
    MessageHeader,
    MessageV0,
    Pubkey,
    Reward,
    RewardType,
    TransactionError,
    TransactionReturnData,
    TransactionStatusMeta,
    TransactionTokenBalance,
    VersionedMessage,
    VersionedTransaction,
)

_REWARD_TYPES = {
    None: proto.RewardType.UNSPECIFIED,
    RewardType.FEE: proto.RewardType.FEE,
    RewardType.RENT: proto.RewardType.RENT,
    RewardType.STAKING: proto.RewardType.STAKING,
    RewardType.VOTING: proto.RewardType.VOTING,
}


def create_transaction(tx: VersionedTransaction) -> proto.Transaction:
    """Convert a signed transaction."""
    return proto.Transaction(
        signatures=[bytes(signature) for signature in tx.signatures],
        message=create_message(tx.message),
    )


def create_message(message: VersionedMessage) -> proto.Message:
    """Convert a legacy or version 0 message."""
    if isinstance(message, MessageV0):
        return proto.Message(
            header=create_header(message.header),
            account_keys=create_pubkeys(message.account_keys),
            recent_blockhash=bytes(message.recent_blockhash),
            instructions=create_instructions(message.instructions),
            versioned=True,
            address_table_lookups=create_lookups(message.address_table_lookups),
        )
    if isinstance(message, LegacyMessage):
        return proto.Message(
            header=create_header(message.header),
            account_keys=create_pubkeys(message.account_keys),
            recent_blockhash=bytes(message.recent_blockhash),
            instructions=create_instructions(message.instructions),
            versioned=False,
            address_table_lookups=[],
        )
    raise TypeError(f"unsupported message type {type(message).__name__}")


def create_header(header: MessageHeader) -> proto.MessageHeader:
    """Convert a message header."""
    return proto.MessageHeader(
        num_required_signatures=header.num_required_signatures,
        num_readonly_signed_accounts=header.num_readonly_signed_accounts,
        num_readonly_unsigned_accounts=header.num_readonly_unsigned_accounts,
    )


def create_pubkeys(pubkeys: Iterable[Pubkey]) -> list[bytes]:
    """Convert keys to their raw bytes."""
    return [bytes(key) for key in pubkeys]


def create_instructions(ixs: Iterable[CompiledInstruction]) -> list[proto.CompiledInstruction]:
    return [create_instruction(ix) for ix in ixs]


def create_instruction(ix: CompiledInstruction) -> proto.CompiledInstruction:
    return proto.CompiledInstruction(
        program_id_index=ix.program_id_index,
        accounts=bytes(ix.accounts),
        data=bytes(ix.data),
    )


def create_lookups(
    lookups: Iterable[MessageAddressTableLookup],
) -> list[proto.MessageAddressTableLookup]:
    return [create_lookup(lookup) for lookup in lookups]


def create_lookup(lookup: MessageAddressTableLookup) -> proto.MessageAddressTableLookup:
    return proto.MessageAddressTableLookup(
        account_key=bytes(lookup.account_key),
        writable_indexes=bytes(lookup.writable_indexes),
        readonly_indexes=bytes(lookup.readonly_indexes),
    )


def create_transaction_meta(meta: TransactionStatusMeta) -> proto.TransactionStatusMeta:
    """Convert transaction metadata, recording which optional lists were absent."""
    inner = meta.inner_instructions
    logs = meta.log_messages
    return proto.TransactionStatusMeta(
        err=create_transaction_error(meta.status),
        fee=meta.fee,
        pre_balances=list(meta.pre_balances),
        post_balances=list(meta.post_balances),
        inner_instructions=create_inner_instructions_vec(inner) if inner is not None else [],
        inner_instructions_none=inner is None,
        log_messages=list(logs) if logs is not None else [],
        log_messages_none=logs is None,
        pre_token_balances=create_token_balances(meta.pre_token_balances or []),
        post_token_balances=create_token_balances(meta.post_token_balances or []),
        rewards=create_rewards(meta.rewards or []),
        loaded_writable_addresses=create_pubkeys(meta.loaded_addresses.writable),
        loaded_readonly_addresses=create_pubkeys(meta.loaded_addresses.readonly),
        return_data=(
            create_return_data(meta.return_data) if meta.return_data is not None else None
        ),
        return_data_none=meta.return_data is None,
        compute_units_consumed=meta.compute_units_consumed,
    )


def create_transaction_error(status: TransactionError | None) -> proto.TransactionError | None:
    """Return the serialized error, or None for a successful transaction."""
    if status is None:
        return None
    return proto.TransactionError(err=status.encode())


def create_inner_instructions_vec(
    ixs: Iterable[InnerInstructions],
) -> list[proto.InnerInstructions]:
    return [create_inner_instructions(ix) for ix in ixs]


def create_inner_instructions(instructions: InnerInstructions) -> proto.InnerInstructions:
    return proto.InnerInstructions(
        index=instructions.index,
        instructions=create_inner_instruction_vec(instructions.instructions),
    )


def create_inner_instruction_vec(ixs: Iterable[InnerInstruction]) -> list[proto.InnerInstruction]:
    return [create_inner_instruction(ix) for ix in ixs]


def create_inner_instruction(instruction: InnerInstruction) -> proto.InnerInstruction:
    compiled = instruction.instruction
    return proto.InnerInstruction(
        program_id_index=compiled.program_id_index,
        accounts=bytes(compiled.accounts),
        data=bytes(compiled.data),
        stack_height=instruction.stack_height,
    )


def create_token_balances(
    balances: Iterable[TransactionTokenBalance],
) -> list[proto.TokenBalance]:
    return [create_token_balance(balance) for balance in balances]


def create_token_balance(balance: TransactionTokenBalance) -> proto.TokenBalance:
    amount = balance.ui_token_amount
    return proto.TokenBalance(
        account_index=balance.account_index,
        mint=balance.mint,
        ui_token_amount=proto.UiTokenAmount(
            ui_amount=amount.ui_amount if amount.ui_amount is not None else 0.0,
            decimals=amount.decimals,
            amount=amount.amount,
            ui_amount_string=amount.ui_amount_string,
        ),
        owner=balance.owner,
        program_id=balance.program_id,
    )


def create_rewards_obj(rewards: Iterable[Reward], num_partitions: int | None) -> proto.Rewards:
    return proto.Rewards(
        rewards=create_rewards(rewards),
        num_partitions=(
            create_num_partitions(num_partitions) if num_partitions is not None else None
        ),
    )


def create_rewards(rewards: Iterable[Reward]) -> list[proto.Reward]:
    return [create_reward(reward) for reward in rewards]


def create_reward(reward: Reward) -> proto.Reward:
    return proto.Reward(
        pubkey=reward.pubkey,
        lamports=reward.lamports,
        post_balance=reward.post_balance,
        reward_type=int(create_reward_type(reward.reward_type)),
        commission=str(reward.commission) if reward.commission is not None else "",
    )


def create_reward_type(reward_type: RewardType | None) -> proto.RewardType:
    return _REWARD_TYPES[reward_type]


def create_num_partitions(num_partitions: int) -> proto.NumPartitions:
    return proto.NumPartitions(num_partitions=num_partitions)


def create_return_data(return_data: TransactionReturnData) -> proto.ReturnData:
    return proto.ReturnData(
        program_id=bytes(return_data.program_id),
        data=bytes(return_data.data),
    )


def create_block_height(block_height: int) -> proto.BlockHeight:
    return proto.BlockHeight(block_height=block_height)


def create_timestamp(timestamp: int) -> proto.UnixTimestamp:
    return proto.UnixTimestamp(timestamp=timestamp)