"""Conversion of wire-level messages back into ledger types."""

from __future__ import annotations

import re
from collections.abc import Iterable

from lamportkit import proto
from lamportkit.solana import (
    HASH_BYTES,
    Account,
    CompiledInstruction,
    ConfirmedBlock,
    Hash,
    InnerInstruction,
    InnerInstructions,
    LegacyMessage,
    LoadedAddresses,
    MessageAddressTableLookup,
    MessageHeader,
    MessageV0,
    Pubkey,
    Reward,
    RewardsAndNumPartitions,
    RewardType,
    Signature,
    TransactionError,
    TransactionReturnData,
    TransactionStatusMeta,
    TransactionTokenBalance,
    TransactionWithStatusMeta,
    UiTokenAmount,
    VersionedMessage,
    VersionedTransaction,
)

_REWARD_TYPES = {
    proto.RewardType.UNSPECIFIED: None,
    proto.RewardType.FEE: RewardType.FEE,
    proto.RewardType.RENT: RewardType.RENT,
    proto.RewardType.STAKING: RewardType.STAKING,
    proto.RewardType.VOTING: RewardType.VOTING,
}

_U8_TEXT = re.compile(r"\+?[0-9]+")


class ConversionError(ValueError):
    """A wire message could not be turned into a ledger value."""


def _require(value, message: str):
    if value is None:
        raise ConversionError(message)
    return value


def _u8(value: int, message: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ConversionError(message)
    return value


def create_block(block: proto.SubscribeUpdateBlock) -> ConfirmedBlock:
    """Build a confirmed block; rewards, block time and height must be present."""
    transactions = [create_tx_with_meta(tx) for tx in block.transactions]
    block_rewards = _require(block.rewards, "failed to get rewards")
    rewards = [create_reward(reward) for reward in block_rewards.rewards]
    block_time = _require(block.block_time, "failed to get block_time")
    block_height = _require(block.block_height, "failed to get block_height")
    num_partitions = block_rewards.num_partitions
    return ConfirmedBlock(
        previous_blockhash=block.parent_blockhash,
        blockhash=block.blockhash,
        parent_slot=block.parent_slot,
        transactions=transactions,
        rewards=rewards,
        num_partitions=num_partitions.num_partitions if num_partitions is not None else None,
        block_time=block_time.timestamp,
        block_height=block_height.block_height,
    )


def create_tx_with_meta(tx: proto.SubscribeUpdateTransactionInfo) -> TransactionWithStatusMeta:
    meta = _require(tx.meta, "failed to get transaction meta")
    transaction = _require(tx.transaction, "failed to get transaction transaction")
    return TransactionWithStatusMeta(
        transaction=create_tx_versioned(transaction),
        meta=create_tx_meta(meta),
    )


def create_tx_versioned(tx: proto.Transaction) -> VersionedTransaction:
    signatures = []
    for raw in tx.signatures:
        try:
            signatures.append(Signature(raw))
        except ValueError:
            raise ConversionError("failed to parse Signature") from None
    message = _require(tx.message, "failed to get message")
    return VersionedTransaction(signatures=signatures, message=create_message(message))


def create_message(message: proto.Message) -> VersionedMessage:
    raw_header = _require(message.header, "failed to get MessageHeader")
    header = MessageHeader(
        num_required_signatures=_u8(
            raw_header.num_required_signatures, "failed to parse num_required_signatures"
        ),
        num_readonly_signed_accounts=_u8(
            raw_header.num_readonly_signed_accounts,
            "failed to parse num_readonly_signed_accounts",
        ),
        num_readonly_unsigned_accounts=_u8(
            raw_header.num_readonly_unsigned_accounts,
            "failed to parse num_readonly_unsigned_accounts",
        ),
    )
    if len(message.recent_blockhash) != HASH_BYTES:
        raise ConversionError("failed to parse hash")

    if message.versioned:
        lookups = [
            MessageAddressTableLookup(
                account_key=create_pubkey(table.account_key),
                writable_indexes=table.writable_indexes,
                readonly_indexes=table.readonly_indexes,
            )
            for table in message.address_table_lookups
        ]
        return MessageV0(
            header=header,
            account_keys=create_pubkey_vec(message.account_keys),
            recent_blockhash=Hash(message.recent_blockhash),
            instructions=create_message_instructions(message.instructions),
            address_table_lookups=lookups,
        )
    return LegacyMessage(
        header=header,
        account_keys=create_pubkey_vec(message.account_keys),
        recent_blockhash=Hash(message.recent_blockhash),
        instructions=create_message_instructions(message.instructions),
    )


def create_message_instructions(
    ixs: Iterable[proto.CompiledInstruction],
) -> list[CompiledInstruction]:
    return [create_message_instruction(ix) for ix in ixs]


def create_message_instruction(ix: proto.CompiledInstruction) -> CompiledInstruction:
    return CompiledInstruction(
        program_id_index=_u8(
            ix.program_id_index, "failed to decode CompiledInstruction.program_id_index)"
        ),
        accounts=ix.accounts,
        data=ix.data,
    )


def create_tx_meta(meta: proto.TransactionStatusMeta) -> TransactionStatusMeta:
    status = create_tx_error(meta.err)
    rewards = [create_reward(reward) for reward in meta.rewards]
    if meta.return_data_none:
        return_data = None
    else:
        data = _require(meta.return_data, "failed to get return_data")
        try:
            program_id = Pubkey(data.program_id)
        except ValueError:
            raise ConversionError("failed to parse program_id") from None
        return_data = TransactionReturnData(program_id=program_id, data=data.data)
    return TransactionStatusMeta(
        status=status,
        fee=meta.fee,
        pre_balances=list(meta.pre_balances),
        post_balances=list(meta.post_balances),
        inner_instructions=create_meta_inner_instructions(meta.inner_instructions),
        log_messages=list(meta.log_messages),
        pre_token_balances=create_token_balances(meta.pre_token_balances),
        post_token_balances=create_token_balances(meta.post_token_balances),
        rewards=rewards,
        loaded_addresses=create_loaded_addresses(
            meta.loaded_writable_addresses, meta.loaded_readonly_addresses
        ),
        return_data=return_data,
        compute_units_consumed=meta.compute_units_consumed,
    )


def create_tx_error(err: proto.TransactionError | None) -> TransactionError | None:
    if err is None:
        return None
    try:
        return TransactionError.decode(err.err)
    except ValueError:
        raise ConversionError("failed to decode TransactionError") from None


def create_meta_inner_instructions(
    ixs: Iterable[proto.InnerInstructions],
) -> list[InnerInstructions]:
    return [create_meta_inner_instruction(ix) for ix in ixs]


def create_meta_inner_instruction(ix: proto.InnerInstructions) -> InnerInstructions:
    instructions = [
        InnerInstruction(
            instruction=CompiledInstruction(
                program_id_index=_u8(
                    inner.program_id_index,
                    "failed to decode CompiledInstruction.program_id_index)",
                ),
                accounts=inner.accounts,
                data=inner.data,
            ),
            stack_height=inner.stack_height,
        )
        for inner in ix.instructions
    ]
    return InnerInstructions(
        index=_u8(ix.index, "failed to decode InnerInstructions.index"),
        instructions=instructions,
    )


def create_rewards_obj(rewards: proto.Rewards) -> RewardsAndNumPartitions:
    num_partitions = rewards.num_partitions
    return RewardsAndNumPartitions(
        rewards=[create_reward(reward) for reward in rewards.rewards],
        num_partitions=num_partitions.num_partitions if num_partitions is not None else None,
    )


def _parse_commission(text: str) -> int | None:
    if not text:
        return None
    if not _U8_TEXT.fullmatch(text) or int(text) > 0xFF:
        raise ConversionError("failed to parse reward commission")
    return int(text)


def create_reward(reward: proto.Reward) -> Reward:
    try:
        reward_type = proto.RewardType(reward.reward_type)
    except ValueError:
        raise ConversionError("failed to parse reward_type") from None
    return Reward(
        pubkey=reward.pubkey,
        lamports=reward.lamports,
        post_balance=reward.post_balance,
        reward_type=_REWARD_TYPES[reward_type],
        commission=_parse_commission(reward.commission),
    )


def create_token_balances(
    balances: Iterable[proto.TokenBalance],
) -> list[TransactionTokenBalance]:
    result = []
    for balance in balances:
        amount = _require(balance.ui_token_amount, "failed to get ui_token_amount")
        account_index = _u8(balance.account_index, "failed to parse account_index")
        result.append(
            TransactionTokenBalance(
                account_index=account_index,
                mint=balance.mint,
                ui_token_amount=UiTokenAmount(
                    ui_amount=amount.ui_amount,
                    decimals=_u8(amount.decimals, "failed to parse decimals"),
                    amount=amount.amount,
                    ui_amount_string=amount.ui_amount_string,
                ),
                owner=balance.owner,
                program_id=balance.program_id,
            )
        )
    return result


def create_loaded_addresses(
    writable: Iterable[bytes], readonly: Iterable[bytes]
) -> LoadedAddresses:
    return LoadedAddresses(
        writable=create_pubkey_vec(writable),
        readonly=create_pubkey_vec(readonly),
    )


def create_pubkey_vec(pubkeys: Iterable[bytes]) -> list[Pubkey]:
    return [create_pubkey(pubkey) for pubkey in pubkeys]


def create_pubkey(pubkey: bytes) -> Pubkey:
    try:
        return Pubkey(pubkey)
    except ValueError:
        raise ConversionError("failed to parse Pubkey") from None


def create_account(account: proto.SubscribeUpdateAccountInfo) -> tuple[Pubkey, Account]:
    pubkey = create_pubkey(account.pubkey)
    return pubkey, Account(
        lamports=account.lamports,
        data=account.data,
        owner=create_pubkey(account.owner),
        executable=account.executable,
        rent_epoch=account.rent_epoch,
    )