import pytest

from lamportkit.solana import (
    CompiledInstruction,
    Hash,
    InnerInstructions,
    MessageHeader,
    Pubkey,
    Reward,
    RewardType,
    Signature,
    TransactionError,
    TransactionStatusMeta,
    UiTokenAmount,
    b58decode,
    b58encode,
)

PROGRAM_ID = "63QPWD9JifxukoYhdJJLBP3jzZqAt45hfGoNaMvVafFF"


def test_b58encode_known_value():
    assert b58encode(b"hello world") == "StV1DL6CwTryKyV"


def test_b58_zero_bytes_become_ones():
    assert b58encode(bytes(32)) == "1" * 32
    assert b58decode("1" * 32) == bytes(32)


@pytest.mark.parametrize(
    "data",
    [b"", b"\x00", b"\x00\x00\x01", b"\xff" * 10, bytes(range(64))],
)
def test_b58_round_trip(data):
    assert b58decode(b58encode(data)) == data


@pytest.mark.parametrize("text", ["0", "O", "I", "l", "abc!"])
def test_b58decode_rejects_invalid_characters(text):
    with pytest.raises(ValueError):
        b58decode(text)


def test_pubkey_round_trip_of_program_id():
    key = Pubkey.from_base58(PROGRAM_ID)
    assert len(bytes(key)) == 32
    assert key.to_base58() == PROGRAM_ID
    assert str(key) == PROGRAM_ID


def test_pubkey_rejects_wrong_length():
    with pytest.raises(ValueError):
        Pubkey(bytes(31))
    with pytest.raises(ValueError):
        Pubkey.from_base58("StV1DL6CwTryKyV")


def test_signature_round_trip_and_length():
    sig = Signature(bytes(range(64)))
    assert Signature.from_base58(sig.to_base58()) == sig
    with pytest.raises(ValueError):
        Signature(bytes(32))


def test_types_with_same_bytes_differ():
    raw = bytes(range(32))
    assert Pubkey(raw) == Pubkey(bytearray(raw))
    assert Pubkey(raw) != Hash(raw)


def test_pubkeys_are_hashable():
    keys = {Pubkey(bytes(32)), Pubkey(bytes(32)), Pubkey(b"\x01" * 32)}
    assert len(keys) == 2


def test_hash_round_trip():
    digest = Hash(b"\x07" * 32)
    assert Hash.from_base58(digest.to_base58()).data == b"\x07" * 32


def test_transaction_error_wire_form():
    assert TransactionError(1).encode() == b"\x01\x00\x00\x00"


@pytest.mark.parametrize("variant,payload", [(0, b""), (8, b"\x02\x01"), (2**32 - 1, b"xyz")])
def test_transaction_error_round_trip(variant, payload):
    error = TransactionError(variant, payload)
    decoded = TransactionError.decode(error.encode())
    assert decoded == error
    assert decoded.variant == variant
    assert decoded.payload == payload


def test_transaction_error_decode_too_short():
    with pytest.raises(ValueError):
        TransactionError.decode(b"\x01\x00")


def test_transaction_error_variant_range():
    with pytest.raises(ValueError):
        TransactionError(2**32)


def test_header_fields_must_be_bytes():
    with pytest.raises(ValueError):
        MessageHeader(256, 0, 0)
    header = MessageHeader(1, 0, 1)
    assert header.num_readonly_unsigned_accounts == 1


def test_compiled_instruction_index_range():
    with pytest.raises(ValueError):
        CompiledInstruction(300)
    ix = CompiledInstruction(2, bytearray(b"\x00\x01"), [9])
    assert ix.accounts == b"\x00\x01"
    assert ix.data == b"\x09"


def test_other_u8_fields_are_checked():
    with pytest.raises(ValueError):
        InnerInstructions(-1)
    with pytest.raises(ValueError):
        UiTokenAmount(1.0, 256, "1", "1")
    with pytest.raises(ValueError):
        Reward("key", 1, 2, RewardType.FEE, commission=256)


def test_status_meta_success_flag():
    ok = TransactionStatusMeta(status=None, fee=5000)
    failed = TransactionStatusMeta(status=TransactionError(3), fee=5000)
    assert ok.succeeded is True
    assert failed.succeeded is False
    assert ok.loaded_addresses.writable == []