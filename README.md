# lamportkit

Tools for working with Solana ledger data in Python.

- `lamportkit.solana` – data models for keys (`Pubkey`), signatures
  (`Signature`), hashes (`Hash`), messages (`LegacyMessage`, `MessageV0`),
  `VersionedTransaction`, `TransactionStatusMeta`, rewards, token balances,
  accounts and `ConfirmedBlock`, plus base58 helpers (`b58encode`,
  `b58decode`). Fixed-size values check their length and raise `ValueError`
  when it is wrong; `Pubkey`, `Signature` and `Hash` offer `from_base58` and
  `to_base58`. `TransactionError` keeps a bincode enum variant and payload and
  has `encode()` / `TransactionError.decode(data)`.
- `lamportkit.proto` – the subscription message shapes as plain dataclasses
  (`SubscribeUpdateBlock`, `SubscribeUpdateTransactionInfo`,
  `SubscribeUpdateAccountInfo`, `TransactionStatusMeta`, `Message`, and the
  rest), with raw `bytes` for keys and hashes.
- `lamportkit.convert_to` – turn ledger models into those messages
  (`create_transaction`, `create_message`, `create_transaction_meta`,
  `create_rewards_obj`, `create_block_height`, `create_timestamp`, ...).
  Absent optional lists in the metadata are recorded in the
  `inner_instructions_none`, `log_messages_none` and `return_data_none` flags.
- `lamportkit.convert_from` – turn messages back into ledger models
  (`create_block`, `create_tx_with_meta`, `create_tx_meta`, `create_account`,
  ...). Missing required parts, keys or signatures of the wrong length,
  out-of-range byte fields, unknown reward types and bad commissions raise
  `ConversionError` (a subclass of `ValueError`).
- `lamportkit.balances` – fetch the lamport balances of a set of wallets from
  a JSON-RPC endpoint, all requests at once.
- `lamportkit.deposit` – a small deposit ledger: `initialize`, `deposit` and
  `withdraw` on a `UserAccount`.

## Installing

```
pip install lamportkit
```

## Checking balances

Write a `config.yaml`:

```yaml
rpc_url: http://localhost:8899
wallets:
  - 11111111111111111111111111111111
  - SysvarRent111111111111111111111111111111111
```

Then run:

```
lamportkit-balances
```

Use `-c PATH` / `--config PATH` to read a file other than `config.yaml` in the
current directory. Each wallet gets a line `<wallet> => <n> lamports`; a
wallet whose request fails gets an `Error for <wallet>: ...` line on standard
error. A reply that holds no valid `result.value` counts as 0 lamports. If the
configuration cannot be read or lacks a string `rpc_url` and a list of string
`wallets`, the command prints an error and exits with status 1.

From code:

```python
import asyncio
import httpx
from lamportkit.balances import load_config, fetch_balances

config = load_config("config.yaml")

async def run():
    async with httpx.AsyncClient() as client:
        return await fetch_balances(config, client)

for wallet, result in asyncio.run(run()):
    print(wallet, result)   # result is an int, or the exception raised
```

`get_balance(client, rpc_url, pubkey)` asks for a single wallet.

## Converting subscription messages

```python
from lamportkit import convert_from, convert_to, proto

def handle(update: proto.SubscribeUpdateBlock) -> None:
    block = convert_from.create_block(update)
    for tx in block.transactions:
        meta_msg = convert_to.create_transaction_meta(tx.meta)
        tx_msg = convert_to.create_transaction(tx.transaction)
```

`create_block` requires the update's `rewards`, `block_time` and
`block_height` to be present.

## Deposit ledger

```python
from lamportkit.deposit import UserAccount, initialize, deposit, withdraw

account = UserAccount()
initialize(account)
deposit(account, 1_000_000)
withdraw(account, 500_000)
print(account.balance)   # 500000
```

Overdrawing raises `InsufficientFundsError` ("Insufficient funds for
withdrawal", `code` 6000). Amounts must be integers in the unsigned 64-bit
range (`TypeError` / `ValueError` otherwise), and a deposit that would exceed
that range raises `OverflowError`.

## What it does not do

lamportkit does not open network subscriptions to a streaming node, does not
serialize the message types to protobuf bytes, does not sign or send
transactions, and the deposit ledger lives only in memory: nothing is
deployed or stored on a chain.

## Running the tests

```
pip install -e ".[test]"
pytest
```