"""Query the lamport balances of a list of wallets over JSON-RPC."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import yaml

DEFAULT_CONFIG_PATH = "config.yaml"
_U64_MAX = 2**64 - 1


@dataclass
class Config:
    """Wallets to query and the RPC endpoint to ask."""

    rpc_url: str
    wallets: list[str] = field(default_factory=list)

    @classmethod
    def _from_mapping(cls, raw: object) -> Config:
        if not isinstance(raw, Mapping):
            raise ValueError("configuration must be a mapping")
        rpc_url = raw.get("rpc_url")
        if not isinstance(rpc_url, str):
            raise ValueError("configuration needs a string 'rpc_url'")
        wallets = raw.get("wallets")
        if not isinstance(wallets, list) or not all(isinstance(w, str) for w in wallets):
            raise ValueError("configuration needs 'wallets' as a list of strings")
        return cls(rpc_url=rpc_url, wallets=list(wallets))


def load_config(path: str | Path) -> Config:
    """Read a YAML configuration file; raise ValueError if it is malformed."""
    with open(path, encoding="utf-8") as stream:
        try:
            raw = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML in {path}: {exc}") from exc
    return Config._from_mapping(raw)


def _extract_lamports(payload: object) -> int:
    result = payload.get("result") if isinstance(payload, dict) else None
    value = result.get("value") if isinstance(result, dict) else None
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= _U64_MAX:
        return value
    return 0


async def get_balance(client: httpx.AsyncClient, rpc_url: str, pubkey: str) -> int:
    """Ask the RPC node for a wallet's balance; 0 if the reply holds no valid value."""
    body = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getBalance",
        "params": [pubkey],
    }
    response = await client.post(rpc_url, json=body)
    return _extract_lamports(response.json())


async def _balance_or_error(
    client: httpx.AsyncClient, rpc_url: str, wallet: str
) -> int | Exception:
    try:
        return await get_balance(client, rpc_url, wallet)
    except (httpx.HTTPError, ValueError) as exc:
        return exc


async def fetch_balances(
    config: Config, client: httpx.AsyncClient
) -> list[tuple[str, int | Exception]]:
    """Query every wallet concurrently; pair each with its balance or its error."""
    results = await asyncio.gather(
        *(_balance_or_error(client, config.rpc_url, wallet) for wallet in config.wallets)
    )
    return list(zip(config.wallets, results))


async def _run(config: Config) -> None:
    async with httpx.AsyncClient() as client:
        for wallet, outcome in await fetch_balances(config, client):
            if isinstance(outcome, Exception):
                print(f"Error for {wallet}: {outcome}", file=sys.stderr)
            else:
                print(f"{wallet} => {outcome} lamports")


def main(argv: Sequence[str] | None = None) -> int:
    """Print the balance of every wallet in the configuration."""
    parser = argparse.ArgumentParser(description="Show wallet balances in lamports.")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    asyncio.run(_run(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())