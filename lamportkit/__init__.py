"""Solana ledger models, subscription-message conversions, balance queries and a deposit ledger."""

__version__ = "0.1.0"

__all__ = ["balances", "convert_from", "convert_to", "deposit", "proto", "solana"]