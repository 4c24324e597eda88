"""
Brokerage bounded context: domain layer.

This module contains all domain logic for the brokerage context:
- Account ledger (wallet balances)
- KYC gate (identity document review)
- Transaction engine (deposits, withdrawals, purchases)
- Portfolio tracking
"""
