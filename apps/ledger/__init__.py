"""
Ledger app: accounts, categories and transactions of a family.

Account balances follow their transactions; see ``services.balance``.
"""
