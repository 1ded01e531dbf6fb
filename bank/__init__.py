"""Bank API: accounts, transactions and the balance-posting workflow."""

__version__ = "0.1.0"
