"""Casino engine: payout engine, wager coordinator and ledger for the casino platform"""

__version__ = "1.0.0"
