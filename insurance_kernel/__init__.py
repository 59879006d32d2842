"""
Insurance Kernel

Clients (persons and companies) and the contracts they hold:
- Tagged-union client model with immutable variant fields
- Contract validity computed against an injected reference date
- Per-client aggregation of active contract costs
- Client deletion that end-dates open contracts instead of dropping them
"""

__version__ = "0.1.0"
