"""
Core domain models, fixed-point arithmetic, and invariants.

Shared by the offer marketplace and the token economy; independent of
wallets, weather services and storage.
"""
