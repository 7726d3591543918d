"""Core domain types and betting mathematics for the bet tracker.

This package contains pure building blocks:

- ``bets``      : bet enums, status sets and the immutable ``BetSnapshot``
- ``odds_math`` : American odds conversion, payout and expected value
- ``kelly``     : Kelly fraction, fractional-Kelly stakes and risk level

Nothing in this package imports from ``backend.services`` or ``backend.models``.
All modules are side-effect-free and unit-testable in isolation.
"""
