"""
hugenum — approximate huge integers as fraction × 10^exponent.

Contains the ScaledInt value type (domain), fixed-width integer primitives
and combinatorics (math), JSON contracts (contracts) and the CLI.
"""
