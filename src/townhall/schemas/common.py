"""Shared schema constraints."""

from typing import Final

# Range of the signed 64-bit INTEGER used for primary keys and vote targets.
SQL_INT_MIN: Final[int] = -(2**63)
SQL_INT_MAX: Final[int] = 2**63 - 1
