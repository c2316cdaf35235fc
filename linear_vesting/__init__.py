"""
Linear Vesting Validator - token vesting on UTXO ledgers
Spend predicate releasing one locked asset to a beneficiary over time
"""

from .state import VestingState, VestingAction, Claim, Refund, decode_action
from .schedule import calculate_vested_amount, available_to_claim
from .context import (
    AssetClass,
    Address,
    TransactionSnapshot,
    find_own_input,
    find_continuing_output,
    sum_sent_to,
)
from .predicate import VestingValidator
from .errors import VestingError

__version__ = "0.1.0"
__all__ = [
    "VestingState",
    "VestingAction",
    "Claim",
    "Refund",
    "decode_action",
    "calculate_vested_amount",
    "available_to_claim",
    "AssetClass",
    "Address",
    "TransactionSnapshot",
    "find_own_input",
    "find_continuing_output",
    "sum_sent_to",
    "VestingValidator",
    "VestingError",
]
