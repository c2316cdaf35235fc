"""
Vesting state and actions as attached to the locked output.

Both are PlutusData records so they encode to the same CBOR shape the
ledger carries for inline data.
"""

from dataclasses import dataclass, fields, replace
from typing import Tuple, Union

import cbor2
from cbor2 import CBORDecodeError, CBORTag
from pycardano import PlutusData
from pycardano.exception import DeserializeException

from .errors import UnknownAction, WrongStateRepresentation

_DECODE_ERRORS = (DeserializeException, CBORDecodeError, ValueError, TypeError)


def _from_exact_cbor(cls, raw):
    """Decode ``raw`` as ``cls``, refusing records with a different field count"""
    payload = bytes.fromhex(raw) if isinstance(raw, str) else raw
    value = cbor2.loads(payload)
    expected = len(fields(cls))
    if not isinstance(value, CBORTag) or not isinstance(value.value, list):
        raise DeserializeException(f"{cls.__name__} must be a constructor record")
    if len(value.value) != expected:
        raise DeserializeException(
            f"{cls.__name__} has {expected} fields, got {len(value.value)}"
        )
    return cls.from_cbor(payload)


@dataclass
class VestingState(PlutusData):
    """Schedule and progress of one locked balance.

    Every field except ``claimed_quantity`` is fixed once the balance is
    locked. A claim produces a new state value through ``with_claimed``;
    the state carried by the spent output is never changed in place.

    The ordering ``start_time <= cliff_date <= end_date`` is not checked
    here or anywhere in the validator.
    """
    CONSTR_ID = 0
    owner: bytes                    # 28 bytes key-hash
    beneficiary: bytes              # 28 bytes key-hash
    start_time: int                 # POSIX ms
    cliff_date: int                 # POSIX ms
    end_date: int                   # POSIX ms
    total_vesting_quantity: int
    claimed_quantity: int

    def remaining(self) -> int:
        """Quantity still locked under this state"""
        return self.total_vesting_quantity - self.claimed_quantity

    def schedule_fields(self) -> Tuple[bytes, bytes, int, int, int, int]:
        """Every field a claim must carry over unchanged"""
        return (
            self.owner,
            self.beneficiary,
            self.start_time,
            self.cliff_date,
            self.end_date,
            self.total_vesting_quantity,
        )

    def with_claimed(self, amount: int) -> 'VestingState':
        """Continuation state after claiming ``amount``"""
        return replace(self, claimed_quantity=self.claimed_quantity + amount)

    @classmethod
    def create(cls, owner: bytes, beneficiary: bytes, start_time: int,
               cliff_date: int, end_date: int, total_vesting_quantity: int) -> 'VestingState':
        """Initial state for a freshly locked balance"""
        return cls(
            owner=owner,
            beneficiary=beneficiary,
            start_time=start_time,
            cliff_date=cliff_date,
            end_date=end_date,
            total_vesting_quantity=total_vesting_quantity,
            claimed_quantity=0,
        )

    @classmethod
    def decode(cls, raw) -> 'VestingState':
        """Read a state from an instance, CBOR bytes or CBOR hex"""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, (bytes, str)):
            raise WrongStateRepresentation(
                f"Cannot read vesting state from {type(raw).__name__}"
            )
        try:
            return _from_exact_cbor(cls, raw)
        except _DECODE_ERRORS as e:
            raise WrongStateRepresentation(f"Undecodable vesting state: {e}") from e


@dataclass
class VestingAction(PlutusData):
    """Actions a spender can request against a locked balance"""


@dataclass
class Claim(VestingAction):
    """Beneficiary withdraws part of the vested amount"""
    CONSTR_ID = 0
    amount_to_claim: int


@dataclass
class Refund(VestingAction):
    """Owner reclaims the whole balance before vesting starts"""
    CONSTR_ID = 1


Action = Union[Claim, Refund]


def decode_action(raw) -> Action:
    """Read an action from an instance, CBOR bytes or CBOR hex"""
    if isinstance(raw, (Claim, Refund)):
        return raw
    if not isinstance(raw, (bytes, str)):
        raise UnknownAction(f"Cannot read action from {type(raw).__name__}")

    for variant in (Claim, Refund):
        try:
            return _from_exact_cbor(variant, raw)
        except _DECODE_ERRORS:
            continue
    raise UnknownAction("Action matches neither Claim nor Refund")
