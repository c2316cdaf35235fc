"""
Read-only transaction snapshot handed to the validator by the host, and the
helpers that inspect it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union

from .state import VestingState


@dataclass(frozen=True)
class TxOutRef:
    """Reference to an output created by an earlier transaction"""
    tx_id: bytes
    index: int


@dataclass(frozen=True)
class AssetClass:
    """A token identified by minting policy and asset name"""
    policy_id: bytes  # 28 bytes
    asset_name: bytes

    def __str__(self) -> str:
        return f"{self.policy_id.hex()}.{self.asset_name.hex()}"


Value = Dict[AssetClass, int]


def quantity_of(value: Value, asset: AssetClass) -> int:
    """Quantity of ``asset`` in a bundle, 0 when absent"""
    return value.get(asset, 0)


class CredentialKind(Enum):
    KEY = "key"
    SCRIPT = "script"


@dataclass(frozen=True)
class Credential:
    kind: CredentialKind
    hash: bytes


@dataclass(frozen=True)
class Address:
    """Payment credential plus optional staking credential"""
    payment: Credential
    stake: Optional[Credential] = None

    @classmethod
    def from_key_hash(cls, key_hash: bytes) -> 'Address':
        """Plain key address of a party, without stake part"""
        return cls(Credential(CredentialKind.KEY, key_hash))

    @classmethod
    def from_script_hash(cls, script_hash: bytes) -> 'Address':
        return cls(Credential(CredentialKind.SCRIPT, script_hash))


@dataclass(frozen=True)
class NoDatum:
    pass


@dataclass(frozen=True)
class DatumHash:
    """State committed by hash only; not readable by the validator"""
    hash: bytes


@dataclass(frozen=True)
class InlineDatum:
    """State carried in full by the output"""
    data: Union[VestingState, bytes, str] = field(hash=False)


Datum = Union[NoDatum, DatumHash, InlineDatum]


@dataclass(frozen=True)
class TxOut:
    address: Address
    value: Value = field(default_factory=dict, hash=False)
    datum: Datum = field(default=NoDatum(), hash=False)


@dataclass(frozen=True)
class TxIn:
    out_ref: TxOutRef
    output: TxOut

    @property
    def address(self) -> Address:
        return self.output.address

    @property
    def value(self) -> Value:
        return self.output.value

    @property
    def datum(self) -> Datum:
        return self.output.datum


class BoundKind(Enum):
    NEG_INF = "neg_inf"
    FINITE = "finite"
    POS_INF = "pos_inf"


@dataclass(frozen=True)
class IntervalBound:
    kind: BoundKind
    time: Optional[int] = None

    def __post_init__(self):
        if (self.kind is BoundKind.FINITE) != (self.time is not None):
            raise ValueError("Only finite bounds carry a time")

    @classmethod
    def finite(cls, time: int) -> 'IntervalBound':
        return cls(BoundKind.FINITE, time)

    @classmethod
    def negative_infinity(cls) -> 'IntervalBound':
        return cls(BoundKind.NEG_INF)

    @classmethod
    def positive_infinity(cls) -> 'IntervalBound':
        return cls(BoundKind.POS_INF)

    @property
    def is_finite(self) -> bool:
        return self.kind is BoundKind.FINITE


@dataclass(frozen=True)
class ValidityRange:
    """Time window in which the host considers the transaction valid"""
    lower: IntervalBound
    upper: IntervalBound

    @classmethod
    def from_time(cls, time: int) -> 'ValidityRange':
        """Range starting at ``time`` with no upper limit"""
        return cls(IntervalBound.finite(time), IntervalBound.positive_infinity())

    @classmethod
    def always(cls) -> 'ValidityRange':
        return cls(IntervalBound.negative_infinity(), IntervalBound.positive_infinity())


class PurposeKind(Enum):
    SPEND = "spend"
    MINT = "mint"
    WITHDRAW = "withdraw"
    PUBLISH = "publish"
    VOTE = "vote"
    PROPOSE = "propose"


@dataclass(frozen=True)
class ScriptPurpose:
    """Role under which the script is run; spends name the output they unlock"""
    kind: PurposeKind
    out_ref: Optional[TxOutRef] = None

    @classmethod
    def spend(cls, out_ref: TxOutRef) -> 'ScriptPurpose':
        return cls(PurposeKind.SPEND, out_ref)


@dataclass(frozen=True)
class TransactionSnapshot:
    """Everything the validator may look at for one evaluation"""
    inputs: Tuple[TxIn, ...]
    outputs: Tuple[TxOut, ...]
    validity_range: ValidityRange
    signatories: FrozenSet[bytes]
    purpose: ScriptPurpose

    def __post_init__(self):
        # callers may pass lists; keep the snapshot immutable
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        object.__setattr__(self, 'outputs', tuple(self.outputs))
        object.__setattr__(self, 'signatories', frozenset(self.signatories))


def find_own_input(snapshot: TransactionSnapshot, out_ref: TxOutRef) -> Optional[TxIn]:
    """Input spending ``out_ref``, if the transaction has one"""
    for tx_in in snapshot.inputs:
        if tx_in.out_ref == out_ref:
            return tx_in
    return None


def find_continuing_output(snapshot: TransactionSnapshot, out_ref: TxOutRef) -> Optional[TxOut]:
    """First output paying back to the address of the spent input

    Later outputs at the same address are ignored, so a transaction that
    spends several locked balances together cannot tell their continuations
    apart.
    """
    own_input = find_own_input(snapshot, out_ref)
    if own_input is None:
        return None

    for output in snapshot.outputs:
        if output.address == own_input.address:
            return output
    return None


def sum_sent_to(snapshot: TransactionSnapshot, address: Address, asset: AssetClass) -> int:
    """Total quantity of ``asset`` across all outputs paying ``address``"""
    return sum(
        quantity_of(output.value, asset)
        for output in snapshot.outputs
        if output.address == address
    )

