from linear_vesting.context import (
    Address,
    AssetClass,
    InlineDatum,
    ScriptPurpose,
    TransactionSnapshot,
    TxIn,
    TxOut,
    TxOutRef,
    ValidityRange,
)
from linear_vesting.state import VestingState

OWNER = bytes.fromhex("0a" * 28)
BENEFICIARY = bytes.fromhex("0b" * 28)

TOKEN = AssetClass(policy_id=bytes.fromhex("aa" * 28), asset_name=b"VEST")
OTHER_TOKEN = AssetClass(policy_id=bytes.fromhex("bb" * 28), asset_name=b"OTHER")

SCRIPT_ADDRESS = Address.from_script_hash(bytes.fromhex("5c" * 28))
OWNER_ADDRESS = Address.from_key_hash(OWNER)
BENEFICIARY_ADDRESS = Address.from_key_hash(BENEFICIARY)

LOCKED_REF = TxOutRef(tx_id=bytes.fromhex("01" * 32), index=0)
FEE_REF = TxOutRef(tx_id=bytes.fromhex("02" * 32), index=1)


def make_state(**overrides) -> VestingState:
    """start=1000, cliff=2000, end=3000, total=1000 unless overridden"""
    fields = dict(
        owner=OWNER,
        beneficiary=BENEFICIARY,
        start_time=1000,
        cliff_date=2000,
        end_date=3000,
        total_vesting_quantity=1000,
        claimed_quantity=0,
    )
    fields.update(overrides)
    return VestingState(**fields)


def locked_input(state: VestingState, quantity=None) -> TxIn:
    quantity = state.remaining() if quantity is None else quantity
    return TxIn(LOCKED_REF, TxOut(SCRIPT_ADDRESS, {TOKEN: quantity}, InlineDatum(state)))


def fee_input() -> TxIn:
    return TxIn(FEE_REF, TxOut(BENEFICIARY_ADDRESS, {OTHER_TOKEN: 5}))


def claim_snapshot(state: VestingState, amount: int, current_time: int,
                   signers=(BENEFICIARY,), paid=None, remaining=None, datum=None) -> TransactionSnapshot:
    """Well-formed claim transaction; keyword overrides break one part of it"""
    paid = amount if paid is None else paid
    remaining = state.remaining() - amount if remaining is None else remaining
    datum = InlineDatum(state.with_claimed(amount)) if datum is None else datum
    return TransactionSnapshot(
        inputs=[fee_input(), locked_input(state)],
        outputs=[
            TxOut(BENEFICIARY_ADDRESS, {TOKEN: paid}),
            TxOut(SCRIPT_ADDRESS, {TOKEN: remaining}, datum),
        ],
        validity_range=ValidityRange.from_time(current_time),
        signatories=frozenset(signers),
        purpose=ScriptPurpose.spend(LOCKED_REF),
    )


def refund_snapshot(state: VestingState, current_time: int, signers=(OWNER,),
                    locked=None, paid=None) -> TransactionSnapshot:
    paid = state.remaining() if paid is None else paid
    return TransactionSnapshot(
        inputs=[locked_input(state, locked)],
        outputs=[TxOut(OWNER_ADDRESS, {TOKEN: paid})],
        validity_range=ValidityRange.from_time(current_time),
        signatories=frozenset(signers),
        purpose=ScriptPurpose.spend(LOCKED_REF),
    )
