#!/usr/bin/env python3
"""
Walk-through of the linear vesting validator
"""

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
from linear_vesting.keys import VestingKey
from linear_vesting.predicate import VestingValidator
from linear_vesting.schedule import calculate_vested_amount
from linear_vesting.state import Claim, Refund, VestingState

TOKEN = AssetClass(policy_id=bytes.fromhex("aa" * 28), asset_name=b"VEST")
SCRIPT_ADDRESS = Address.from_script_hash(bytes.fromhex("5c" * 28))
LOCKED_REF = TxOutRef(tx_id=bytes.fromhex("01" * 32), index=0)


def locked_input(state: VestingState) -> TxIn:
    return TxIn(LOCKED_REF, TxOut(SCRIPT_ADDRESS, {TOKEN: state.remaining()}, InlineDatum(state)))


def claim_tx(state: VestingState, amount: int, current_time: int, signers) -> TransactionSnapshot:
    return TransactionSnapshot(
        inputs=[locked_input(state)],
        outputs=[
            TxOut(Address.from_key_hash(state.beneficiary), {TOKEN: amount}),
            TxOut(SCRIPT_ADDRESS, {TOKEN: state.remaining() - amount},
                  InlineDatum(state.with_claimed(amount))),
        ],
        validity_range=ValidityRange.from_time(current_time),
        signatories=signers,
        purpose=ScriptPurpose.spend(LOCKED_REF),
    )


def refund_tx(state: VestingState, current_time: int, signers) -> TransactionSnapshot:
    return TransactionSnapshot(
        inputs=[locked_input(state)],
        outputs=[TxOut(Address.from_key_hash(state.owner), {TOKEN: state.remaining()})],
        validity_range=ValidityRange.from_time(current_time),
        signatories=signers,
        purpose=ScriptPurpose.spend(LOCKED_REF),
    )


def report(label: str, result) -> None:
    is_valid, reason = result
    mark = "✅" if is_valid else "❌"
    print(f"{mark} {label}: {reason}")


def main():
    print("=" * 60)
    print("🔒 LINEAR VESTING VALIDATOR - DEMO")
    print("=" * 60)
    print()

    owner = VestingKey()
    beneficiary = VestingKey()
    print(f"✅ Owner key-hash:       {owner.key_hash.hex()}")
    print(f"✅ Beneficiary key-hash: {beneficiary.key_hash.hex()}")
    print()

    state = VestingState.create(
        owner=owner.key_hash,
        beneficiary=beneficiary.key_hash,
        start_time=1000,
        cliff_date=2000,
        end_date=3000,
        total_vesting_quantity=1000,
    )
    validator = VestingValidator(TOKEN)

    print("📈 Vesting schedule")
    print("-" * 40)
    for t in (999, 1500, 1999, 2000, 2500, 3000):
        print(f"   t={t}: {calculate_vested_amount(state, t)} vested")
    print()

    print("🧪 Scenarios")
    print("-" * 40)
    report("A claim 500 at 2500",
           validator.verify(state, Claim(500), claim_tx(state, 500, 2500, {beneficiary.key_hash})))
    report("B claim 100 at 1500",
           validator.verify(state, Claim(100), claim_tx(state, 100, 1500, {beneficiary.key_hash})))
    report("C refund at 999",
           validator.verify(state, Refund(), refund_tx(state, 999, {owner.key_hash})))
    report("D refund at 1000",
           validator.verify(state, Refund(), refund_tx(state, 1000, {owner.key_hash})))
    report("E claim 0 at 2500",
           validator.verify(state, Claim(0), claim_tx(state, 0, 2500, {beneficiary.key_hash})))
    report("F unsigned claim 500 at 2500",
           validator.verify(state, Claim(500), claim_tx(state, 500, 2500, set())))
    print()

    continued = state.with_claimed(500)
    print(f"📦 State after claim A: claimed {continued.claimed_quantity} of "
          f"{continued.total_vesting_quantity}")
    print(f"   CBOR: {continued.to_cbor_hex()}")


if __name__ == "__main__":
    main()
