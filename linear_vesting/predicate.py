import logging
from typing import Optional

from .context import (
    Address,
    AssetClass,
    InlineDatum,
    PurposeKind,
    TransactionSnapshot,
    TxOutRef,
    find_continuing_output,
    find_own_input,
    quantity_of,
    sum_sent_to,
)
from .errors import (
    BeforeCliff,
    ClaimedQuantityMismatch,
    ExceedsAvailableVested,
    ImmutableFieldMismatch,
    InsufficientRemainingQuantity,
    InvalidPurpose,
    MissingBeneficiarySignature,
    MissingContinuation,
    MissingOwnerSignature,
    MissingState,
    NonFiniteLowerBound,
    NonPositiveClaimAmount,
    NotBeforeStart,
    OwnInputNotFound,
    UnderpaidBeneficiary,
    UnderpaidOwner,
    UnknownAction,
    VestingError,
    WrongRefundInputQuantity,
    WrongStateRepresentation,
)
from .schedule import calculate_vested_amount
from .state import Action, Claim, Refund, VestingState, decode_action

logger = logging.getLogger(__name__)


class VestingValidator:
    """Spend predicate guarding a balance of one asset under a linear vesting schedule

    The governed asset is fixed when the validator is built. Every check raises
    its own ``VestingError`` subclass and the first failure ends evaluation.
    """

    def __init__(self, asset: AssetClass):
        self.asset = asset

    def validate(self, state: Optional[VestingState], action: Action,
                 snapshot: TransactionSnapshot) -> Action:
        """Raise the first violated check, return the decoded action when the spend is legal"""
        purpose = snapshot.purpose
        if purpose.kind is not PurposeKind.SPEND or purpose.out_ref is None:
            raise InvalidPurpose(f"Script cannot run as {purpose.kind.value}")

        if state is None:
            raise MissingState("Spent output carries no vesting state")
        state = VestingState.decode(state)
        action = decode_action(action)

        if isinstance(action, Claim):
            self.validate_claim(state, action.amount_to_claim, purpose.out_ref, snapshot)
        elif isinstance(action, Refund):
            self.validate_refund(state, purpose.out_ref, snapshot)
        else:
            raise UnknownAction(f"Unsupported action {type(action).__name__}")
        return action

    def verify(self, state: Optional[VestingState], action: Action,
               snapshot: TransactionSnapshot) -> tuple[bool, str]:
        """
        Evaluate the spend for off-chain diagnostics
        Returns (is_valid, reason) where reason is the rejection label on failure
        """
        try:
            action = self.validate(state, action, snapshot)
        except VestingError as e:
            logger.debug("Vesting spend rejected: %s (%s)", e.label, e)
            return False, e.label

        logger.debug("Vesting spend approved: %s", type(action).__name__)
        return True, f"{type(action).__name__} approved"

    def is_valid(self, state: Optional[VestingState], action: Action,
                 snapshot: TransactionSnapshot) -> bool:
        """Boolean result handed back to the host"""
        is_valid, _ = self.verify(state, action, snapshot)
        return is_valid

    def validate_claim(self, state: VestingState, amount_to_claim: int,
                       own_ref: TxOutRef, snapshot: TransactionSnapshot) -> None:
        """Beneficiary withdraws vested tokens and re-locks the rest"""
        current_time = self._current_time(snapshot)

        if amount_to_claim <= 0:
            raise NonPositiveClaimAmount(f"Claim amount must be positive, got {amount_to_claim}")

        if state.beneficiary not in snapshot.signatories:
            raise MissingBeneficiarySignature("Transaction not signed by beneficiary")

        if current_time < state.cliff_date:
            raise BeforeCliff(
                f"Cliff not reached: {state.cliff_date - current_time} ms remaining"
            )

        vested_now = calculate_vested_amount(state, current_time)
        available = vested_now - state.claimed_quantity
        if amount_to_claim > available:
            raise ExceedsAvailableVested(
                f"Claim {amount_to_claim} exceeds available {available} "
                f"(vested {vested_now}, claimed {state.claimed_quantity})"
            )

        own_input = find_own_input(snapshot, own_ref)
        if own_input is None:
            raise OwnInputNotFound("Spent output is not among the transaction inputs")

        beneficiary_address = Address.from_key_hash(state.beneficiary)
        paid = sum_sent_to(snapshot, beneficiary_address, self.asset)
        if paid < amount_to_claim:
            raise UnderpaidBeneficiary(f"Beneficiary receives {paid}, needs {amount_to_claim}")

        continuing_output = find_continuing_output(snapshot, own_ref)
        if continuing_output is None:
            raise MissingContinuation("No output returns to the vesting address")

        input_qty = quantity_of(own_input.value, self.asset)
        output_qty = quantity_of(continuing_output.value, self.asset)
        if output_qty < input_qty - amount_to_claim:
            raise InsufficientRemainingQuantity(
                f"Continuation locks {output_qty}, needs {input_qty - amount_to_claim}"
            )

        if not isinstance(continuing_output.datum, InlineDatum):
            raise WrongStateRepresentation(
                f"Continuation carries {type(continuing_output.datum).__name__}, expected inline state"
            )
        new_state = VestingState.decode(continuing_output.datum.data)

        if new_state.schedule_fields() != state.schedule_fields():
            raise ImmutableFieldMismatch("Continuation changes the vesting schedule")

        expected_claimed = state.claimed_quantity + amount_to_claim
        if new_state.claimed_quantity != expected_claimed:
            raise ClaimedQuantityMismatch(
                f"Continuation records {new_state.claimed_quantity} claimed, expected {expected_claimed}"
            )

    def validate_refund(self, state: VestingState, own_ref: TxOutRef,
                        snapshot: TransactionSnapshot) -> None:
        """Owner takes back the whole balance before vesting starts"""
        current_time = self._current_time(snapshot)

        if state.owner not in snapshot.signatories:
            raise MissingOwnerSignature("Transaction not signed by owner")

        if current_time >= state.start_time:
            raise NotBeforeStart(
                f"Refund window closed at {state.start_time}, transaction starts at {current_time}"
            )

        own_input = find_own_input(snapshot, own_ref)
        if own_input is None:
            raise OwnInputNotFound("Spent output is not among the transaction inputs")

        # exact match, unlike the at-least checks on claims
        expected = state.remaining()
        input_qty = quantity_of(own_input.value, self.asset)
        if input_qty != expected:
            raise WrongRefundInputQuantity(f"Locked input holds {input_qty}, state expects {expected}")

        owner_address = Address.from_key_hash(state.owner)
        paid = sum_sent_to(snapshot, owner_address, self.asset)
        if paid < expected:
            raise UnderpaidOwner(f"Owner receives {paid}, needs {expected}")

    @staticmethod
    def _current_time(snapshot: TransactionSnapshot) -> int:
        lower = snapshot.validity_range.lower
        if not lower.is_finite:
            raise NonFiniteLowerBound("Validity range must start at a finite time")
        return lower.time
