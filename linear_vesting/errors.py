"""
Rejection labels raised by the vesting validator.

Each class is one fatal outcome of a single validation call. The class name
doubles as the diagnostic label reported off-chain.
"""


class VestingError(Exception):
    """Base class for every validator rejection"""

    @property
    def label(self) -> str:
        return type(self).__name__


class MissingState(VestingError):
    pass


class InvalidPurpose(VestingError):
    pass


class UnknownAction(VestingError):
    pass


class NonFiniteLowerBound(VestingError):
    pass


# Claim path

class NonPositiveClaimAmount(VestingError):
    pass


class MissingBeneficiarySignature(VestingError):
    pass


class BeforeCliff(VestingError):
    pass


class ExceedsAvailableVested(VestingError):
    pass


class OwnInputNotFound(VestingError):
    pass


class UnderpaidBeneficiary(VestingError):
    pass


class MissingContinuation(VestingError):
    pass


class InsufficientRemainingQuantity(VestingError):
    pass


class WrongStateRepresentation(VestingError):
    pass


class ImmutableFieldMismatch(VestingError):
    pass


class ClaimedQuantityMismatch(VestingError):
    pass


# Refund path

class MissingOwnerSignature(VestingError):
    pass


class NotBeforeStart(VestingError):
    pass


class WrongRefundInputQuantity(VestingError):
    pass


class UnderpaidOwner(VestingError):
    pass
