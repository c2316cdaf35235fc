from .state import VestingState


def calculate_vested_amount(state: VestingState, current_time: int) -> int:
    """Quantity unlocked by the linear schedule at ``current_time``

    Nothing vests before the cliff and everything has vested at the end date.
    In between the amount grows linearly from ``start_time``, rounded down
    to a whole unit. A schedule whose end is not after its start releases everything
    from ``start_time`` on.
    """
    if current_time < state.cliff_date:
        return 0

    if current_time >= state.end_date:
        return state.total_vesting_quantity

    duration = state.end_date - state.start_time
    elapsed = current_time - state.start_time

    if duration > 0:
        # multiply before dividing; python ints do not overflow
        return (state.total_vesting_quantity * elapsed) // duration

    if current_time >= state.start_time:
        return state.total_vesting_quantity
    return 0


def available_to_claim(state: VestingState, current_time: int) -> int:
    """Vested amount not yet claimed"""
    return calculate_vested_amount(state, current_time) - state.claimed_quantity
