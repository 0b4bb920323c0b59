from funnel.domain.exceptions import InvariantViolation

ORDER_STEP = 10


def assert_clean_sequence(entries):
    indices = [entry.order_index for entry in entries]
    if not indices:
        return

    expected = [ORDER_STEP * n for n in range(1, len(indices) + 1)]
    if indices != expected:
        raise InvariantViolation(
            f"Order indices are not a clean sequence of step {ORDER_STEP}: {indices}"
        )
