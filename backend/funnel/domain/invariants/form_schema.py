from collections import Counter
from funnel.domain.exceptions import InvariantViolation


def assert_unique_field_keys(fields):
    counts = Counter(spec.field_key for spec in fields)
    duplicated = sorted(key for key, count in counts.items() if count > 1)

    if duplicated:
        raise InvariantViolation(
            f"Field keys must be unique per profile: {duplicated}"
        )


def assert_select_options(spec):
    if spec.type != "select" and spec.options:
        raise InvariantViolation(
            f"{spec.type} field '{spec.field_key}' must not carry options."
        )
