"""Range of the INTEGER columns every id and number is stored in."""

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def ensure_int32(value: int, *, label: str) -> int:
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f'{label} is out of range')
    return value
