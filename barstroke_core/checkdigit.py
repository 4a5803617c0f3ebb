from __future__ import annotations

from .symbols import CHECK_MODULUS, check_symbol_for, check_weight


def weight_sum(text: str) -> int:
    return sum(check_weight(ch) for ch in text)


def check_digit(padded: str) -> str:
    """Return the modulus-19 check character for a padded message body.

    The next multiple of 19 strictly above the weight sum is taken; when
    the sum is already a multiple, the difference is 19, which wraps to
    the weight-0 symbol.
    """
    total = weight_sum(padded)
    multiple = total // CHECK_MODULUS * CHECK_MODULUS + CHECK_MODULUS
    return check_symbol_for((multiple - total) % CHECK_MODULUS)


def verify(message_with_check: str) -> bool:
    return weight_sum(message_with_check) % CHECK_MODULUS == 0
