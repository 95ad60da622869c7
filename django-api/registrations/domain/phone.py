"""Phone number normalization.

Free-form user input is reduced to ``+<country code><national number>``.
Users frequently type the country code themselves (sometimes mangled), and
the national trunk ``0`` is often left in front, so both are stripped before
the default country code is applied.
"""

import unicodedata
from collections.abc import Iterable

from registrations.domain.errors import InvalidPhoneError
from registrations.domain.value_objects import PhoneNumber

MIN_DIGITS = 8
MAX_DIGITS = 15

# Observed mistypings of the Ghana code on top of the generic forms.
_KNOWN_PREFIXES: dict[str, tuple[str, ...]] = {
    "233": ("2633",),
}


def _ascii_digits(raw: str) -> str:
    # Fullwidth and other Unicode decimal digits fold to their ASCII value.
    return "".join(str(unicodedata.decimal(ch)) for ch in raw if ch.isdecimal())


def redundant_prefixes_for(country_code: str) -> tuple[str, ...]:
    """Return the prefixes treated as a duplicated country code, longest first."""
    prefixes = {
        f"000{country_code}",
        f"00{country_code}",
        f"0{country_code}",
        country_code,
        *_KNOWN_PREFIXES.get(country_code, ()),
    }
    return tuple(sorted(prefixes, key=lambda p: (-len(p), p)))


def normalize_phone(
    raw: str,
    default_country_code: str,
    redundant_prefixes: Iterable[str] | None = None,
) -> str:
    """Normalize ``raw`` into canonical international form.

    Raises:
        InvalidPhoneError: If no digits remain, the national part still
            starts with 0 after one trunk 0 is removed, or the digit count
            after the ``+`` falls outside 8-15.
    """
    digits = _ascii_digits(raw or "")
    if not digits:
        raise InvalidPhoneError("Invalid phone number")

    if redundant_prefixes is None:
        prefixes = redundant_prefixes_for(default_country_code)
    else:
        prefixes = tuple(sorted(redundant_prefixes, key=len, reverse=True))

    for prefix in prefixes:
        if prefix and digits.startswith(prefix):
            digits = digits[len(prefix):]
            break

    if digits.startswith("0"):
        digits = digits[1:]
    # A national number never starts with 0 once the trunk prefix is gone.
    if digits.startswith("0"):
        raise InvalidPhoneError()

    normalized = f"+{default_country_code}{digits}"
    if not MIN_DIGITS <= len(normalized) - 1 <= MAX_DIGITS:
        raise InvalidPhoneError()
    return normalized


def parse_phone(
    raw: str,
    default_country_code: str,
    redundant_prefixes: Iterable[str] | None = None,
) -> PhoneNumber:
    """Like ``normalize_phone`` but returns a ``PhoneNumber``."""
    return PhoneNumber(normalize_phone(raw, default_country_code, redundant_prefixes))
