"""
Conversion between Western digits (0-9) and Arabic-Indic digits (٠-٩).

Used when rendering verse numbers, dates and prayer times in Arabic script.
Every character outside the ten digits is copied unchanged in both
directions, so signs, decimal points and separators survive a round trip.
"""

WESTERN_DIGITS = '0123456789'
ARABIC_INDIC_DIGITS = '٠١٢٣٤٥٦٧٨٩'

_TO_ARABIC_INDIC = str.maketrans(WESTERN_DIGITS, ARABIC_INDIC_DIGITS)
_TO_WESTERN = str.maketrans(ARABIC_INDIC_DIGITS, WESTERN_DIGITS)


def to_locale_digits(value):
    """
    Renders a number or string with Arabic-Indic digits.

    Args:
        value (int | float | str): The value to convert. Numbers use their
            normal decimal text, e.g. ``12.5`` becomes ``'١٢.٥'``.

    Returns:
        str: The converted text.
    """
    return str(value).translate(_TO_ARABIC_INDIC)


def from_locale_digits(value):
    """Replaces every Arabic-Indic digit in ``value`` with its Western digit."""
    return str(value).translate(_TO_WESTERN)


# Names used by the template filters.
to_arabic_numerals = to_locale_digits
from_arabic_numerals = from_locale_digits
