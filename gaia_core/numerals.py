"""
GaiaScript vector numerals.

A vector numeral is the marker ``⊗`` followed by glyphs from a ten-symbol
digit alphabet plus extension glyphs::

    ⊗∅ ⊗α ... ⊗ι      0 .. 9
    ⊗χ ⊗χα ⊗δχβ       10, 11, 42   (tens marker, optional unit digit)
    ⊗ψ ⊗ω ⊗Α ⊗Β       100, 1000, 10000, 100000
    ⊗π ⊗e ⊗φ ⊗∞       constants
    ⊗½ ⊗¼ ⊗¾ ⊗⅓ ⊗⅔    fractions
    ⊗⊤ ⊗⊥ ⊗◐ ⊗●      true, false, 50%, 100%
    ⊗⁻γ ⊗−αγε        -3, -135
    ⊗αγε ⊗β.ε         135, 2.5     (positional fallback)

Encoding only guarantees numeric equivalence for one encode/decode cycle:
the compact tens form covers 10-99, so larger values that are not powers
of ten come back through the positional form.
"""
import math
import re

from gaia_core.errors import DecodeError


MARKER = "⊗"
DIGITS = "∅αβγδεζηθι"
TENS = "χ"
SIGN_DIGIT = "⁻"
SIGN = "−"
POINT = "."

DIGIT_VALUES = {glyph: value for value, glyph in enumerate(DIGITS)}

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2

# (glyph, value, tolerance); None means exact
CONSTANTS = [
    ("∞", math.inf, None),
    ("π", math.pi, 1e-4),
    ("e", math.e, 1e-4),
    ("φ", GOLDEN_RATIO, 1e-3),
]

FRACTION_TOLERANCE = 1e-3
FRACTIONS = [
    ("½", 1 / 2),
    ("¼", 1 / 4),
    ("¾", 3 / 4),
    ("⅓", 1 / 3),
    ("⅔", 2 / 3),
]

BOOLEANS = {True: "⊤", False: "⊥"}
PERCENTAGES = {50: "◐", 100: "●"}
POWERS_OF_TEN = {100: "ψ", 1000: "ω", 10000: "Α", 100000: "Β"}

MAX_FRACTION_DIGITS = 10


def _build_reverse_table():
    table = {}
    for glyph, value in DIGIT_VALUES.items():
        table[MARKER + glyph] = value
    for glyph, value, _ in CONSTANTS:
        table[MARKER + glyph] = value
    for glyph, value in FRACTIONS:
        table[MARKER + glyph] = value
    for value, glyph in POWERS_OF_TEN.items():
        table[MARKER + glyph] = value
    for value, glyph in PERCENTAGES.items():
        table[MARKER + glyph] = value
    table[MARKER + BOOLEANS[True]] = 1
    table[MARKER + BOOLEANS[False]] = 0
    table[MARKER + "◯"] = 0
    table[MARKER + TENS] = 10
    return table


REVERSE_TABLE = _build_reverse_table()

# Glyphs that make up a whole numeral on their own, and glyphs that chain
SINGLE_GLYPHS = (
    "".join(glyph for glyph, _, _ in CONSTANTS)
    + "".join(glyph for glyph, _ in FRACTIONS)
    + BOOLEANS[True] + BOOLEANS[False] + "".join(PERCENTAGES.values()) + "◯"
)
RUN_GLYPHS = DIGITS + TENS + "".join(POWERS_OF_TEN.values()) + POINT + MARKER

# Constants never continue a run: "⊗δelse" is ⊗δ followed by "else"
VECTOR_NUMERAL = re.compile(
    re.escape(MARKER)
    + "[" + re.escape(SIGN_DIGIT + SIGN) + "]?"
    + "(?:[" + re.escape(SINGLE_GLYPHS) + "]|[" + re.escape(RUN_GLYPHS) + "]+)"
)


def _is_integral(value):
    return math.isfinite(value) and float(value).is_integer()


def encode(value):
    """
    Encode a number as a vector numeral.

    Args:
        value: int, float or bool

    Returns:
        The vector numeral text, e.g. ``encode(42) == "⊗δχβ"``.

    Raises:
        ValueError: for NaN, which has no vector form.
    """
    if isinstance(value, bool):
        return MARKER + BOOLEANS[value]
    if math.isnan(value):
        raise ValueError("NaN has no vector numeral form")

    # 1. Special constants
    for glyph, constant, tolerance in CONSTANTS:
        if tolerance is None:
            if value == constant:
                return MARKER + glyph
        elif abs(value - constant) < tolerance:
            return MARKER + glyph

    # 2. Common fractions
    for glyph, fraction in FRACTIONS:
        if abs(value - fraction) < FRACTION_TOLERANCE:
            return MARKER + glyph

    if _is_integral(value):
        number = int(value)

        # 3. Precomputed table
        if number in PERCENTAGES:
            return MARKER + PERCENTAGES[number]

        # 4. Single digit
        if 0 <= number <= 9:
            return MARKER + DIGITS[number]

        # 5. Single negative digit
        if -9 <= number <= -1:
            return MARKER + SIGN_DIGIT + DIGITS[-number]

        # 6. Tens composition
        if 10 <= number <= 99:
            tens, units = divmod(number, 10)
            left = "" if tens == 1 else DIGITS[tens]
            right = "" if units == 0 else DIGITS[units]
            return MARKER + left + TENS + right

        # 7. Powers of ten
        if number in POWERS_OF_TEN:
            return MARKER + POWERS_OF_TEN[number]

    # 8. Fallback
    if value < 0:
        return MARKER + SIGN + encode(-value)[len(MARKER):]
    return MARKER + _positional(value)


def _positional(value):
    if _is_integral(value):
        text = str(int(value))
    else:
        text = format(value, f".{MAX_FRACTION_DIGITS}f").rstrip("0").rstrip(".")
    return "".join(POINT if ch == "." else DIGITS[int(ch)] for ch in text)


def decode(text):
    """
    Decode a vector numeral back into a number.

    Integral results come back as ``int``; constants, fractions and
    fractional positional values as ``float``.

    Raises:
        DecodeError: when the marker prefix is missing or a glyph falls
            outside the vector alphabet.
    """
    if not isinstance(text, str) or not text.startswith(MARKER):
        raise DecodeError(str(text), str(text), reason=f"missing '{MARKER}' prefix")
    body = text[len(MARKER):]
    if not body:
        raise DecodeError(text, text, reason="empty numeral")

    # 1. Direct lookup
    if text in REVERSE_TABLE:
        return REVERSE_TABLE[text]

    # 2. Sign
    if body[0] in (SIGN, SIGN_DIGIT):
        rest = body[1:]
        if not rest:
            raise DecodeError(text, body[0], reason="sign without a value")
        return -decode(MARKER + rest)

    # 3. Tens composition
    if TENS in body:
        left, _, right = body.partition(TENS)
        tens = 1 if left == "" else _single_digit(text, left)
        units = 0 if right == "" else _single_digit(text, right)
        return tens * 10 + units

    # 4. Positional summation
    return _decode_positional(text, body.replace(MARKER, ""))


def _single_digit(text, part):
    if len(part) != 1 or part not in DIGIT_VALUES:
        raise DecodeError(text, part)
    return DIGIT_VALUES[part]


def _decode_positional(text, digits):
    whole = 0
    fraction = None
    seen = 0
    for ch in digits:
        if ch == POINT:
            if fraction is not None:
                raise DecodeError(text, ch, reason="more than one decimal point")
            fraction = ""
            continue
        if ch not in DIGIT_VALUES:
            raise DecodeError(text, ch)
        seen += 1
        if fraction is None:
            whole = whole * 10 + DIGIT_VALUES[ch]
        else:
            fraction += str(DIGIT_VALUES[ch])
    if seen == 0:
        raise DecodeError(text, digits or text, reason="no digits")
    if fraction:
        return float(f"{whole}.{fraction}")
    return whole
