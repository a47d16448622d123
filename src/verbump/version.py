"""Version string classification and the "next version" computation.

Two grammars are accepted:

    strict:  decimal ``1.23`` or tuple ``v1.2.3`` (3+ parts), no underscores
    loose:   strict, plus a decimal with one underscore in its fraction (``1.002_003``)

A tuple with an underscore (``v1.2.3_4``) is never accepted.
"""
import re

STRICT = "strict"
LOOSE = "loose"
INVALID = "invalid"

STRICT_DECIMAL_RE = re.compile(r"\A\d+\.\d+\Z", re.ASCII)
STRICT_TUPLE_RE = re.compile(r"\Av\d+(?:\.\d+){2,}\Z", re.ASCII)
LOOSE_DECIMAL_RE = re.compile(r"\A\d+\.\d+_\d+\Z", re.ASCII)


class InvalidVersionError(ValueError):
    def __init__(self, version):
        self.version = version
        super().__init__(
            f"{version} is not an allowed version string (maybe you need 'allow_decimal_underscore')"
        )


def is_strict_version(version) -> bool:
    if not isinstance(version, str):
        return False
    return bool(STRICT_DECIMAL_RE.match(version) or STRICT_TUPLE_RE.match(version))


def is_loose_version(version) -> bool:
    if not isinstance(version, str):
        return False
    return is_strict_version(version) or bool(LOOSE_DECIMAL_RE.match(version))


def classify(version) -> str:
    if is_strict_version(version):
        return STRICT
    if is_loose_version(version):
        return LOOSE
    return INVALID


def is_allowed_version(version, allow_decimal_underscore=False) -> bool:
    if allow_decimal_underscore:
        return is_loose_version(version)
    return is_strict_version(version)


def _next_decimal(version: str) -> str:
    integer, fraction = version.split(".")
    underscore = fraction.find("_")
    digits = fraction.replace("_", "")
    # bump the whole thing as one integer so carries run into the integer part
    bumped = str(int(integer + digits) + 1).zfill(len(integer) + len(digits))
    integer, digits = bumped[: -len(digits)], bumped[-len(digits):]
    if underscore >= 0:
        digits = digits[:underscore] + "_" + digits[underscore:]
    return f"{integer}.{digits}"


def _next_tuple(version: str) -> str:
    parts = version[1:].split(".")
    parts[-1] = str(int(parts[-1]) + 1)
    return "v" + ".".join(parts)


def next_version(version: str) -> str:
    """
    Returns the version following ``version``.

    Decimals go up by one unit at their existing precision (``1.99`` -> ``2.00``),
    underscore decimals keep the underscore where it was (``1.002_003`` -> ``1.002_004``)
    and tuples only have their last part incremented (``v1.2.999`` -> ``v1.2.1000``).
    """
    if classify(version) == INVALID:
        raise ValueError(f"Can't compute the version after {version!r}")
    if version.startswith("v"):
        return _next_tuple(version)
    return _next_decimal(version)


def compute_next_version(version, allow_decimal_underscore=False) -> str:
    if not is_allowed_version(version, allow_decimal_underscore):
        raise InvalidVersionError(version)
    return next_version(version)
