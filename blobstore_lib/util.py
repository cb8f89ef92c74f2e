import re

from blobstore_lib.errors import ConfigError

# Seconds per unit, mirroring the unit suffixes accepted by Go's time.ParseDuration.
_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Parse a duration string such as ``"10s"``, ``"1m30s"`` or ``"250ms"``.

    Returns the duration in seconds. The bare value ``"0"`` is accepted
    without a unit; every other component needs one. Raises `ConfigError`
    naming the offending value when the text is malformed.
    """
    if not isinstance(text, str):
        raise ConfigError(f"invalid duration {text!r}: expected a string")
    s = text
    sign = 1.0
    if s[:1] in ("+", "-"):
        if s[0] == "-":
            sign = -1.0
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise ConfigError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(s):
        m = _COMPONENT.match(s, pos)
        if m is None:
            raise ConfigError(f"invalid duration {text!r}")
        total += float(m.group(1)) * _UNITS[m.group(2)]
        pos = m.end()
    return sign * total
