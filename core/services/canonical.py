"""Label canonicalization for alias lookup."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def canonicalize(label: str) -> str:
    """Lowercase a label and drop everything outside ``[a-z0-9]``.

    ``"Blood Pressure"``, ``"blood_pressure"`` and ``"BLOODPRESSURE"`` all become
    ``"bloodpressure"``. Any string, including ``""``, is accepted.
    """
    return _NON_ALNUM.sub("", label.lower())
