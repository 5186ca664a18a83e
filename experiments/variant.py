from dataclasses import dataclass


@dataclass(frozen=True)
class Variant:
    """One named branch of a remote experiment; compared by value only."""

    value: str
