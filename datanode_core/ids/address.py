"""
Account address identity.

An AccountAddress is an opaque identifier for a data node or its owner,
issued by the surrounding ledger. Its canonical string form is fed verbatim
into record-hash derivation, so that form must never change between releases.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountAddress:
    """Opaque, string-comparable account address."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("AccountAddress requires a non-empty string")

    def __str__(self) -> str:
        return self.value
