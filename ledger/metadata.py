"""
ledger.metadata — display metadata for a token (name, symbol, decimals).

Metadata is fixed at construction and never takes part in arithmetic:
`decimals` only tells user interfaces where to put the decimal point.

Conventions
-----------
- Names:    1..64 printable ASCII, mixed case allowed.
- Symbols:  1..11 printable ASCII, stored uppercased (e.g. "ANM").
- Decimals: 0..255, default 18.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidMetadata

DEFAULT_DECIMALS: int = 18


def is_printable_ascii(s: str) -> bool:
    """True iff `s` is non-empty and every char is printable ASCII (32..126)."""
    return bool(s) and all(32 <= ord(c) <= 126 for c in s)


@dataclass(frozen=True)
class TokenMetadata:
    name: str
    symbol: str
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not is_printable_ascii(self.name) or len(self.name) > 64:
            raise InvalidMetadata("name must be 1..64 printable ASCII characters", field_name="name")
        if not isinstance(self.symbol, str) or not is_printable_ascii(self.symbol) or len(self.symbol) > 11:
            raise InvalidMetadata("symbol must be 1..11 printable ASCII characters", field_name="symbol")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) or not 0 <= self.decimals <= 255:
            raise InvalidMetadata("decimals must be an int in [0, 255]", field_name="decimals")
        object.__setattr__(self, "symbol", self.symbol.upper())

    def format_amount(self, value: int) -> str:
        """Render a base-unit amount as a decimal string, e.g. 1500000 @ 6 → '1.5'."""
        if self.decimals == 0:
            return str(value)
        whole, frac = divmod(value, 10**self.decimals)
        frac_s = str(frac).rjust(self.decimals, "0").rstrip("0")
        return f"{whole}.{frac_s}" if frac_s else str(whole)


__all__ = ["DEFAULT_DECIMALS", "TokenMetadata", "is_printable_ascii"]
