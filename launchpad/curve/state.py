"""Runtime curve state snapshot."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurveState:
    """Snapshot of one curve's mutable state.

    The pricing engine only reads snapshots. New snapshots are produced by
    the trade transitions in launchpad.trading and committed by the caller.

    Attributes:
        tokens_sold: Cumulative whole tokens sold on the curve
        reserve: Settlement-currency base units held against sold tokens
        reference_price: Last known settlement coin price (price_scale units)
        is_graduated: One-way flag; trading on the curve stops once set
        total_volume: Settlement units traded in either direction
        trade_count: Number of committed trades
    """

    tokens_sold: int = 0
    reserve: int = 0
    reference_price: int = 0
    is_graduated: bool = False
    total_volume: int = 0
    trade_count: int = 0

    def __post_init__(self) -> None:
        for name in ("tokens_sold", "reserve", "reference_price", "total_volume", "trade_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"CurveState.{name} cannot be negative.")

    def remaining_supply(self, curve_supply: int) -> int:
        """Tokens still available to buy, never negative."""
        return max(0, curve_supply - self.tokens_sold)
