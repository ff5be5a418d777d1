"""Quote result types."""

from dataclasses import dataclass
from enum import Enum


class TradeSide(str, Enum):
    """Direction of a trade against the curve."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Quote:
    """Price of one prospective trade.

    Quotes are produced fresh per call and never cached, because the curve
    state may move between quoting and execution.

    Attributes:
        side: Buy or sell
        amount: Whole tokens traded
        cost_or_proceeds: Settlement units paid (buy) or received (sell)
        spot_price: Settlement units per token at the start of the priced interval
        slippage_bps: Average price over spot price, in basis points
        tokens_sold: Curve position the quote was computed from

    Examples:
        quote = engine.quote_buy(state, config, 1_000_000, sol_price)
        if quote.cost_or_proceeds <= max_cost:
            new_state = apply_buy(state, config, quote)
    """

    side: TradeSide
    amount: int
    cost_or_proceeds: int
    spot_price: int
    slippage_bps: int
    tokens_sold: int

    @property
    def is_buy(self) -> bool:
        return self.side == TradeSide.BUY

    @property
    def average_price(self) -> int:
        """Settlement units per token, truncated."""
        return self.cost_or_proceeds // self.amount
