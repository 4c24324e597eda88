"""
Domain service: Portfolio tracker.

Holdings are derived from completed purchases. Each purchase is its own
row; positions in the same symbol are not merged and sells do not reduce
quantities.
"""

from decimal import Decimal

from tradedesk.domain.brokerage.entities import PortfolioEntry
from tradedesk.domain.brokerage.errors import InvalidAmountError
from tradedesk.domain.brokerage.ports import PortfolioRepository


class PortfolioTracker:
    """Records and lists portfolio holdings."""

    def __init__(self, portfolio: PortfolioRepository) -> None:
        self._portfolio = portfolio

    def list_for_user(self, user_id: int) -> list[PortfolioEntry]:
        return self._portfolio.list_for_user(user_id)

    def record_buy(
        self,
        user_id: int,
        asset_symbol: str,
        asset_type: str,
        quantity: Decimal,
        price: Decimal,
    ) -> PortfolioEntry:
        """Append a holding for a purchase.

        Raises:
            InvalidAmountError: If quantity or price is not positive.
        """
        if quantity <= 0:
            raise InvalidAmountError("quantity", quantity)
        if price <= 0:
            raise InvalidAmountError("price", price)

        return self._portfolio.add(
            PortfolioEntry(
                user_id=user_id,
                asset_symbol=asset_symbol.upper(),
                asset_type=asset_type,
                quantity=quantity,
                average_price=price,
            )
        )
