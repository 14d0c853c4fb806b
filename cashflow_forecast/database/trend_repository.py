"""
Trend Data Repository

Aggregates approved transactions into per-period income and expense totals.
Serves as the historical data provider for the forecaster.
"""

import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import case, func

from ..forecasting.validator import parse_date
from .models import Transaction

logger = logging.getLogger(__name__)

INTERVALS = ('day', 'week', 'month')


def _period_label(day: date, interval: str) -> str:
    if interval == 'month':
        return day.strftime('%Y-%m')
    if interval == 'week':
        return day.strftime('%Y-W%W')
    return day.isoformat()


class TrendDataRepository:
    """
    Income/expense totals per day, week or month.

    Example:
    ```python
    repository = TrendDataRepository(db.session)
    rows = repository.get_trend_data({"start_date": "2024-01-01"}, "day")
    # [{"period": "2024-01-01", "income": 1200.0, "expense": 300.0, "count": 4}, ...]
    ```
    """

    def __init__(
        self,
        session,
        income_types: Sequence[str] = ('income', 'receivable'),
        expense_types: Sequence[str] = ('expense',)
    ):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy session
            income_types: Transaction types counted as income
            expense_types: Transaction types counted as expense
        """
        self.session = session
        self.income_types = tuple(income_types)
        self.expense_types = tuple(expense_types)

    def get_trend_data(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        interval: str = 'day'
    ) -> List[Dict[str, Any]]:
        """
        Aggregate approved transactions per period.

        Args:
            filters: ``start_date``, ``end_date`` and ``category`` (all optional)
            interval: ``day``, ``week`` or ``month``

        Returns:
            Rows ordered by period ascending. Only periods with activity are
            returned; use ``fill_daily_gaps`` to get a contiguous daily series.
        """
        if interval not in INTERVALS:
            raise ValueError(f"Unsupported interval: {interval}")

        income = func.sum(case(
            (Transaction.type.in_(self.income_types), Transaction.amount),
            else_=0
        ))
        expense = func.sum(case(
            (Transaction.type.in_(self.expense_types), Transaction.amount),
            else_=0
        ))

        query = self.session.query(
            Transaction.transaction_date,
            income.label('income'),
            expense.label('expense'),
            func.count(Transaction.id).label('count')
        ).filter(Transaction.status == 'approved')

        query = self._apply_filters(query, filters or {})
        daily = query.group_by(Transaction.transaction_date)\
                     .order_by(Transaction.transaction_date.asc())\
                     .all()

        periods: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        for day, day_income, day_expense, count in daily:
            label = _period_label(day, interval)
            row = periods.setdefault(label, {
                "period": label,
                "income": 0.0,
                "expense": 0.0,
                "count": 0
            })
            row["income"] += float(day_income or 0)
            row["expense"] += float(day_expense or 0)
            row["count"] += int(count or 0)

        logger.debug(f"Trend data: {len(periods)} {interval} periods")
        return list(periods.values())

    def _apply_filters(self, query, filters: Mapping[str, Any]):
        start = parse_date(filters.get('start_date', filters.get('startDate')))
        end = parse_date(filters.get('end_date', filters.get('endDate')))

        if start is not None:
            query = query.filter(Transaction.transaction_date >= start.date())
        if end is not None:
            query = query.filter(Transaction.transaction_date <= end.date())
        if filters.get('category'):
            query = query.filter(Transaction.category == filters['category'])

        return query
