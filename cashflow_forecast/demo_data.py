"""
Demo Data Generator for Cash Flow Forecast

Generates realistic daily SMB transactions for demonstrations and testing.
Some days are left without activity so the gap-filling path is exercised.
"""

import random
import uuid
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

# Business profiles with realistic daily activity
BUSINESS_PROFILES = {
    "retail": {
        "name": "Retail",
        "daily_revenue": (800, 2500),
        "expense_ratio": (0.55, 0.75),
        "transactions_per_day": (3, 12),
        "growth_rate": (0.00, 0.06),       # annual
        "idle_probability": 0.05,          # chance of a day with no activity
        # Monday .. Sunday
        "weekday_factors": [0.85, 0.90, 0.95, 1.00, 1.15, 1.35, 0.80],
        "expense_categories": ["inventory", "rent", "utilities", "payroll", "marketing"],
    },
    "food_service": {
        "name": "Food Service",
        "daily_revenue": (500, 1800),
        "expense_ratio": (0.60, 0.80),
        "transactions_per_day": (8, 30),
        "growth_rate": (0.01, 0.05),
        "idle_probability": 0.08,
        "weekday_factors": [0.70, 0.80, 0.90, 1.00, 1.25, 1.45, 0.90],
        "expense_categories": ["ingredients", "payroll", "rent", "utilities", "packaging"],
    },
    "professional_services": {
        "name": "Professional Services",
        "daily_revenue": (1500, 6000),
        "expense_ratio": (0.40, 0.60),
        "transactions_per_day": (1, 4),
        "growth_rate": (0.02, 0.08),
        "idle_probability": 0.25,
        "weekday_factors": [1.10, 1.15, 1.10, 1.05, 1.00, 0.35, 0.25],
        "expense_categories": ["payroll", "rent", "software", "travel"],
    },
}


class DemoDataGenerator:
    """
    Generate demo transaction history.

    Example:
        generator = DemoDataGenerator(seed=42)

        # Ninety days of retail activity ending yesterday
        transactions = generator.generate_transactions("retail", days=90)
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize generator with optional random seed for reproducibility"""
        self.random = random.Random(seed)

    def generate_transactions(
        self,
        profile_name: str = "retail",
        days: int = 90,
        end_date: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """
        Generate daily income and expense transactions.

        Args:
            profile_name: Business profile (see BUSINESS_PROFILES)
            days: Number of days of history
            end_date: Last day of history (defaults to yesterday)

        Returns:
            Transaction dicts ordered by date
        """
        profile = BUSINESS_PROFILES.get(profile_name, BUSINESS_PROFILES["retail"])
        if end_date is None:
            end_date = date.today() - timedelta(days=1)
        start_date = end_date - timedelta(days=days - 1)

        base_revenue = self.random.uniform(*profile["daily_revenue"])
        expense_ratio = self.random.uniform(*profile["expense_ratio"])
        daily_growth = self.random.uniform(*profile["growth_rate"]) / 365

        transactions = []
        for offset in range(days):
            day = start_date + timedelta(days=offset)

            if self.random.random() < profile["idle_probability"]:
                continue

            # Apply weekday pattern and growth
            factor = profile["weekday_factors"][day.weekday()] * (1 + daily_growth * offset)
            revenue = base_revenue * factor * self.random.uniform(0.85, 1.15)
            expense = revenue * expense_ratio * self.random.uniform(0.80, 1.25)

            count = self.random.randint(*profile["transactions_per_day"])
            transactions.extend(self._split_amount(day, "income", "sales", revenue, count))

            category = self.random.choice(profile["expense_categories"])
            transactions.extend(self._split_amount(day, "expense", category, expense, max(1, count // 3)))

        return transactions

    def _split_amount(
        self,
        day: date,
        transaction_type: str,
        category: str,
        total: float,
        parts: int
    ) -> List[Dict[str, Any]]:
        """Split a daily total into several transactions"""
        weights = [self.random.uniform(0.5, 1.5) for _ in range(parts)]
        weight_sum = sum(weights)

        return [
            {
                "id": str(uuid.UUID(int=self.random.getrandbits(128), version=4)),
                "transaction_date": day.isoformat(),
                "type": transaction_type,
                "status": "approved",
                "category": category,
                "description": f"{category.replace('_', ' ').title()} #{i + 1}",
                "amount": round(total * w / weight_sum, 2)
            }
            for i, w in enumerate(weights)
        ]


def load_demo_data_to_db(db_session, profile_name: str = "retail", days: int = 90) -> int:
    """
    Load demo transactions directly into the database.

    Args:
        db_session: SQLAlchemy database session
        profile_name: Business profile to simulate
        days: Days of history

    Returns:
        Number of transactions created
    """
    from .database.models import Transaction

    generator = DemoDataGenerator(seed=42)  # Reproducible demos
    transactions = generator.generate_transactions(profile_name, days=days)

    for data in transactions:
        db_session.add(Transaction(
            id=data["id"],
            transaction_date=date.fromisoformat(data["transaction_date"]),
            type=data["type"],
            status=data["status"],
            category=data["category"],
            description=data["description"],
            amount=data["amount"]
        ))

    db_session.commit()
    return len(transactions)
