"""
Database Models for Cash Flow Forecast

SQLAlchemy models for the transactions that daily forecast history is
aggregated from.
"""

import uuid
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def generate_uuid():
    return str(uuid.uuid4())


class Transaction(db.Model):
    """
    A single recorded money movement.

    Income-type and expense-type transactions are summed per day to build the
    historical series the forecaster works on.
    """
    __tablename__ = 'transactions'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)

    transaction_date = db.Column(db.Date, nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False)  # income, receivable, expense
    status = db.Column(db.String(20), default='approved')  # pending, approved, rejected
    category = db.Column(db.String(100))
    description = db.Column(db.String(500))
    amount = db.Column(db.Float, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'transaction_date': self.transaction_date.isoformat() if self.transaction_date else None,
            'type': self.type,
            'status': self.status,
            'category': self.category,
            'description': self.description,
            'amount': self.amount,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
