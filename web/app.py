"""
Cash Flow Forecast - Flask Web Application

JSON API for daily cashflow, revenue and expense forecasts.
"""

import os
import sys
import logging
from datetime import date, datetime, timedelta
from flask import Flask, request, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import get_config
from cashflow_forecast.database.models import db, Transaction
from cashflow_forecast.database.trend_repository import TrendDataRepository
from cashflow_forecast.forecasting import (
    CashFlowForecaster,
    ForecastConfig,
    ForecastMetric,
    InsufficientDataFailure,
    ValidationFailure,
    calculate_accuracy
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _parse_int(value):
    """int(value), or the raw value so validation can report it"""
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def _parse_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# =============================================================================
# App Factory
# =============================================================================

def create_app(config_class=None):
    """Create Flask application"""
    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        config_class = get_config()
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)

    # Rate limiting
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[app.config['RATELIMIT_DEFAULT']]
    )
    # Flask-Limiter only keeps a weak reference to its limiter
    app.limiter = limiter

    # Create tables
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    forecast_config = ForecastConfig.from_settings(app.config)

    def _get_forecaster():
        repository = TrendDataRepository(
            db.session,
            income_types=app.config['INCOME_TRANSACTION_TYPES'],
            expense_types=app.config['EXPENSE_TRANSACTION_TYPES']
        )
        return CashFlowForecaster(repository, config=forecast_config)

    def _history_filters(args):
        """Filters from query args, defaulting to the configured lookback window"""
        today = date.today()
        filters = {
            'start_date': args.get(
                'start_date',
                (today - timedelta(days=app.config['FORECAST_HISTORY_DAYS'])).isoformat()
            ),
            'end_date': args.get('end_date', today.isoformat()),
        }
        if args.get('category'):
            filters['category'] = args['category']
        return filters

    # =============================================================================
    # API Routes - Forecasting
    # =============================================================================

    @app.route('/api/forecast/<metric>', methods=['GET'])
    @limiter.limit(lambda: app.config['FORECAST_RATE_LIMIT'])
    def api_forecast(metric):
        """Generate a forecast for cashflow, revenue or expense"""
        try:
            metric_enum = ForecastMetric(metric)
        except ValueError:
            return jsonify({'error': f'Unknown forecast type: {metric}'}), 404

        horizon_days = _parse_int(request.args.get('days', app.config['FORECAST_DEFAULT_HORIZON']))

        options = {}
        if 'method' in request.args:
            options['method'] = request.args['method']
        if 'smoothing_alpha' in request.args:
            options['smoothing_alpha'] = _parse_float(request.args['smoothing_alpha'])
        if 'moving_window' in request.args:
            options['moving_window'] = _parse_int(request.args['moving_window'])

        try:
            result = _get_forecaster().forecast(
                metric_enum,
                _history_filters(request.args),
                horizon_days,
                options
            )
        except ValidationFailure as e:
            return jsonify({'error': 'Validation failed', 'errors': e.errors}), 400
        except InsufficientDataFailure as e:
            return jsonify({
                'error': str(e),
                'minimum': e.minimum,
                'actual': e.actual
            }), 422

        return jsonify({
            'success': True,
            'forecast': result.to_dict()
        })

    @app.route('/api/forecast/accuracy', methods=['POST'])
    def api_forecast_accuracy():
        """Score predicted values against actuals (back-testing)"""
        data = request.json or {}
        actual = data.get('actual')
        predicted = data.get('predicted')

        if not isinstance(actual, list) or not isinstance(predicted, list):
            return jsonify({'error': 'actual and predicted lists required'}), 400

        if not all(_is_number(v) for v in actual + predicted):
            return jsonify({'error': 'actual and predicted must be numeric'}), 400

        accuracy = calculate_accuracy(actual, predicted)
        return jsonify({'accuracy': round(accuracy, 2)})

    # =============================================================================
    # API Routes - Transactions
    # =============================================================================

    @app.route('/api/transactions', methods=['POST'])
    def api_create_transaction():
        """Record a transaction"""
        data = request.json or {}

        try:
            transaction = Transaction(
                transaction_date=datetime.strptime(data.get('transaction_date', ''), '%Y-%m-%d').date(),
                type=data['type'],
                status=data.get('status', 'approved'),
                category=data.get('category'),
                description=data.get('description'),
                amount=float(data['amount'])
            )
        except (KeyError, TypeError, ValueError):
            return jsonify({
                'error': 'transaction_date (YYYY-MM-DD), type and numeric amount required'
            }), 400

        db.session.add(transaction)
        db.session.commit()

        logger.info(f"Recorded {transaction.type} transaction of {transaction.amount}")
        return jsonify({
            'success': True,
            'transaction': transaction.to_dict()
        }), 201

    @app.route('/api/trend', methods=['GET'])
    def api_trend():
        """Income/expense totals per day, week or month"""
        interval = request.args.get('interval', 'day')
        repository = TrendDataRepository(
            db.session,
            income_types=app.config['INCOME_TRANSACTION_TYPES'],
            expense_types=app.config['EXPENSE_TRANSACTION_TYPES']
        )

        try:
            rows = repository.get_trend_data(_history_filters(request.args), interval)
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        return jsonify({'interval': interval, 'periods': rows})

    # =============================================================================
    # Error Handlers
    # =============================================================================

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({'error': 'Forecast limit reached', 'detail': str(e.description)}), 429

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f"Server error: {e}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'True').lower() == 'true'
    app.run(debug=debug, port=port, host='0.0.0.0')
