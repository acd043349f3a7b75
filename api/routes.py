import logging

from flask import Blueprint, current_app, jsonify

from services.errors import InvalidSymbolError, PulseWireError, error_response
from services.news import NewsService
from services.tickers import load_tickers

logger = logging.getLogger(__name__)

bp = Blueprint('api', __name__, url_prefix='/api')


def _service() -> NewsService:
    return current_app.extensions['news_service']


def _fail(e: Exception, upstream_category: str):
    if isinstance(e, PulseWireError):
        logger.warning(f"{e.__class__.__name__}: {e.message}")
    else:
        logger.exception("Unhandled error while serving news")
    body, status = error_response(e, upstream_category)
    return jsonify(body), status


@bp.get('/news')
def general_news():
    try:
        return jsonify(_service().get_general_news())
    except Exception as e:
        return _fail(e, 'Failed to fetch news')


@bp.get('/news/<symbol>')
def symbol_news(symbol):
    try:
        return jsonify(_service().get_symbol_news(symbol))
    except InvalidSymbolError as e:
        body, status = error_response(e)
        return jsonify(body), status
    except Exception as e:
        return _fail(e, 'Failed to fetch news/price')


@bp.get('/tickers')
def tickers():
    try:
        return jsonify(tickers=load_tickers(current_app.config.get('TICKERS_CSV')))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load ticker list: {e}")
        return jsonify(error='Internal server error', message='Ticker list unavailable'), 500
