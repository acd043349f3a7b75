import logging

from flask import Flask, render_template, jsonify, request
from flask_cors import CORS

from api.routes import bp as api_bp
from services.finnhub import FinnhubClient
from services.news import NewsService
from utils.cache import CacheStore
from utils.config import load_config
from utils.log import configure_logging

logger = logging.getLogger(__name__)


def create_app(config=None, store=None, client=None):
    """
    Build the app. ``store`` and ``client`` default to a fresh CacheStore and
    a FinnhubClient built from the environment; both live as long as the app.
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    if not app.config.get('TESTING'):
        configure_logging(app.config.get('LOG_LEVEL', 'INFO'))

    CORS(app)

    if client is None:
        client = FinnhubClient(
            api_key=app.config.get('FINNHUB_API_KEY'),
            base_url=app.config['FINNHUB_BASE_URL'],
            timeout=app.config.get('UPSTREAM_TIMEOUT'),
        )
        if not client.configured:
            logger.warning('FINNHUB_API_KEY environment variable is not set')
    app.extensions['cache_store'] = store if store is not None else CacheStore()
    app.extensions['news_service'] = NewsService(app.extensions['cache_store'], client)

    app.register_blueprint(api_bp)

    @app.get('/')
    def index():
        return render_template('index.html')

    @app.get('/health')
    def health():
        return {'status': 'ok'}

    # Return JSON for API errors so the frontend never sees HTML
    @app.errorhandler(404)
    def handle_404(e):
        if request.path.startswith('/api/'):
            return jsonify(error='Not found', message=f'No route for {request.path}'), 404
        return e, 404

    @app.errorhandler(500)
    def handle_500(e):
        if request.path.startswith('/api/'):
            return jsonify(error='Internal server error', message='An unexpected error occurred'), 500
        return e, 500

    return app


app = create_app()

if __name__ == '__main__':
    app.run(host='127.0.0.1', port=app.config['PORT'], debug=True)
