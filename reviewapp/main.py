import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env automatically so `flask run`
# picks them up without requiring the user to export them manually.
load_dotenv()
from typing import cast, MutableMapping, Any
from flask import Flask
from reviewapp.routes import main as routes
from reviewapp.config import DevelopmentConfig, ProductionConfig, TestingConfig
from reviewapp.context import EXTENSION_KEY, ReviewContext
from reviewapp.utils.review_loader import ReviewSourceError

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__)
    # load config by env var APP_CONFIG (development|production|testing)
    cfg = (config_name or os.environ.get("APP_CONFIG", "development")).lower()
    if cfg == "production":
        app.config.from_object(ProductionConfig)
    elif cfg == "testing":
        app.config.from_object(TestingConfig)
    else:
        app.config.from_object(DevelopmentConfig)
    app.config['APP_CONFIG'] = cfg
    # The config classes read os.environ at import time, which can be stale
    # when the Flask CLI imports us before the environment is final.
    if cfg != "testing":
        app.config['LOAD_MODEL'] = os.environ.get('LOAD_MODEL', '1') == '1'
        app.config['SHEETS_WEB_APP_URL'] = os.environ.get('SHEETS_WEB_APP_URL', app.config.get('SHEETS_WEB_APP_URL', ''))

    config: MutableMapping[str, Any] = cast(MutableMapping[str, Any], app.config)
    level_name = cast(str, config.get("LOG_LEVEL", "INFO"))
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level)
    app.logger.setLevel(level)

    app.register_blueprint(routes)

    ctx = ReviewContext.from_config(config)
    app.extensions[EXTENSION_KEY] = ctx

    reviews_path = config.get("REVIEWS_PATH")
    if reviews_path:
        try:
            ctx.load_reviews(reviews_path)
        except ReviewSourceError:
            # surfaced to the UI through /status and /analyze
            app.logger.warning("review pool is empty; upload a TSV via /reviews")

    if config.get("LOAD_MODEL"):
        ctx.model.load_async(ctx.executor)
    else:
        app.logger.debug("LOAD_MODEL disabled; sentiment model not loaded")
    return app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    # choose host via env; default to localhost for safety
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    app.run(host=host, port=port, debug=debug)
