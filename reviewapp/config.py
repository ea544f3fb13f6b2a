import os

from reviewapp.nlp.model import MODEL_PATH as DEFAULT_MODEL_PATH

class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 5 * 1024 * 1024))  # 5MB
    # review pool loaded at startup (tab-separated, needs a `text` column)
    REVIEWS_PATH = os.environ.get("REVIEWS_PATH", "reviews_test.tsv")
    # sentiment model: "transformers" (HF pipeline) or "sklearn" (joblib file at MODEL_PATH)
    SENTIMENT_BACKEND = os.environ.get("SENTIMENT_BACKEND", "transformers")
    SENTIMENT_MODEL = os.environ.get("SENTIMENT_MODEL", "distilbert-base-uncased-finetuned-sst-2-english")
    MODEL_PATH = os.environ.get("MODEL_PATH", DEFAULT_MODEL_PATH)
    LOAD_MODEL = os.environ.get("LOAD_MODEL", "1") == "1"
    # Google Apps Script web app receiving the interaction log; empty disables logging
    SHEETS_WEB_APP_URL = os.environ.get("SHEETS_WEB_APP_URL", "")
    SHEETS_TIMEOUT = float(os.environ.get("SHEETS_TIMEOUT", "10.0"))
    LOG_WORKERS = int(os.environ.get("LOG_WORKERS", "2"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    TESTING = False
    LOG_LEVEL = "DEBUG"

class TestingConfig(BaseConfig):
    DEBUG = False
    TESTING = True
    LOG_LEVEL = "WARNING"
    LOAD_MODEL = False
    SHEETS_WEB_APP_URL = ""

class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    LOG_LEVEL = "INFO"
