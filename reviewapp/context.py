import concurrent.futures
import logging
import random
import threading
from typing import Any, List, Mapping, Optional

from reviewapp.nlp.model import SentimentModel
from reviewapp.utils.review_loader import ReviewSourceError, load_reviews, pick_review
from reviewapp.utils.sheets_logger import SheetsLogger

logger = logging.getLogger(__name__)

EXTENSION_KEY = "review_context"


class ReviewContext:
    """State shared by the request handlers of one Flask app.

    Owns the review pool, the sentiment model and the sheets logger, plus the
    thread pool both background jobs (model loading, logging) run on.
    """

    def __init__(self, model: SentimentModel, sheets: SheetsLogger,
                 executor: concurrent.futures.ThreadPoolExecutor,
                 rng: Optional[random.Random] = None) -> None:
        self.model = model
        self.sheets = sheets
        self.executor = executor
        self.rng = rng or random.Random()
        self.reviews_error: Optional[str] = None
        self._reviews: List[str] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ReviewContext":
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=int(config.get("LOG_WORKERS", 2)))
        model = SentimentModel(
            backend=config.get("SENTIMENT_BACKEND", "transformers"),
            model_name=config.get("SENTIMENT_MODEL", ""),
            model_path=config.get("MODEL_PATH", ""),
        )
        sheets = SheetsLogger(config.get("SHEETS_WEB_APP_URL"), executor, float(config.get("SHEETS_TIMEOUT", 10.0)))
        return cls(model, sheets, executor)

    @property
    def reviews(self) -> List[str]:
        with self._lock:
            return list(self._reviews)

    def set_reviews(self, reviews: List[str]) -> None:
        with self._lock:
            self._reviews = list(reviews)
            self.reviews_error = None

    def load_reviews(self, source: Any) -> int:
        """Replace the pool from a TSV path or file object; returns the new size."""
        try:
            reviews = load_reviews(source)
        except ReviewSourceError as e:
            logger.error("TSV load error: %s", e)
            with self._lock:
                self.reviews_error = str(e)
            raise
        self.set_reviews(reviews)
        return len(reviews)

    def random_review(self) -> str:
        with self._lock:
            return pick_review(self._reviews, self.rng)
