from typing import Any, Callable, Dict, List, Optional, Union
import concurrent.futures
import logging
import os
import threading

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB
import joblib  # type: ignore
import numpy as np
from scipy.sparse import spmatrix  # type: ignore

MODEL_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "sentiment_model.pkl"))
DEFAULT_TRANSFORMERS_MODEL = "distilbert-base-uncased-finetuned-sst-2-english"

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_FAILED = "failed"

logger = logging.getLogger(__name__)

Predictor = Callable[[str], Any]


class ModelNotReadyError(RuntimeError):
    pass


class InvalidModelOutputError(RuntimeError):
    pass


class ReviewSentimentClassifier:
    """Bag-of-words Naive Bayes sentiment model.

    Persisted with joblib as a dict holding the fitted vectorizer, the
    classifier and its class labels.

    Labels are whatever the training data uses (normally POSITIVE/NEGATIVE).
    """

    vectorizer: CountVectorizer
    classifier: MultinomialNB
    is_trained: bool

    def __init__(self) -> None:
        self.vectorizer = CountVectorizer()
        self.classifier = MultinomialNB()
        self.is_trained = False

    def train(self, reviews: List[str], labels: List[str]) -> None:
        review_vectors: Union[np.ndarray, spmatrix] = self.vectorizer.fit_transform(reviews)
        self.classifier.fit(review_vectors, [str(lbl).upper() for lbl in labels])
        self.is_trained = True

    def predict(self, review: str) -> List[Dict[str, Any]]:
        """Return `[{"label": ..., "score": ...}]` for the most probable class."""
        if not getattr(self, "is_trained", False):
            raise RuntimeError("Classifier is not trained yet.")
        review_vector: spmatrix = self.vectorizer.transform([review])
        probabilities = self.classifier.predict_proba(review_vector)[0]
        best = int(np.argmax(probabilities))
        return [{"label": str(self.classifier.classes_[best]), "score": float(probabilities[best])}]

    def __call__(self, review: str) -> List[Dict[str, Any]]:
        return self.predict(review)

    def save_model(self, model_path: str = MODEL_PATH) -> None:
        os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
        payload = {
            "vectorizer": self.vectorizer,
            "classifier": self.classifier,
            "labels": [str(c) for c in self.classifier.classes_],
        }
        joblib.dump(payload, model_path)

    def load_model(self, model_path: str = MODEL_PATH) -> None:
        if not os.path.exists(model_path):
            raise FileNotFoundError(f"Model file not found: {model_path}")
        loaded = joblib.load(model_path)
        if not isinstance(loaded, dict) or not {"vectorizer", "classifier"} <= loaded.keys():
            raise RuntimeError(f"Not a sentiment model file: {model_path}")
        self.vectorizer = loaded["vectorizer"]
        self.classifier = loaded["classifier"]
        self.is_trained = True


def _load_transformers_pipeline(model_name: str) -> Predictor:
    # imported lazily: transformers/torch are heavy and optional for the sklearn backend
    from transformers import pipeline  # type: ignore

    return pipeline("text-classification", model=model_name)


def _load_sklearn_model(model_path: str) -> Predictor:
    clf = ReviewSentimentClassifier()
    clf.load_model(model_path)
    return clf


class SentimentModel:
    """Holds the inference backend and its loading status.

    Loading never raises: a failure leaves status ``failed`` and the error
    message in ``error`` so the UI can report it.
    """

    def __init__(self, backend: str = "transformers", model_name: str = DEFAULT_TRANSFORMERS_MODEL,
                 model_path: str = MODEL_PATH) -> None:
        self.backend = (backend or "transformers").lower()
        self.model_name = model_name
        self.model_path = model_path
        self.status = STATUS_IDLE
        self.error: Optional[str] = None
        self._predictor: Optional[Predictor] = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self.status == STATUS_READY and self._predictor is not None

    def use_predictor(self, predictor: Predictor) -> None:
        """Install an already-built predictor (e.g. a trained classifier)."""
        with self._lock:
            self._predictor = predictor
            self.status = STATUS_READY
            self.error = None

    def load(self) -> bool:
        with self._lock:
            self.status = STATUS_LOADING
            self.error = None
        logger.info("loading sentiment model (backend=%s)", self.backend)
        try:
            if self.backend == "sklearn":
                predictor = _load_sklearn_model(self.model_path)
            elif self.backend == "transformers":
                predictor = _load_transformers_pipeline(self.model_name)
            else:
                raise ValueError(f"Unknown sentiment backend: {self.backend}")
        except Exception:
            logger.exception("failed to load sentiment model")
            with self._lock:
                self._predictor = None
                self.status = STATUS_FAILED
                self.error = "Failed to load sentiment model. Please check your network connection and try again."
            return False
        self.use_predictor(predictor)
        logger.info("sentiment model ready")
        return True

    def load_async(self, executor: concurrent.futures.Executor) -> "concurrent.futures.Future[bool]":
        with self._lock:
            self.status = STATUS_LOADING
        return executor.submit(self.load)

    def analyze(self, text: str) -> List[Any]:
        """Run the backend on `text` and return its list output unchanged."""
        predictor = self._predictor
        if predictor is None or self.status != STATUS_READY:
            raise ModelNotReadyError("Sentiment model is not initialized.")
        output = predictor(text)
        if not isinstance(output, list) or not output:
            raise InvalidModelOutputError("Invalid sentiment output from local model.")
        return output
