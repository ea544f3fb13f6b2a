import os
import sys
import pytest
from typing import Any, Callable, Dict, Generator, List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from reviewapp.main import create_app
from reviewapp.context import EXTENSION_KEY, ReviewContext
from flask import Flask
from flask.testing import FlaskClient

SAMPLE_REVIEWS = [
    "Absolutely loved it, would buy again.",
    "Broke after one day. Awful.",
]


def fixed_predictor(label: str, score: float) -> Callable[[str], List[Dict[str, Any]]]:
    def predict(text: str) -> List[Dict[str, Any]]:
        return [{"label": label, "score": score}]
    return predict


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    app = create_app("testing")
    app.config["TESTING"] = True
    ctx(app).set_reviews(SAMPLE_REVIEWS)
    yield app
    ctx(app).executor.shutdown(wait=True)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def ctx(app: Flask) -> ReviewContext:
    return app.extensions[EXTENSION_KEY]
