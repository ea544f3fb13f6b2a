import concurrent.futures
import pytest
import reviewapp.nlp.model as model_mod
from reviewapp.nlp.model import (
    InvalidModelOutputError,
    ModelNotReadyError,
    ReviewSentimentClassifier,
    SentimentModel,
)

TRAIN_TEXTS = [
    "great product love it excellent",
    "amazing quality works perfectly great",
    "terrible broke awful waste",
    "bad quality broke disappointed awful",
]
TRAIN_LABELS = ["positive", "POSITIVE", "NEGATIVE", "negative"]


def _trained() -> ReviewSentimentClassifier:
    clf = ReviewSentimentClassifier()
    clf.train(TRAIN_TEXTS, TRAIN_LABELS)
    return clf


def test_classifier_predicts_label_and_probability():
    out = _trained().predict("excellent great product")
    assert len(out) == 1
    assert out[0]["label"] == "POSITIVE"
    assert 0.5 < out[0]["score"] <= 1.0


def test_untrained_classifier_raises():
    with pytest.raises(RuntimeError):
        ReviewSentimentClassifier().predict("anything")


def test_save_and_load_sklearn_backend(tmp_path):
    path = str(tmp_path / "sentiment_model.pkl")
    _trained().save_model(path)

    model = SentimentModel(backend="sklearn", model_path=path)
    assert model.load() is True
    assert model.status == "ready"
    out = model.analyze("awful broke")
    assert out[0]["label"] == "NEGATIVE"


def test_missing_model_file_marks_failed(tmp_path):
    model = SentimentModel(backend="sklearn", model_path=str(tmp_path / "missing.pkl"))
    assert model.load() is False
    assert model.status == "failed"
    assert model.error
    with pytest.raises(ModelNotReadyError):
        model.analyze("hello")


def test_unknown_backend_marks_failed():
    model = SentimentModel(backend="nope")
    assert model.load() is False
    assert model.status == "failed"


def test_transformers_backend_uses_pipeline(monkeypatch: pytest.MonkeyPatch):
    calls = []

    def fake_loader(name):
        calls.append(name)
        return lambda text: [{"label": "POSITIVE", "score": 0.9}]

    monkeypatch.setattr(model_mod, "_load_transformers_pipeline", fake_loader)
    model = SentimentModel(backend="transformers", model_name="some/model")
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        assert model.load_async(pool).result(timeout=5) is True
    assert calls == ["some/model"]
    assert model.analyze("nice")[0]["score"] == 0.9


def test_empty_output_is_invalid():
    model = SentimentModel()
    model.use_predictor(lambda text: [])
    with pytest.raises(InvalidModelOutputError):
        model.analyze("text")


def test_not_ready_before_load():
    model = SentimentModel()
    assert model.status == "idle"
    assert not model.is_ready
    with pytest.raises(ModelNotReadyError):
        model.analyze("text")


def test_saved_model_is_a_labelled_dict(tmp_path):
    import joblib
    path = str(tmp_path / "sentiment_model.pkl")
    _trained().save_model(path)
    saved = joblib.load(path)
    assert set(saved) == {"vectorizer", "classifier", "labels"}
    assert saved["labels"] == ["NEGATIVE", "POSITIVE"]


def test_foreign_pickle_is_rejected(tmp_path):
    import joblib
    path = str(tmp_path / "other.pkl")
    joblib.dump(("not", "ours"), path)
    model = SentimentModel(backend="sklearn", model_path=path)
    assert model.load() is False
    assert model.status == "failed"
