from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, cast

NEUTRAL_LABEL = "NEUTRAL"
DEFAULT_SCORE = 0.5

_ICONS: Dict[str, str] = {
    "positive": "fa-thumbs-up",
    "negative": "fa-thumbs-down",
}


@dataclass(frozen=True)
class SentimentResult:
    label: str = NEUTRAL_LABEL
    score: float = DEFAULT_SCORE
    bucket: str = "neutral"

    @property
    def display(self) -> str:
        return format_sentiment(self.label, self.score)

    @property
    def icon(self) -> str:
        return sentiment_icon(self.bucket)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "score": self.score,
            "bucket": self.bucket,
            "icon": self.icon,
            "display": self.display,
        }


def _first_prediction(raw: Any) -> Any:
    """Unwrap `[[{...}]]`, `[{...}]` or a bare dict into the top prediction."""
    current = raw
    # at most two list levels: batch -> predictions
    for _ in range(2):
        if isinstance(current, (list, tuple)):
            seq = cast(list[Any], current)
            if not seq:
                return None
            current = seq[0]
    return current if isinstance(current, dict) else None


def sentiment_bucket(label: str, score: float) -> str:
    if label == "POSITIVE" and score > 0.5:
        return "positive"
    if label == "NEGATIVE" and score > 0.5:
        return "negative"
    return "neutral"


def interpret_output(raw: Any) -> SentimentResult:
    """Turn raw text-classification output into a SentimentResult.

    Anything that cannot be parsed degrades to NEUTRAL / 0.5.
    """
    prediction = _first_prediction(raw)
    if prediction is None:
        return SentimentResult()

    pred = cast(Dict[str, Any], prediction)
    raw_label = pred.get("label")
    raw_score = pred.get("score")
    label = raw_label.upper() if isinstance(raw_label, str) else NEUTRAL_LABEL
    if isinstance(raw_score, Real) and not isinstance(raw_score, bool):
        score = float(raw_score)
    else:
        score = DEFAULT_SCORE
    return SentimentResult(label=label, score=score, bucket=sentiment_bucket(label, score))


def format_sentiment(label: str, score: float) -> str:
    # e.g. "POSITIVE (95.0%)"
    return f"{label} ({score * 100:.1f}%)"


def sentiment_icon(bucket: str) -> str:
    return _ICONS.get(bucket, "fa-question-circle")
