from typing import Dict, Any, Tuple, cast
import io
import math
import logging
from flask import Blueprint, render_template, request, Response, jsonify, current_app
from reviewapp.context import EXTENSION_KEY, ReviewContext
from reviewapp.nlp.actions import determine_business_action, normalize_score
from reviewapp.nlp.model import InvalidModelOutputError, ModelNotReadyError
from reviewapp.nlp.sentiment import interpret_output
from reviewapp.utils.review_loader import ReviewSourceError
from reviewapp.utils.sheets_logger import build_meta

bp = Blueprint("main", __name__)
# alias expected by reviewapp.main
main = bp

logger = logging.getLogger(__name__)


def _context() -> ReviewContext:
    return cast(ReviewContext, current_app.extensions[EXTENSION_KEY])


def _error(message: str, status: int) -> Tuple[Response, int]:
    return jsonify({"error": message}), status


@bp.route("/", methods=["GET"])
def index():
    return render_template("index.html")


@bp.route("/status", methods=["GET"])
def status():
    ctx = _context()
    return jsonify({
        "model": ctx.model.status,
        "reviews": len(ctx.reviews),
        "error": ctx.model.error or ctx.reviews_error,
    })


@bp.route("/analyze", methods=["POST"])
def analyze():
    """Pick a random review, classify it, choose the business action and log it."""
    ctx = _context()
    data = cast(Dict[str, Any], request.get_json(silent=True) or {})

    if not ctx.reviews:
        return _error("No reviews available. Please try again later.", 503)
    if not ctx.model.is_ready:
        return _error("Sentiment model is not ready yet. Please wait a moment.", 503)

    try:
        review = ctx.random_review()
    except ReviewSourceError:
        # pool replaced by a concurrent upload since the check above
        return _error("No reviews available. Please try again later.", 503)
    try:
        raw = ctx.model.analyze(review)
    except (ModelNotReadyError, InvalidModelOutputError) as e:
        logger.error("sentiment analysis failed: %s", e)
        return _error(str(e), 500)
    except Exception as e:
        logger.exception("sentiment analysis failed")
        return _error(str(e) or "Failed to analyze sentiment.", 500)

    sentiment = interpret_output(raw)
    decision = determine_business_action(sentiment.score, sentiment.label)

    client_meta = data.get("meta")
    meta = build_meta(request.headers, client_meta if isinstance(client_meta, dict) else None)
    # fire-and-forget; the response never waits on the spreadsheet
    ctx.sheets.log(review, sentiment.display, decision.action_code, meta)

    return jsonify({
        "review": review,
        "sentiment": sentiment.to_dict(),
        "action": decision.to_dict(),
    })


@bp.route("/classify-action", methods=["POST"])
def classify_action():
    """Map a raw (label, score) pair to its business action without running the model."""
    data = cast(Dict[str, Any], request.get_json(silent=True) or {})
    label = data.get("label")
    score = data.get("score")
    decision = determine_business_action(score, label)
    normalized = normalize_score(score, label)
    return jsonify({
        # NaN and Infinity are not valid JSON
        "normalized_score": normalized if math.isfinite(normalized) else None,
        "action": decision.to_dict(),
    })


@bp.route("/reviews", methods=["POST"])
def upload_reviews():
    uploaded = request.files.get("file")
    if uploaded is None:
        return _error("no file provided", 400)
    try:
        payload = uploaded.read()
    except Exception:
        logger.exception("failed reading uploaded file")
        return _error("file_read_error", 400)
    try:
        count = _context().load_reviews(io.BytesIO(payload))
    except ReviewSourceError as e:
        return _error(str(e), 400)
    return jsonify({"reviews": count})


@bp.route('/_health', methods=['GET'])
def _health():
    return jsonify({'status': 'ok'})
