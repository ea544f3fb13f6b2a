from dataclasses import dataclass, asdict
import math
from numbers import Real
from typing import Any, Dict

OFFER_COUPON = "OFFER_COUPON"
REQUEST_FEEDBACK = "REQUEST_FEEDBACK"
ASK_REFERRAL = "ASK_REFERRAL"

# normalized score thresholds; 0.4 belongs to the coupon tier, 0.7 to the referral tier
COUPON_MAX_SCORE = 0.4
REFERRAL_MIN_SCORE = 0.7
NEUTRAL_SCORE = 0.5


@dataclass(frozen=True)
class BusinessAction:
    action_code: str
    ui_message: str
    ui_color: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


ACTIONS: Dict[str, BusinessAction] = {
    OFFER_COUPON: BusinessAction(
        OFFER_COUPON,
        "🚨 We are truly sorry. Please accept this 50% discount coupon.",
        "#ef4444",  # red
    ),
    REQUEST_FEEDBACK: BusinessAction(
        REQUEST_FEEDBACK,
        "📝 Thank you! Could you tell us how we can improve?",
        "#6b7280",  # gray
    ),
    ASK_REFERRAL: BusinessAction(
        ASK_REFERRAL,
        "⭐ Glad you liked it! Refer a friend and earn rewards.",
        "#3b82f6",  # blue
    ),
}


def _as_confidence(value: Any) -> float:
    # bool is a Real subclass but never a meaningful probability
    if isinstance(value, Real) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            # huge ints still order correctly against the thresholds
            return math.inf if value > 0 else -math.inf
    return NEUTRAL_SCORE


def normalize_score(confidence: Any, label: Any) -> float:
    """Map a (confidence, label) pair onto a 0 (worst) - 1 (best) scale.

    Unknown labels (anything other than POSITIVE/NEGATIVE after uppercasing,
    including None and non-strings) yield the neutral 0.5 regardless of
    confidence. A non-numeric confidence counts as 0.5. Values outside
    [0, 1] are not clamped.
    """
    upper_label = label.upper() if isinstance(label, str) else ""
    if upper_label == "POSITIVE":
        return _as_confidence(confidence)
    if upper_label == "NEGATIVE":
        return 1.0 - _as_confidence(confidence)
    return NEUTRAL_SCORE


def action_for_score(normalized_score: float) -> BusinessAction:
    if normalized_score <= COUPON_MAX_SCORE:
        return ACTIONS[OFFER_COUPON]
    if normalized_score < REFERRAL_MIN_SCORE:
        return ACTIONS[REQUEST_FEEDBACK]
    return ACTIONS[ASK_REFERRAL]


def determine_business_action(confidence: Any, label: Any) -> BusinessAction:
    """Return the canned business action for a sentiment prediction.

    Pure and total: every input produces an action, malformed labels fall
    through to the neutral REQUEST_FEEDBACK tier.
    """
    return action_for_score(normalize_score(confidence, label))
