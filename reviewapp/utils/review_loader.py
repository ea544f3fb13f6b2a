import logging
import os
import random
from typing import IO, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

TEXT_COLUMN = "text"


class ReviewSourceError(Exception):
    pass


def load_reviews(source: Union[str, "os.PathLike[str]", IO[bytes], IO[str]]) -> List[str]:
    """Read a tab-separated file with a header row and return its review texts.

    Only string cells of the ``text`` column whose stripped value is non-empty
    are kept; the original (unstripped) text is returned.
    """
    if isinstance(source, (str, os.PathLike)) and not os.path.exists(source):
        raise ReviewSourceError(f"Failed to load TSV file: {source} not found")
    try:
        frame = pd.read_csv(source, sep="\t", dtype=str, keep_default_na=False)
    except Exception as exc:
        raise ReviewSourceError(f"Failed to parse TSV file: {exc}") from exc

    if TEXT_COLUMN not in frame.columns:
        raise ReviewSourceError(f"Failed to parse TSV file: missing '{TEXT_COLUMN}' column")

    reviews = [t for t in frame[TEXT_COLUMN].tolist() if isinstance(t, str) and t.strip() != ""]
    logger.info("Loaded %d reviews", len(reviews))
    return reviews


def pick_review(reviews: List[str], rng: Optional[random.Random] = None) -> str:
    if not reviews:
        raise ReviewSourceError("No reviews available. Please try again later.")
    chooser = rng or random
    return reviews[chooser.randrange(len(reviews))]
