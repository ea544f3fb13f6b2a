"""Train the scikit-learn fallback sentiment model from a labelled TSV.

The TSV needs a header with `text` and `label` columns (labels POSITIVE/NEGATIVE).

    python scripts/train_sentiment_model.py data/labelled_reviews.tsv sentiment_model.pkl
"""
import argparse
import logging
import sys

import pandas as pd

from reviewapp.nlp.model import MODEL_PATH, ReviewSentimentClassifier

logger = logging.getLogger("train_sentiment_model")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("tsv", help="labelled reviews (text<TAB>label)")
    parser.add_argument("output", nargs="?", default=MODEL_PATH, help="where to write the joblib model")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    frame = pd.read_csv(args.tsv, sep="\t", dtype=str, keep_default_na=False)
    missing = {"text", "label"} - set(frame.columns)
    if missing:
        logger.error("missing column(s): %s", ", ".join(sorted(missing)))
        return 2
    frame = frame[frame["text"].str.strip() != ""]
    if frame["label"].nunique() < 2:
        logger.error("need at least two distinct labels to train")
        return 2

    clf = ReviewSentimentClassifier()
    clf.train(frame["text"].tolist(), frame["label"].tolist())
    clf.save_model(args.output)
    logger.info("trained on %d reviews; model written to %s", len(frame), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
