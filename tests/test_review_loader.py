import io
import random
import pytest
from reviewapp.utils.review_loader import ReviewSourceError, load_reviews, pick_review


def test_load_reviews_filters_blank_rows(tmp_path):
    tsv = tmp_path / "reviews.tsv"
    tsv.write_text("id\ttext\n1\tGreat stuff\n2\t   \n3\t\n4\t  Slow delivery \n", encoding="utf-8")
    assert load_reviews(str(tsv)) == ["Great stuff", "  Slow delivery "]


def test_load_reviews_from_buffer():
    buf = io.BytesIO("text\tstars\nLoved it\t5\n".encode("utf-8"))
    assert load_reviews(buf) == ["Loved it"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(ReviewSourceError):
        load_reviews(str(tmp_path / "nope.tsv"))


def test_missing_text_column_raises():
    with pytest.raises(ReviewSourceError):
        load_reviews(io.BytesIO(b"review\tstars\nLoved it\t5\n"))


def test_empty_file_raises():
    with pytest.raises(ReviewSourceError):
        load_reviews(io.BytesIO(b""))


def test_pick_review_is_from_pool():
    reviews = ["a", "b", "c"]
    rng = random.Random(7)
    picks = {pick_review(reviews, rng) for _ in range(50)}
    assert picks <= set(reviews)
    assert len(picks) > 1


def test_pick_review_empty_pool():
    with pytest.raises(ReviewSourceError):
        pick_review([])
