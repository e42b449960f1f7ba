"""Tests for the Review aggregate."""

import pytest
from protean.exceptions import ValidationError

from chairup.exceptions import Forbidden
from chairup.reviews.events import ReviewEdited, ReviewSubmitted
from chairup.reviews.review import Review


def _make_review(**overrides):
    defaults = {
        "product_id": "prod-001",
        "user_id": "user-001",
        "user_name": "Ada",
        "rating": 4,
        "comment": "Comfortable for long days at the desk.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestSubmit:
    def test_submit(self):
        review = _make_review()
        assert review.rating == 4
        assert review.verified is False
        assert isinstance(review._events[-1], ReviewSubmitted)

    def test_verified_flag_recorded(self):
        assert _make_review(verified=True).verified is True

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _make_review(rating=rating)

    def test_comment_optional(self):
        assert _make_review(comment=None).comment == ""


class TestEdit:
    def test_owner_edits_rating_and_comment(self):
        review = _make_review()
        review._events.clear()
        review.edit(editor_id="user-001", rating=2, comment="Squeaks after a month.")
        assert review.rating == 2
        assert review.comment == "Squeaks after a month."
        assert isinstance(review._events[-1], ReviewEdited)

    def test_partial_edit_keeps_other_fields(self):
        review = _make_review()
        review.edit(editor_id="user-001", rating=5)
        assert review.comment == "Comfortable for long days at the desk."

    def test_edit_keeps_verified_flag(self):
        review = _make_review(verified=True)
        review.edit(editor_id="user-001", comment="Still great.")
        assert review.verified is True

    def test_other_user_cannot_edit(self):
        review = _make_review()
        with pytest.raises(Forbidden):
            review.edit(editor_id="user-999", rating=1)
        assert review.rating == 4
