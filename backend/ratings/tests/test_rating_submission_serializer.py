import uuid
from types import SimpleNamespace

import pytest

from ratings.serializers import RatingSubmissionSerializer

RATER = "0b6f1c3e-6c1f-4b8e-9a55-6a0f3d1c2b11"
RATEE = "7d2a9e40-1f5b-4c3a-8e2d-9b7c6a5f4e33"


def _serializer(body, rater=RATER):
    request = SimpleNamespace(user=SimpleNamespace(pk=uuid.UUID(rater)))
    return RatingSubmissionSerializer(data=body, context={"request": request})


def _valid(body, rater=RATER):
    serializer = _serializer(body, rater)
    assert serializer.is_valid(), serializer.errors
    return serializer.validated_data


def _errors(body, rater=RATER):
    serializer = _serializer(body, rater)
    assert not serializer.is_valid()
    return [
        (field, str(message))
        for field, messages in serializer.errors.items()
        for message in messages
    ]


@pytest.mark.parametrize("value", [1, 2, 3, 4, 5, 4.0])
def test_whole_ratings_in_range_are_accepted(value):
    result = _valid({"ratee_id": RATEE, "rating": value})
    assert result["rating"] == int(value)
    assert isinstance(result["rating"], int)


@pytest.mark.parametrize("value", [0, -1, 6, 5.5, 100])
def test_out_of_range_ratings_are_rejected(value):
    assert _errors({"ratee_id": RATEE, "rating": value}) == [
        ("rating", "Rating must be between 1 and 5.")
    ]


def test_fractional_rating_is_rejected():
    assert _errors({"ratee_id": RATEE, "rating": 3.5}) == [
        ("rating", "Rating must be a whole number.")
    ]


@pytest.mark.parametrize("value", [None, "4", True, [4]])
def test_missing_or_non_numeric_rating(value):
    body = {"ratee_id": RATEE}
    if value is not None:
        body["rating"] = value
    assert _errors(body) == [("rating", "Rating is required.")]


def test_null_rating_is_required():
    assert _errors({"ratee_id": RATEE, "rating": None}) == [("rating", "Rating is required.")]


def test_self_rating_is_rejected():
    assert _errors({"ratee_id": RATER, "rating": 5}) == [
        ("ratee_id", "You cannot rate yourself.")
    ]


@pytest.mark.parametrize("spelling", [RATER.upper(), RATER.replace("-", ""), f"{{{RATER}}}"])
def test_self_rating_is_rejected_for_any_spelling_of_own_id(spelling):
    assert _errors({"ratee_id": spelling, "rating": 5}) == [
        ("ratee_id", "You cannot rate yourself.")
    ]


def test_non_uuid_ratee_is_left_to_the_store():
    assert _valid({"ratee_id": "someone", "rating": 5})["ratee_id"] == "someone"


@pytest.mark.parametrize("value", ["   ", "", None])
def test_blank_ratee_is_required(value):
    assert _errors({"ratee_id": value, "rating": 5}) == [("ratee_id", "Ratee ID is required.")]


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("a", "Review must be at least 3 characters."),
        ("ab", "Review must be at least 3 characters."),
        ("x" * 1001, "Review must be at most 1000 characters."),
    ],
)
def test_review_length_bounds(text, message):
    assert _errors({"ratee_id": RATEE, "rating": 4, "review_text": text}) == [
        ("review_text", message)
    ]


@pytest.mark.parametrize("text", ["abc", "x" * 1000])
def test_review_length_edges_are_accepted(text):
    result = _valid({"ratee_id": RATEE, "rating": 4, "review_text": text})
    assert result["review_text"] == text


def test_interaction_id_longer_than_the_column_is_rejected():
    assert _errors({"ratee_id": RATEE, "rating": 4, "interaction_id": "p" * 65}) == [
        ("interaction_id", "Interaction ID must be at most 64 characters.")
    ]
    assert _valid({"ratee_id": RATEE, "rating": 4, "interaction_id": "p" * 64})


def test_errors_are_collected_in_field_order():
    body = {"rating": 9, "review_text": "no", "interaction_id": "x" * 80}
    expected = [
        ("ratee_id", "Ratee ID is required."),
        ("rating", "Rating must be between 1 and 5."),
        ("review_text", "Review must be at least 3 characters."),
        ("interaction_id", "Interaction ID must be at most 64 characters."),
    ]
    assert _errors(body) == expected
    # Same input, same answer.
    assert _errors(body) == expected


def test_optional_fields_are_trimmed_and_blank_means_absent():
    result = _valid(
        {
            "ratee_id": f"  {RATEE} ",
            "rating": 5,
            "review_text": "   ",
            "listing_id": "",
            "interaction_id": "  pay-1  ",
        }
    )
    assert result["ratee_id"] == RATEE
    assert result["review_text"] is None
    assert result["listing_id"] is None
    assert result["interaction_id"] == "pay-1"


def test_empty_body_reports_both_required_fields():
    assert _errors({}) == [
        ("ratee_id", "Ratee ID is required."),
        ("rating", "Rating is required."),
    ]
