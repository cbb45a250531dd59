"""Tests for the photo analysis word cap."""

from app.domain.policies.photo_caption import cap_words


def test_short_text_unchanged():
    assert cap_words("  A deep pothole.  ") == "A deep pothole."


def test_exactly_fifty_words_unchanged():
    text = " ".join(["word"] * 50)
    assert cap_words(text) == text


def test_eighty_words_capped_with_ellipsis():
    words = [f"w{i}" for i in range(80)]
    capped = cap_words(" ".join(words))
    assert capped == " ".join(words[:50]) + "..."
    assert len(capped.split()) == 50


def test_empty_text():
    assert cap_words("") == ""
    assert cap_words(None) == ""
