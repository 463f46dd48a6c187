from __future__ import annotations

from editor_engine.search import Found, SearchQuery, find_match, iter_matches
from editor_engine.search.matcher import PreparedText


def test_find_match_honours_start_offset() -> None:
    assert find_match("abcabc", "abc", 1) == Found(3, 6)
    assert find_match("abcabc", "abc", 4) is None


def test_find_match_case_folding_keeps_offsets() -> None:
    assert find_match("xx HÉLLO", "héllo") == Found(3, 8)
    assert find_match("xx HÉLLO", "héllo", case_sensitive=True) is None


def test_find_match_whole_words_skips_embedded_hits() -> None:
    assert find_match("subcat cat2 cat", "cat", whole_words=True) == Found(12, 15)


def test_iter_matches_is_non_overlapping() -> None:
    assert list(iter_matches("aaaa", "aa")) == [Found(0, 2), Found(2, 4)]


def test_empty_query_never_matches() -> None:
    assert find_match("abc", "") is None
    assert list(iter_matches("abc", "")) == []


def test_case_insensitive_search_on_long_text() -> None:
    text = "a" * 100_000 + "NEEDLE" + "a" * 10

    assert find_match(text, "needle") == Found(100_000, 100_006)
    assert len(list(iter_matches(text * 3, "Needle"))) == 3


def test_multi_character_lowering_keeps_offsets() -> None:
    # "İ" lowers to two characters
    text = "İstanbul cat CAT"

    assert find_match(text, "CAT") == Found(9, 12)
    assert find_match(text, "cat", 10) == Found(13, 16)
    assert find_match("xİy", "İ") == Found(1, 2)
    assert find_match("xİy", "i") is None


def test_prepared_text_respects_limit() -> None:
    prepared = PreparedText("cat dog cat", SearchQuery("cat"))

    assert prepared.find(0, limit=3) == Found(0, 3)
    assert prepared.find(1, limit=10) is None
    assert prepared.find(1) == Found(8, 11)
