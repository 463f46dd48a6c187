from __future__ import annotations

import pytest

from editor_engine.search import (
    Found,
    NotFound,
    SearchController,
    SearchValidationError,
)

DOCUMENT = "cat dog cat"


def test_find_then_find_next_walks_matches() -> None:
    controller = SearchController()

    first = controller.find(DOCUMENT, "cat")
    second = controller.find(DOCUMENT, "cat", find_next=True)

    assert first == Found(0, 3)
    assert second == Found(8, 11)
    assert controller.state.last_match_end == 11


def test_find_next_wraps_with_callers_options() -> None:
    # The wraparound retry reuses the caller's own case/whole-word options
    # rather than forcing case-sensitive whole-word matching.
    controller = SearchController()
    controller.find(DOCUMENT, "cat")
    controller.find(DOCUMENT, "cat", find_next=True)

    third = controller.find(DOCUMENT, "cat", find_next=True)

    assert third == Found(0, 3, wrapped=True)


def test_wrap_keeps_case_insensitive_option() -> None:
    controller = SearchController()
    text = "Cat dog"
    controller.find(text, "cat")

    outcome = controller.find(text, "cat", find_next=True)

    assert outcome == Found(0, 3, wrapped=True)


def test_plain_find_restarts_from_document_start() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat")
    controller.find(DOCUMENT, "cat", find_next=True)

    assert controller.find(DOCUMENT, "cat") == Found(0, 3)


def test_find_next_from_idle_behaves_like_find() -> None:
    controller = SearchController()

    assert controller.is_idle
    assert controller.find(DOCUMENT, "dog", find_next=True) == Found(4, 7)


def test_not_found_clears_state_and_echoes_cursor() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat")

    outcome = controller.find(DOCUMENT, "bird", find_next=True, cursor=5)

    assert outcome == NotFound(cursor=5)
    assert controller.is_idle
    assert controller.state.active_query is None


def test_case_sensitive_matching() -> None:
    controller = SearchController()

    assert controller.find("Cat cat", "cat", case_sensitive=True) == Found(4, 7)
    assert controller.find("Cat cat", "cat") == Found(0, 3)


def test_whole_word_matching() -> None:
    controller = SearchController()

    assert controller.find("concat cat", "cat", whole_words=True) == Found(7, 10)
    assert controller.find("concat cat", "cat") == Found(3, 6)
    assert controller.find("cat_dog", "cat", whole_words=True) == Found(0, 3)


def test_whole_word_without_candidates_is_not_found() -> None:
    controller = SearchController()

    assert isinstance(controller.find("concatenate", "cat", whole_words=True), NotFound)


def test_empty_query_is_not_found() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat")

    assert controller.find(DOCUMENT, "", find_next=True) == NotFound(cursor=0)
    assert controller.is_idle


def test_stale_state_falls_back_to_plain_find() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat")
    controller.find(DOCUMENT, "cat", find_next=True)

    outcome = controller.find("cat", "cat", find_next=True)

    assert outcome == Found(0, 3)


def test_reset_returns_to_idle() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "dog")

    controller.reset()

    assert controller.is_idle
    assert controller.find(DOCUMENT, "cat", find_next=True) == Found(0, 3)


def test_cursor_outside_document_is_rejected() -> None:
    controller = SearchController()

    with pytest.raises(SearchValidationError) as excinfo:
        controller.find("abc", "a", cursor=10)

    assert excinfo.value.cursor == 10


def test_replace_walks_through_matches() -> None:
    controller = SearchController()

    first = controller.replace(DOCUMENT, "cat", "bird")
    second = controller.replace(first.text, "cat", "bird")
    third = controller.replace(second.text, "cat", "bird")

    assert first.text == "bird dog cat"
    assert first.match == Found(0, 3)
    assert second.text == "bird dog bird"
    assert third.count == 0
    assert third.text == "bird dog bird"
    assert controller.replace(third.text, "cat", "bird").count == 0


def test_replace_uses_match_selected_by_find() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat", find_next=True)
    controller.find(DOCUMENT, "cat", find_next=True)

    result = controller.replace(DOCUMENT, "cat", "cow")

    assert result.text == "cat dog cow"
    assert result.match == Found(8, 11)


def test_replace_never_matches_its_own_output() -> None:
    controller = SearchController()

    first = controller.replace("cat", "cat", "cats")
    second = controller.replace(first.text, "cat", "cats")
    third = controller.replace(second.text, "cat", "cats")

    assert first.text == "cats"
    assert second.count == 0
    assert second.text == "cats"
    assert third.count == 0


def test_replace_run_wraps_once_and_stops_at_its_origin() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat", find_next=True)
    controller.find(DOCUMENT, "cat", find_next=True)

    first = controller.replace(DOCUMENT, "cat", "cats")
    second = controller.replace(first.text, "cat", "cats")
    third = controller.replace(second.text, "cat", "cats")

    assert first.text == "cat dog cats"
    assert second.match == Found(0, 3, wrapped=True)
    assert second.text == "cats dog cats"
    assert third.count == 0
    assert third.text == "cats dog cats"


def test_replace_run_restarts_after_a_new_find() -> None:
    controller = SearchController()
    first = controller.replace("cat", "cat", "cats")
    assert controller.replace(first.text, "cat", "cats").count == 0

    controller.find(first.text, "cat")
    again = controller.replace(first.text, "cat", "cats")

    assert again.text == "catss"
    assert again.count == 1


def test_replace_with_a_different_query_starts_a_new_run() -> None:
    controller = SearchController()
    first = controller.replace("cat dog", "cat", "dog")

    second = controller.replace(first.text, "dog", "cow")
    third = controller.replace(second.text, "dog", "cow")

    assert first.text == "dog dog"
    assert second.match == Found(4, 7)
    assert second.text == "dog cow"
    assert third.match == Found(0, 3, wrapped=True)
    assert third.text == "cow cow"


def test_replace_all_counts_substitutions() -> None:
    controller = SearchController()

    result = controller.replace_all("aaa", "a", "b")

    assert result.count == 3
    assert result.text == "bbb"


def test_replace_all_respects_options() -> None:
    controller = SearchController()

    words = controller.replace_all("cat concat cat", "cat", "dog", whole_words=True)
    cased = controller.replace_all("Cat CAT cat", "cat", "x", case_sensitive=True)
    folded = controller.replace_all("Cat CAT cat", "cat", "x")

    assert words.text == "dog concat dog"
    assert words.count == 2
    assert cased.text == "Cat CAT x"
    assert folded.count == 3


def test_replace_all_without_matches_returns_zero() -> None:
    controller = SearchController()
    controller.find(DOCUMENT, "cat")

    result = controller.replace_all(DOCUMENT, "bird", "fish")

    assert result.count == 0
    assert result.text == DOCUMENT
    assert not result.changed
    assert controller.is_idle
