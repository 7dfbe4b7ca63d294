import math

import pytest

from duosub.fusion import (
    Decision,
    build_timeline,
    find_best_overlapping_segment,
    merge,
    merge_adjacent_segments,
    select_best_segment,
)
from duosub.models import InvalidSegmentError, Segment

NATIVE_RU = "Здравствуйте уважаемые коллеги"
LONG_EN = "this is a perfectly normal english sentence"


def seg(text, start=0.0, end=2.0):
    return Segment(start, end, text)


# ── select_best_segment ──

def test_select_none_and_single():
    ru, en = seg("привет"), seg("hello")
    assert select_best_segment(None, None) is None
    assert select_best_segment(ru, None) is ru
    assert select_best_segment(None, en) is en


def test_case_a_comparable_quality_prefers_ru():
    ru, en = seg(NATIVE_RU), seg("hello world")
    assert select_best_segment(ru, en) is ru


def test_case_a_short_russian_phrase_reads_as_transliteration():
    # two short words trip three of the four word-length criteria
    ru, en = seg("привет мир"), seg("hello world")
    assert select_best_segment(ru, en) is en


def test_case_a_transliteration_prefers_en():
    ru, en = seg("хэллоу зыс из"), seg("hello this is")
    assert select_best_segment(ru, en) is en


def test_case_a_en_much_better():
    ru, en = seg("привет"), seg(LONG_EN)
    assert select_best_segment(ru, en) is en


def test_case_a_comparable_but_ru_full_of_short_words():
    ru = seg("я и не понимаю никогда")
    assert select_best_segment(ru, seg(LONG_EN)).text == LONG_EN
    # same ru, but en quality is not above 0.5
    assert select_best_segment(ru, seg("hello world")) is ru


def test_case_a_ru_clearly_better():
    ru, en = seg(NATIVE_RU), seg("hi")
    assert select_best_segment(ru, en) is ru


def test_case_b_ru_cyrillic_en_mixed():
    ru, en = seg(NATIVE_RU), seg("abc где")
    assert select_best_segment(ru, en) is ru


def test_case_b_en_recognizer_produced_cyrillic():
    ru, en = seg(NATIVE_RU), seg("привет")
    assert select_best_segment(ru, en) is ru


def test_case_b_transliteration_prefers_even_poor_en():
    ru, en = seg("хэллоу зыс из"), seg("abc где")
    assert select_best_segment(ru, en) is en


def test_case_c_en_latin_ru_not_cyrillic():
    assert select_best_segment(seg("hallo"), seg("hello")).text == "hello"
    assert select_best_segment(seg(""), seg("hello")).text == "hello"


def test_case_d_quality_fallback():
    ru, en = seg("hello world здравствуйте"), seg("hello world здравствуй")
    assert select_best_segment(ru, en) is ru


def test_case_d_quality_tie_prefers_ru():
    ru, en = seg("hello world здравствуйте"), seg("hello world здравствуйте")
    assert select_best_segment(ru, en) is ru


def test_case_d_transliteration_prefers_en():
    ru, en = seg("hello world хэллоу зыс"), seg("hi где")
    assert select_best_segment(ru, en) is en


def test_observer_receives_decisions():
    decisions = []
    ru, en = seg("хэллоу зыс из"), seg("hello this is")
    select_best_segment(ru, en, observer=decisions.append)

    assert len(decisions) == 1
    decision = decisions[0]
    assert isinstance(decision, Decision)
    assert decision.case == "A"
    assert decision.chosen is en
    assert decision.ru is ru and decision.en is en
    assert "transliteration" in decision.reason


def test_observer_single_candidate():
    decisions = []
    en = seg("hello")
    select_best_segment(None, en, observer=decisions.append)
    assert decisions[0].case == "single"
    assert decisions[0].chosen is en


# ── overlap / adjacency helpers ──

def test_best_overlap_picks_longest():
    a, b = seg("a", 0, 1), seg("b", 0, 3)
    assert find_best_overlapping_segment([a, b], 0.5, 2.5) is b


def test_best_overlap_first_wins_on_tie():
    first, second = seg("first", 0, 2), seg("second", 0, 2)
    assert find_best_overlapping_segment([first, second], 0.0, 2.0) is first


def test_best_overlap_touching_is_not_overlap():
    assert find_best_overlapping_segment([seg("a", 0, 1)], 1.0, 2.0) is None
    assert find_best_overlapping_segment([], 0.0, 1.0) is None


def test_build_timeline_sorted():
    points = build_timeline([seg("a", 2, 4)], [seg("b", 0, 3)])
    assert points == [0, 2, 3, 4]


def test_merge_adjacent_segments():
    merged = merge_adjacent_segments([
        seg("a", 0, 1),
        seg("a", 1.3, 2),
        seg("b", 2, 3),
        seg("a", 3, 4),
    ])
    assert merged == [seg("a", 0, 2), seg("b", 2, 3), seg("a", 3, 4)]


def test_merge_adjacent_gap_limit():
    far = [seg("a", 0, 1), seg("a", 1.5, 2)]
    assert merge_adjacent_segments(far) == far
    # overlapping pairs are measured by absolute distance
    assert merge_adjacent_segments([seg("a", 0, 2), seg("a", 1.8, 3)]) == [seg("a", 0, 3)]


def test_merge_adjacent_is_idempotent():
    segments = [seg("a", 0, 1), seg("a", 1.2, 2), seg("a", 2.1, 3), seg("b", 3, 4), seg("b", 5, 6)]
    once = merge_adjacent_segments(segments)
    assert merge_adjacent_segments(once) == once
    assert merge_adjacent_segments([]) == []


# ── merge ──

def test_merge_end_to_end():
    stream_ru = [Segment(0, 2, "привет"), Segment(2, 4, "хэллоу зыс из")]
    stream_en = [Segment(0, 2, "garbage"), Segment(2, 4, "hello this")]

    assert merge(stream_ru, stream_en) == [
        Segment(0, 2, "привет"),
        Segment(2, 4, "hello this"),
    ]


def test_merge_end_to_end_decisions():
    decisions = []
    merge(
        [Segment(0, 2, "привет"), Segment(2, 4, "хэллоу зыс из")],
        [Segment(0, 2, "garbage"), Segment(2, 4, "hello this")],
        observer=decisions.append,
    )
    assert [d.case for d in decisions] == ["A", "A"]
    assert [d.chosen.text for d in decisions] == ["привет", "hello this"]


def test_merge_both_empty():
    assert merge([], []) == []


def test_merge_single_stream_is_verbatim():
    stream = [Segment(0, 2, "привет"), Segment(3, 5, "мир")]
    assert merge(stream, []) == stream
    assert merge([], stream) == stream


def test_merge_uses_interval_bounds_and_coalesces():
    stream_ru = [Segment(0, 4, NATIVE_RU)]
    stream_en = [Segment(1, 2, "hi")]
    assert merge(stream_ru, stream_en) == [Segment(0, 4, NATIVE_RU)]


def test_merge_drops_slivers():
    stream_ru = [Segment(0, 2, NATIVE_RU)]
    stream_en = [Segment(0, 2.05, "hello world")]
    assert merge(stream_ru, stream_en) == [Segment(0, 2, NATIVE_RU)]


def test_merge_skips_gaps():
    merged = merge([Segment(0, 1, NATIVE_RU)], [Segment(5, 6, "hello world")])
    assert merged == [Segment(0, 1, NATIVE_RU), Segment(5, 6, "hello world")]


def test_merge_output_sorted_and_non_overlapping():
    stream_ru = [
        Segment(0.0, 3.0, NATIVE_RU),
        Segment(3.5, 6.0, "хэллоу зыс из"),
        Segment(6.0, 9.5, "я бы хотел заказать кофе пожалуйста"),
    ]
    stream_en = [
        Segment(0.2, 2.8, "hello colleagues"),
        Segment(3.4, 6.2, "hello this is"),
        Segment(6.3, 9.0, "ya by hotel"),
    ]
    merged = merge(stream_ru, stream_en)

    assert merged
    for current, nxt in zip(merged, merged[1:]):
        assert current.end <= nxt.start
    assert merged[0].start == 0.0
    assert merged[-1].end == 9.5


def _assert_covers_candidate_intervals(stream_ru, stream_en, merged):
    points = build_timeline(stream_ru, stream_en)
    for start, end in zip(points, points[1:]):
        if end - start < 0.1:
            continue
        has_candidate = (
            find_best_overlapping_segment(stream_ru, start, end) is not None
            or find_best_overlapping_segment(stream_en, start, end) is not None
        )
        covered = any(s.start <= start and end <= s.end for s in merged)
        assert covered == has_candidate, (start, end)


def test_merge_covers_every_interval_with_a_candidate():
    stream_ru = [
        Segment(0.0, 3.0, NATIVE_RU),
        Segment(2.5, 4.0, "привет"),
        Segment(4.02, 6.0, "хэллоу зыс из"),
        Segment(8.0, 9.5, "я бы хотел заказать кофе пожалуйста"),
    ]
    stream_en = [
        Segment(0.2, 2.8, "hello colleagues"),
        Segment(3.4, 6.2, "hello this is"),
        Segment(11.0, 12.0, "bye"),
    ]
    merged = merge(stream_ru, stream_en)

    _assert_covers_candidate_intervals(stream_ru, stream_en, merged)
    # the 6.2 - 8.0 and 9.5 - 11.0 gaps stay uncovered
    assert not any(s.start < 8.0 and s.end > 6.2 for s in merged)
    assert not any(s.start < 11.0 and s.end > 9.5 for s in merged)


@pytest.mark.parametrize(
    "bad",
    [
        Segment(2.0, 1.0, "x"),
        Segment(-1.0, 1.0, "x"),
        Segment(math.nan, 1.0, "x"),
        Segment(0.0, math.inf, "x"),
        Segment("0", 1.0, "x"),
        Segment(0.0, 1.0, None),
    ],
)
def test_merge_rejects_malformed_segments(bad):
    with pytest.raises(InvalidSegmentError):
        merge([Segment(0, 1, "ok")], [bad])


def test_invalid_segment_error_is_value_error():
    with pytest.raises(ValueError):
        Segment(3, 1, "x").validate()
