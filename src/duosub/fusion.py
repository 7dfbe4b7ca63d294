"""时间轴合并 - 在俄语 / 英语两路识别结果之间逐区间选择更可信的文本

流程：
  1. 收集两路所有片段的起止时间点，排序后得到一条统一的时间轴
  2. 相邻时间点之间的每个区间，在两路里各找重叠最长的片段
  3. 按字母表、音译、质量在两个候选里选一个，用区间自身的时间戳输出
  4. 合并相邻且文本相同的片段
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from duosub.classifier import (
    EN,
    MIXED,
    RU,
    assess_quality,
    contains_cyrillic,
    detect_language,
    is_transliteration,
    word_length_profile,
)
from duosub.models import Segment

# 短于此长度的区间视为两路片段边界的噪声，直接跳过（秒）
MIN_INTERVAL = 0.1
# 相同文本、间隔小于此值的相邻片段会被合并（秒）
ADJACENT_GAP = 0.5


@dataclass(frozen=True)
class Decision:
    """一次区间选择的结果，交给 observer 记录"""
    case: str                  # "A" / "B" / "C" / "D"，单边缺失时为 "single"
    chosen: Segment
    reason: str
    ru: Segment | None = None
    en: Segment | None = None


Observer = Callable[[Decision], None]


def _choose_en_when_translit(ru: Segment, en: Segment) -> tuple[Segment, str] | None:
    if is_transliteration(ru.text):
        return en, "ru is transliteration"
    return None


def _case_a(ru: Segment, en: Segment, ru_label: str) -> tuple[Segment, str]:
    """两路都识别出了自己的字母表"""
    translit = _choose_en_when_translit(ru, en)
    if translit:
        return translit

    q_ru = assess_quality(ru.text)
    q_en = assess_quality(en.text)

    if q_en - q_ru > 0.3:
        return en, f"en quality much higher ({q_en:.2f} vs {q_ru:.2f})"

    if abs(q_ru - q_en) < 0.2:
        profile = word_length_profile(ru.text)
        if profile.avg_length < 5.5 and profile.short_ratio > 0.5 and q_en > 0.5:
            return en, "comparable quality, ru looks transliterated"
        return ru, f"comparable quality ({q_ru:.2f} vs {q_en:.2f})"

    # 质量相等时落到 en
    if q_ru > q_en:
        return ru, f"ru quality higher ({q_ru:.2f} vs {q_en:.2f})"
    return en, f"en quality not lower ({q_en:.2f} vs {q_ru:.2f})"


def _case_b(ru: Segment, en: Segment, ru_label: str) -> tuple[Segment, str]:
    """俄语路是西里尔，英语路不是纯拉丁"""
    translit = _choose_en_when_translit(ru, en)
    if translit:
        return translit
    return ru, "ru is cyrillic, en is not latin"


def _case_c(ru: Segment, en: Segment, ru_label: str) -> tuple[Segment, str]:
    """英语路是拉丁，俄语路不是西里尔"""
    return en, "en is latin, ru is not cyrillic"


def _case_d(ru: Segment, en: Segment, ru_label: str) -> tuple[Segment, str]:
    """两路都是混合或无法判断"""
    translit = _choose_en_when_translit(ru, en)
    if translit:
        return translit

    if ru_label == MIXED and contains_cyrillic(ru.text) and not contains_cyrillic(en.text):
        return ru, "only ru contains cyrillic"

    q_ru = assess_quality(ru.text)
    q_en = assess_quality(en.text)
    if q_ru >= q_en:
        return ru, f"ru quality not lower ({q_ru:.2f} vs {q_en:.2f})"
    return en, f"en quality higher ({q_en:.2f} vs {q_ru:.2f})"


# (俄语路是西里尔, 英语路是拉丁) → 处理函数
_DECISION_TABLE = {
    (True, True): ("A", _case_a),
    (True, False): ("B", _case_b),
    (False, True): ("C", _case_c),
    (False, False): ("D", _case_d),
}


def select_best_segment(
    ru: Segment | None,
    en: Segment | None,
    observer: Observer | None = None,
) -> Segment | None:
    """在俄语模型和英语模型的候选片段里选出更可信的一个"""
    if ru is None and en is None:
        return None
    if ru is None or en is None:
        chosen = ru if en is None else en
        if observer:
            observer(Decision("single", chosen, "only one candidate", ru, en))
        return chosen

    ru_label = detect_language(ru.text)
    en_label = detect_language(en.text)

    case, decide = _DECISION_TABLE[(ru_label == RU, en_label == EN)]
    chosen, reason = decide(ru, en, ru_label)

    if observer:
        observer(Decision(case, chosen, reason, ru, en))
    return chosen


def find_best_overlapping_segment(
    segments: Iterable[Segment], start: float, end: float
) -> Segment | None:
    """与区间 [start, end] 重叠最长的片段；重叠相同时先出现的优先"""
    best = None
    max_overlap = 0.0
    for seg in segments:
        if seg.start < end and seg.end > start:
            overlap = min(seg.end, end) - max(seg.start, start)
            if overlap > max_overlap:
                max_overlap = overlap
                best = seg
    return best


def merge_adjacent_segments(segments: list[Segment], max_gap: float = ADJACENT_GAP) -> list[Segment]:
    """合并文本相同且首尾相距小于 max_gap 的相邻片段"""
    if not segments:
        return []

    merged: list[Segment] = []
    current = segments[0]
    for nxt in segments[1:]:
        if current.text == nxt.text and abs(current.end - nxt.start) < max_gap:
            current = Segment(current.start, nxt.end, current.text)
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return merged


def build_timeline(*streams: list[Segment]) -> list[float]:
    """所有片段的起止时间点，升序"""
    points: list[float] = []
    for stream in streams:
        for seg in stream:
            points.append(seg.start)
            points.append(seg.end)
    points.sort()
    return points


def merge(
    segments_ru: list[Segment],
    segments_en: list[Segment],
    observer: Observer | None = None,
) -> list[Segment]:
    """
    合并两路识别结果，输出按时间排序、互不重叠的片段列表。

    两路输入必须都已完整（不支持增量合并）。任何不合法的片段都会在开始前
    抛出 InvalidSegmentError。
    """
    segments_ru = [seg.validate() for seg in segments_ru]
    segments_en = [seg.validate() for seg in segments_en]

    if not segments_ru and not segments_en:
        return []

    points = build_timeline(segments_ru, segments_en)

    result: list[Segment] = []
    for start, end in zip(points, points[1:]):
        if end - start < MIN_INTERVAL:
            continue

        ru = find_best_overlapping_segment(segments_ru, start, end)
        en = find_best_overlapping_segment(segments_en, start, end)
        best = select_best_segment(ru, en, observer)
        if best is not None:
            result.append(Segment(start, end, best.text))

    return merge_adjacent_segments(result)
