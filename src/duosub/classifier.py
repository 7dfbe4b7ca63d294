"""文本分析 - 按字母表判断语言、评估识别质量、检测西里尔字母音译

所有函数都是纯函数，只依赖传入的文本。
"""

from dataclasses import dataclass

RU = "ru"
EN = "en"
MIXED = "mixed"

# 语言判断阈值：某个字母表占比超过 60%
SCRIPT_RATIO = 0.6


def is_cyrillic(ch: str) -> bool:
    """基本西里尔字母 U+0400-U+04FF 和补充 U+0500-U+052F"""
    return "\u0400" <= ch <= "\u052f"


def is_latin(ch: str) -> bool:
    return "A" <= ch <= "Z" or "a" <= ch <= "z"


def contains_cyrillic(text: str | None) -> bool:
    """是否含有任何基本西里尔字母（U+0400-U+04FF）"""
    if not text:
        return False
    return any("\u0400" <= ch <= "\u04ff" for ch in text)


def _cyrillic_only(word: str) -> str:
    return "".join(ch for ch in word if is_cyrillic(ch))


def detect_language(text: str | None) -> str:
    """
    按字母表判断语言：
    西里尔 > 60% → "ru"，拉丁 > 60% → "en"，否则 "mixed"。
    没有可计数的字母时默认 "en"。
    """
    if not text:
        return EN

    cyrillic = sum(1 for ch in text if is_cyrillic(ch))
    latin = sum(1 for ch in text if is_latin(ch))
    total = cyrillic + latin
    if total == 0:
        return EN

    if cyrillic / total > SCRIPT_RATIO:
        return RU
    if latin / total > SCRIPT_RATIO:
        return EN
    return MIXED


def assess_quality(text: str | None) -> float:
    """
    评估识别文本的"干净"程度，返回 0.0 - 1.0。

    - 词数（10 个封顶，权重 0.4）和字母数（50 个封顶，权重 0.3）
    - 单一字母表 (>90%) 加 0.2，两种字母表都超过 10% 乘 0.8
    - 数字多于字母的 30% 乘 0.7
    - 长度在 10-200 字符之间加 0.1
    - 西里尔音译乘 0.3
    """
    if not text or not text.strip():
        return 0.0

    trimmed = text.strip()
    word_count = len(trimmed.split())
    letter_count = digit_count = cyrillic_count = latin_count = 0

    for ch in trimmed:
        if ch.isalpha():
            letter_count += 1
            if is_cyrillic(ch):
                cyrillic_count += 1
            elif is_latin(ch):
                latin_count += 1
        elif ch.isdigit():
            digit_count += 1

    score = min(1.0, word_count / 10.0) * 0.4
    score += min(1.0, letter_count / 50.0) * 0.3

    if letter_count > 0:
        cyrillic_ratio = cyrillic_count / letter_count
        latin_ratio = latin_count / letter_count
        if cyrillic_ratio > 0.9 or latin_ratio > 0.9:
            score += 0.2
        elif cyrillic_ratio > 0.1 and latin_ratio > 0.1:
            score *= 0.8

    if letter_count > 0 and digit_count > letter_count * 0.3:
        score *= 0.7

    if 10 <= len(trimmed) <= 200:
        score += 0.1

    if cyrillic_count > 0 and is_transliteration(text):
        score *= 0.3

    return min(1.0, score)


def is_transliteration(text: str | None) -> bool:
    """
    判断西里尔文本是否是英语语音的音译（例如 "хэллоу зыс из" ≈ "hello this is"）。

    不用词典，只看词长统计：
      - 很短的词 (≤3) 占比 > 25%
      - 平均词长 < 5.2
      - 长词 (≥7) 占比 < 25%
      - 短词 (≤4) 占比 > 55%
    满足其中 2 条即认为是音译。长词占比 ≥ 30% 时直接判定为正常俄语。
    """
    if not text or not text.strip():
        return False

    words = text.strip().lower().split()
    if len(words) < 2:
        return False

    lengths = [len(w) for w in (_cyrillic_only(word) for word in words) if w]
    if not lengths:
        return False

    total = len(lengths)
    very_short_ratio = sum(1 for n in lengths if n <= 3) / total
    short_ratio = sum(1 for n in lengths if n <= 4) / total
    long_ratio = sum(1 for n in lengths if n >= 7) / total
    avg_len = sum(lengths) / total

    if long_ratio >= 0.3:
        return False

    criteria = (
        very_short_ratio > 0.25,
        avg_len < 5.2,
        long_ratio < 0.25,
        short_ratio > 0.55,
    )
    return sum(criteria) >= 2


@dataclass(frozen=True)
class WordLengthProfile:
    avg_length: float      # 每个词的平均西里尔字母数
    short_ratio: float     # 西里尔部分 1-4 个字母的词占比


def word_length_profile(text: str) -> WordLengthProfile:
    """词长统计，分母是全部词数（没有西里尔字母的词也算在内）"""
    words = text.lower().split()
    if not words:
        return WordLengthProfile(avg_length=0.0, short_ratio=0.0)

    letters = 0
    short = 0
    for word in words:
        clean = _cyrillic_only(word)
        if clean:
            letters += len(clean)
            if len(clean) <= 4:
                short += 1

    return WordLengthProfile(
        avg_length=letters / len(words),
        short_ratio=short / len(words),
    )
