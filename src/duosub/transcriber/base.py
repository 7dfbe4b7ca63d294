"""转录器抽象基类"""

from abc import ABC, abstractmethod

from duosub.models import Segment, TranscriptResult, Word


class AbstractTranscriber(ABC):
    @abstractmethod
    def transcribe(self, audio_path: str, language: str) -> TranscriptResult:
        """用指定语言的模型转录音频，返回 TranscriptResult"""
        ...


def group_words(
    words: list[Word],
    max_words: int = 10,
    max_duration: float = 7.0,
) -> list[Segment]:
    """
    把单词按顺序分组成字幕片段：每段最多 max_words 个词，
    加入下一个词会让片段超过 max_duration 秒时另起一段（每段至少一个词）。
    """
    segments: list[Segment] = []
    i = 0
    while i < len(words):
        start = words[i].start
        end = words[i].end
        parts: list[str] = []

        while i < len(words) and len(parts) < max_words:
            word = words[i]
            if parts and word.end - start > max_duration:
                break
            parts.append(word.text.strip())
            end = word.end
            i += 1

        text = " ".join(p for p in parts if p)
        if text:
            segments.append(Segment(start=start, end=end, text=text))
    return segments
