"""数据模型定义"""

import math
from dataclasses import dataclass


class InvalidSegmentError(ValueError):
    """片段时间戳不合法（end < start、负数、非数字等）"""


@dataclass(frozen=True)
class Segment:
    """单个语音片段（不可变）"""
    start: float          # 开始时间（秒）
    end: float            # 结束时间（秒）
    text: str             # 文本内容

    def validate(self) -> "Segment":
        """校验时间戳和文本，不合法时抛出 InvalidSegmentError，合法时返回自身"""
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSegmentError(f"{name} is not a number: {value!r}")
            if not math.isfinite(value):
                raise InvalidSegmentError(f"{name} is not finite: {value!r}")
        if self.start < 0:
            raise InvalidSegmentError(f"start must be >= 0: {self}")
        if self.end < self.start:
            raise InvalidSegmentError(f"end < start: {self}")
        if self.text is None:
            raise InvalidSegmentError(f"text is None at {self.start}-{self.end}")
        return self

    def __str__(self) -> str:
        return f"[{self.start:.2f} - {self.end:.2f}] {self.text}"


@dataclass(frozen=True)
class Word:
    """识别器输出的单词（带时间戳）"""
    text: str
    start: float
    end: float


@dataclass
class TranscriptResult:
    """转录结果 - 所有 transcriber 统一返回此类型"""
    text: str                          # 完整文本
    segments: list[Segment]            # 带时间戳的片段列表
    language: str = "unknown"          # 识别时使用的语言
    duration: float = 0.0             # 音频总时长（秒）
    transcribe_time: float = 0.0      # 转录耗时（秒）
    engine: str = ""                   # 使用的引擎名称


@dataclass
class MediaFile:
    """输入的媒体文件"""
    path: str             # 绝对路径
    title: str = ""       # 文件名（不含扩展名）


@dataclass
class FusionResult:
    """完整流水线的输出"""
    segments: list[Segment]                    # 合并后的字幕片段
    ru: TranscriptResult | None = None         # 俄语模型结果
    en: TranscriptResult | None = None         # 英语模型结果
    subtitle_path: str = ""                    # 生成的 SRT 文件
    audio_path: str = ""                       # 保留的音频（--keep-audio）
