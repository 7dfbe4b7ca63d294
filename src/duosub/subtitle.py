"""SRT 字幕生成"""

import os
from pathlib import Path

from duosub.models import Segment
from duosub.utils import log_success


def format_srt_time(seconds: float) -> str:
    """格式化为 SRT 时间 HH:MM:SS,mmm（小时不封顶，毫秒向零截断）"""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    millis = int((seconds - int(seconds)) * 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def render_srt(segments: list[Segment]) -> str:
    """按顺序编号（从 1 开始）生成 SRT 文本"""
    parts: list[str] = []
    for i, seg in enumerate(segments, start=1):
        parts.append(
            f"{i}\n"
            f"{format_srt_time(seg.start)} --> {format_srt_time(seg.end)}\n"
            f"{seg.text}\n"
            "\n"
        )
    return "".join(parts)


def write_srt(segments: list[Segment], path: str) -> str:
    """写入 SRT 文件，返回绝对路径"""
    abs_path = os.path.abspath(path)
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    with open(abs_path, "w", encoding="utf-8") as f:
        f.write(render_srt(segments))
    log_success(f"Subtitles → {abs_path}")
    return abs_path


def default_subtitle_path(media_path: str) -> str:
    """输入文件旁边的同名 .srt"""
    return str(Path(media_path).with_suffix(".srt"))
