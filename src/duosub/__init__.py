"""DuoSub - 双模型语音识别 → 合并字幕"""

__version__ = "0.1.0"
