"""配置管理 - 从环境变量和 CLI 参数构造统一配置"""

import os
from dataclasses import dataclass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """统一配置，CLI / Web 解析完参数后构造"""
    # 输入
    input: str = ""

    # ASR 引擎（两路使用同一种引擎，分别指定语言）
    engine: str = ""                   # whisper / paraformer，空则读 DUOSUB_ENGINE
    whisper_model: str = ""            # tiny/base/small/medium/large-v2/large-v3
    ru_language: str = "ru"
    en_language: str = "en"

    # 单词 → 片段的分组规则（仅 whisper）
    max_words_per_segment: int = 10
    max_segment_duration: float = 7.0  # 秒

    # 运行方式
    parallel: bool = True              # 两路识别并行
    verbose: bool = False              # 打印每个区间的选择过程

    # 输出
    output: str | None = None          # SRT 路径，None 为输入文件旁边的 <name>.srt
    keep_audio: bool = False

    # API Keys (从环境变量读取)
    dashscope_api_key: str = ""

    def __post_init__(self) -> None:
        """从环境变量补充未设置的值"""
        if not self.engine:
            self.engine = os.environ.get("DUOSUB_ENGINE", "whisper")
        if not self.whisper_model:
            self.whisper_model = os.environ.get("DUOSUB_WHISPER_MODEL", "small")
        if not self.dashscope_api_key:
            self.dashscope_api_key = os.environ.get("DASHSCOPE_API_KEY", "")
        if not self.verbose:
            self.verbose = _env_flag("DUOSUB_VERBOSE")
