"""转录模块 - 根据引擎选择转录器"""

from duosub.transcriber.base import AbstractTranscriber, group_words
from duosub.transcriber.paraformer import ParaformerTranscriber
from duosub.transcriber.whisper_local import WhisperLocalTranscriber

__all__ = [
    "AbstractTranscriber",
    "ParaformerTranscriber",
    "WhisperLocalTranscriber",
    "get_transcriber",
    "group_words",
]


def get_transcriber(engine: str = "whisper", **kwargs) -> AbstractTranscriber:
    """
    engine="whisper"    → WhisperLocalTranscriber（默认）
    engine="paraformer" → ParaformerTranscriber
    """
    if engine == "whisper":
        return WhisperLocalTranscriber(
            model_size=kwargs.get("model", "small"),
            max_words=kwargs.get("max_words", 10),
            max_duration=kwargs.get("max_duration", 7.0),
        )
    elif engine == "paraformer":
        api_key = kwargs.get("api_key", "")
        asr_model = kwargs.get("asr_model", "paraformer-realtime-v2")
        return ParaformerTranscriber(api_key=api_key, model=asr_model)
    else:
        raise ValueError(f"Unknown engine: {engine}. Use 'whisper' or 'paraformer'.")
