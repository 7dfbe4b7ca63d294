"""阿里云百炼 ASR 转录实现（dashscope SDK 同步调用）"""

import os
import time

from duosub.media import SAMPLE_RATE
from duosub.models import Segment, TranscriptResult
from duosub.transcriber.base import AbstractTranscriber
from duosub.utils import log_step, log_info, log_success, log_error


class ParaformerTranscriber(AbstractTranscriber):
    def __init__(self, api_key: str = "", model: str = "paraformer-realtime-v2") -> None:
        self.api_key = api_key or os.environ.get("DASHSCOPE_API_KEY", "")
        self.model = model

    def transcribe(self, audio_path: str, language: str) -> TranscriptResult:
        if not self.api_key:
            log_error("DASHSCOPE_API_KEY not set")
            log_info("Set the environment variable: export DASHSCOPE_API_KEY='your-key'")
            log_info("Or switch to local engine: duosub <input> --engine whisper")
            raise RuntimeError("DASHSCOPE_API_KEY not configured")

        try:
            import dashscope
            from dashscope.audio.asr import Recognition
            from http import HTTPStatus
        except ImportError:
            log_error("dashscope package not installed")
            log_info("Install it: pip install dashscope")
            raise RuntimeError("dashscope not installed")

        dashscope.api_key = self.api_key

        log_step("🎙️", f"Transcribing [{language}] with {self.model}...")
        log_info(f"Audio: {audio_path}")

        # audio_path 已由 media.extract_audio 转成单声道 16kHz wav
        recognition = Recognition(
            model=self.model,
            format="wav",
            sample_rate=SAMPLE_RATE,
            language_hints=[language],
            callback=None,
        )

        t0 = time.time()
        try:
            result = recognition.call(audio_path)
        except Exception as e:
            log_error(f"ASR API error: {e}")
            log_info("Check your network connection or try: duosub <input> --engine whisper")
            raise RuntimeError(f"ASR API call failed: {e}") from e
        elapsed = time.time() - t0

        if result.status_code != HTTPStatus.OK:
            msg = getattr(result, "message", "unknown error")
            log_error(f"ASR API returned error: {result.status_code}")
            log_info(f"Message: {msg}")
            raise RuntimeError(f"ASR API error: {result.status_code} - {msg}")

        # 解析 sentences → 统一的 TranscriptResult
        segments: list[Segment] = []
        for s in result.get_sentence() or []:
            text = s.get("text", "").strip()
            if not text:
                continue
            begin = s.get("begin_time", 0) / 1000.0  # ms → s
            end = s.get("end_time", 0) / 1000.0
            segments.append(Segment(start=begin, end=max(begin, end), text=text))

        full_text = "\n".join(s.text for s in segments)

        log_success(f"[{language}] Transcribed in {elapsed:.1f}s")
        log_success(f"[{language}] Segments: {len(segments)}, Characters: {len(full_text)}")

        return TranscriptResult(
            text=full_text,
            segments=segments,
            language=language,
            duration=segments[-1].end if segments else 0.0,
            transcribe_time=elapsed,
            engine=self.model,
        )
