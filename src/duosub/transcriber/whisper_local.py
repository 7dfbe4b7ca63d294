"""本地 faster-whisper 转录实现（固定语言，单词级时间戳）"""

import os
import time

from duosub.models import TranscriptResult, Word
from duosub.transcriber.base import AbstractTranscriber, group_words
from duosub.utils import log_step, log_info, log_success, log_error


class WhisperLocalTranscriber(AbstractTranscriber):
    def __init__(self, model_size: str = "small", max_words: int = 10, max_duration: float = 7.0) -> None:
        self.model_size = model_size
        self.max_words = max_words
        self.max_duration = max_duration

    def _load_model(self):
        try:
            from faster_whisper import WhisperModel
        except ImportError:
            log_error("faster-whisper package not installed")
            log_info("Install it: pip install faster-whisper")
            raise RuntimeError("faster-whisper not installed")

        # CPU 线程数限制为总核心数的一半（两路识别可能同时运行）
        cpu_count = os.cpu_count() or 4
        cpu_threads = max(1, cpu_count // 2)
        log_info(f"Loading whisper {self.model_size} ({cpu_threads}/{cpu_count} CPU threads)...")

        return WhisperModel(
            self.model_size,
            device="cpu",
            compute_type="int8",
            cpu_threads=cpu_threads,
        )

    def transcribe(self, audio_path: str, language: str) -> TranscriptResult:
        log_step("🎙️", f"Transcribing [{language}] with Whisper ({self.model_size})...")
        model = self._load_model()

        t0 = time.time()
        raw_segments, info = model.transcribe(
            audio_path,
            language=language,
            beam_size=5,
            word_timestamps=True,
            vad_filter=True,
            vad_parameters=dict(min_silence_duration_ms=500),
        )

        words: list[Word] = []
        for seg in raw_segments:
            for w in seg.words or []:
                text = w.word.strip()
                if text:
                    words.append(Word(text=text, start=w.start, end=w.end))

        segments = group_words(words, self.max_words, self.max_duration)
        elapsed = time.time() - t0
        full_text = "\n".join(s.text for s in segments)

        log_success(f"[{language}] Transcribed in {elapsed:.1f}s")
        log_success(f"[{language}] Words: {len(words)}, Segments: {len(segments)}")

        return TranscriptResult(
            text=full_text,
            segments=segments,
            language=language,
            duration=info.duration,
            transcribe_time=elapsed,
            engine=f"whisper-{self.model_size}",
        )
