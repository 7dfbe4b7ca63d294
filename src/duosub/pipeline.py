"""流水线编排 - 提取音频 → 两路识别 → 合并 → 写 SRT"""

import os
import shutil
from concurrent.futures import ThreadPoolExecutor

from duosub import fusion
from duosub.config import Config
from duosub.media import cleanup_audio, extract_audio, resolve_media
from duosub.models import FusionResult, MediaFile, TranscriptResult
from duosub.subtitle import default_subtitle_path, write_srt
from duosub.transcriber import AbstractTranscriber, get_transcriber
from duosub.utils import log_info, log_step, log_success, log_warn


def build_transcribers(config: Config) -> tuple[AbstractTranscriber, AbstractTranscriber]:
    """俄语、英语各一个转录器（同一种引擎）"""
    kwargs = dict(
        model=config.whisper_model,
        api_key=config.dashscope_api_key,
        max_words=config.max_words_per_segment,
        max_duration=config.max_segment_duration,
    )
    return get_transcriber(config.engine, **kwargs), get_transcriber(config.engine, **kwargs)


def recognize_both(
    audio_path: str,
    ru_transcriber: AbstractTranscriber,
    en_transcriber: AbstractTranscriber,
    ru_language: str = "ru",
    en_language: str = "en",
    parallel: bool = True,
) -> tuple[TranscriptResult, TranscriptResult]:
    """两路识别；并行时等两路都完成才返回"""
    if not parallel:
        ru = ru_transcriber.transcribe(audio_path, language=ru_language)
        en = en_transcriber.transcribe(audio_path, language=en_language)
        return ru, en

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="duosub-asr") as pool:
        ru_future = pool.submit(ru_transcriber.transcribe, audio_path, ru_language)
        en_future = pool.submit(en_transcriber.transcribe, audio_path, en_language)
        return ru_future.result(), en_future.result()


def _keep_audio(audio_path: str, media: MediaFile) -> str:
    """把提取的 wav 移到输入文件旁边，失败只警告，返回保留路径（失败为空）"""
    kept = os.path.join(os.path.dirname(media.path), f"{media.title}.duosub.wav")
    try:
        shutil.move(audio_path, kept)
    except OSError as e:
        log_warn(f"Could not keep audio at {kept}: {e}")
        return ""
    log_info(f"Audio kept: {kept}")
    return kept


def log_decision(decision: fusion.Decision) -> None:
    """fusion 的 observer：打印每个区间选了哪一路以及原因"""
    side = "RU" if decision.chosen is decision.ru else "EN"
    log_info(f"case {decision.case} → {side} {decision.chosen}  ({decision.reason})")


def run(
    config: Config,
    transcribers: tuple[AbstractTranscriber, AbstractTranscriber] | None = None,
) -> FusionResult:
    """执行完整流水线，返回 FusionResult。transcribers 为空时按 config 创建。"""
    media = resolve_media(config.input)
    ru_transcriber, en_transcriber = transcribers or build_transcribers(config)

    audio_path = extract_audio(media.path)
    kept_audio = ""
    try:
        ru, en = recognize_both(
            audio_path,
            ru_transcriber,
            en_transcriber,
            ru_language=config.ru_language,
            en_language=config.en_language,
            parallel=config.parallel,
        )
        if config.keep_audio:
            kept_audio = _keep_audio(audio_path, media)
    finally:
        cleanup_audio(audio_path)

    log_step("🔀", "Merging RU / EN segments...")
    log_info(f"RU segments: {len(ru.segments)}, EN segments: {len(en.segments)}")
    observer = log_decision if config.verbose else None
    merged = fusion.merge(ru.segments, en.segments, observer=observer)
    log_success(f"Merged segments: {len(merged)}")

    log_step("💾", "Saving subtitles...")
    subtitle_path = write_srt(merged, config.output or default_subtitle_path(media.path))

    return FusionResult(
        segments=merged,
        ru=ru,
        en=en,
        subtitle_path=subtitle_path,
        audio_path=kept_audio,
    )
