"""输入文件处理与音频提取"""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from duosub.models import MediaFile
from duosub.utils import log_step, log_info, log_error

SUPPORTED_FORMATS = {
    ".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma",  # audio
    ".mp4", ".mkv", ".avi", ".mov", ".webm", ".flv", ".ts",   # video
}

# 两路识别模型都需要单声道 16kHz PCM
SAMPLE_RATE = 16000
CHANNELS = 1


def resolve_media(source: str) -> MediaFile:
    """校验本地媒体文件，返回 MediaFile"""
    path = os.path.abspath(source)

    if not os.path.isfile(path):
        log_error(f"File not found: {path}")
        raise FileNotFoundError(f"File not found: {path}")

    ext = Path(path).suffix.lower()
    if ext not in SUPPORTED_FORMATS:
        log_error(f"Unsupported file format: {ext}")
        log_info(f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}")
        raise ValueError(f"Unsupported format: {ext}")

    log_step("📂", "Using local file")
    log_info(f"File: {path}")

    return MediaFile(path=path, title=Path(path).stem)


def extract_audio(media_path: str) -> str:
    """用 ffmpeg 提取单声道 16kHz wav，返回临时文件路径"""
    if shutil.which("ffmpeg") is None:
        log_error("ffmpeg not found, cannot extract audio")
        log_info("Install it: brew install ffmpeg / apt install ffmpeg")
        raise RuntimeError("ffmpeg not installed")

    log_step("🎧", "Extracting audio...")
    tmp_path = os.path.join(tempfile.mkdtemp(prefix="duosub_audio_"), "audio.wav")
    cmd = [
        "ffmpeg", "-i", media_path, "-vn",
        "-ac", str(CHANNELS), "-ar", str(SAMPLE_RATE),
        "-c:a", "pcm_s16le", "-y", tmp_path,
    ]

    try:
        subprocess.run(cmd, capture_output=True, text=True, timeout=600, check=True)
    except subprocess.CalledProcessError as e:
        log_error(f"ffmpeg extraction failed: {e.stderr}")
        cleanup_audio(tmp_path)
        raise RuntimeError("Audio extraction failed") from e
    except subprocess.TimeoutExpired as e:
        log_error("ffmpeg timed out")
        cleanup_audio(tmp_path)
        raise RuntimeError("Audio extraction timed out") from e

    log_info(f"Mono {SAMPLE_RATE // 1000}kHz wav: {tmp_path}")
    return tmp_path


def cleanup_audio(audio_path: str) -> None:
    """删除 extract_audio 生成的临时文件及其目录"""
    try:
        os.remove(audio_path)
    except OSError:
        pass
    try:
        os.rmdir(os.path.dirname(audio_path))
    except OSError:
        pass
