"""CLI 入口 - argparse 参数解析与流程编排"""

import argparse
import os
import sys

from duosub import __version__
from duosub.config import Config
from duosub.models import FusionResult
from duosub.subtitle import render_srt
from duosub.utils import (
    _Colors as _C,
    log_info, log_warn, log_error, format_time,
)

_PREVIEW_CUES = 8


def _print_preview(result: FusionResult) -> None:
    """打印前几条字幕和两路识别的概况"""
    for name, transcript in (("RU", result.ru), ("EN", result.en)):
        if transcript is None:
            continue
        log_info(
            f"{name}: {transcript.engine}, {len(transcript.segments)} segments, "
            f"{transcript.transcribe_time:.1f}s"
        )
    if result.segments:
        log_info(f"Subtitle span: {format_time(result.segments[0].start)} → {format_time(result.segments[-1].end)}")
    else:
        log_warn("No speech recognized, subtitle file is empty")
        return

    preview = render_srt(result.segments[:_PREVIEW_CUES])
    if len(result.segments) > _PREVIEW_CUES:
        preview += f"... ({len(result.segments) - _PREVIEW_CUES} more cues)\n"
    print(f"\n{_C.DIM}{preview}{_C.RESET}")


def _build_config_from_args(args: argparse.Namespace) -> Config:
    """从 argparse 结果构建 Config"""
    return Config(
        input=args.input,
        engine=args.engine or "",
        whisper_model=args.model or "",
        output=args.output,
        keep_audio=args.keep_audio,
        parallel=not args.sequential,
        verbose=args.verbose,
        max_words_per_segment=args.max_words,
        max_segment_duration=args.max_duration,
    )


def _prompt(icon: str, msg: str, default: str = "") -> str:
    """带图标的交互提示，支持默认值"""
    hint = f" ({default})" if default else ""
    try:
        return input(f"  {icon} {msg}{hint}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(0)


def _interactive_mode() -> Config:
    """交互模式：逐步提示用户输入参数，返回 Config"""
    # 输入文件（必填）
    while True:
        source = _prompt("📎", "视频或音频文件路径")
        if source:
            break
        log_warn("Please enter a file path")

    # ASR 引擎
    engine_input = _prompt("🎙️", "ASR 引擎 [whisper/paraformer]", "whisper")
    engine = engine_input if engine_input in ("whisper", "paraformer") else "whisper"

    # 输出路径
    output = _prompt("💾", "字幕输出路径", "同目录 .srt") or None

    # 详细日志
    verbose_input = _prompt("🔍", "打印每个区间的选择过程? [y/N]", "N")
    verbose = verbose_input.lower() in ("y", "yes")

    print()
    return Config(
        input=source,
        engine=engine,
        output=output,
        verbose=verbose,
    )


def _parse_args() -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="DuoSub - Media → RU + EN speech recognition → one merged SRT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s video.mp4
  %(prog)s interview.mkv --engine paraformer
  %(prog)s audio.mp3 -m medium -o subs/audio.srt
  %(prog)s lecture.mp4 --verbose --sequential
        """,
    )

    parser.add_argument(
        "input",
        help="Local video/audio file",
    )
    parser.add_argument(
        "-e", "--engine",
        default=None,
        choices=["whisper", "paraformer"],
        help="ASR engine for both passes (default: whisper, or DUOSUB_ENGINE)",
    )
    parser.add_argument(
        "-m", "--model",
        default=None,
        choices=["tiny", "base", "small", "medium", "large-v2", "large-v3"],
        help="Whisper model size, only for --engine whisper (default: small)",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output .srt path (default: next to the input file)",
    )
    parser.add_argument(
        "--max-words",
        type=int,
        default=10,
        help="Max words per recognized segment (default: 10)",
    )
    parser.add_argument(
        "--max-duration",
        type=float,
        default=7.0,
        help="Max seconds per recognized segment (default: 7.0)",
    )
    parser.add_argument(
        "--keep-audio",
        action="store_true",
        help="Keep the extracted 16kHz wav next to the input file",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run the two recognition passes one after another",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log which recognizer won each interval and why",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args()


def _print_banner() -> None:
    print(f"""
{_C.MAGENTA}{_C.BOLD}  ✦ DuoSub ✦{_C.RESET}
{_C.DIM}  Media → RU + EN recognition → merged subtitles{_C.RESET}
    """)


def main() -> None:
    from dotenv import load_dotenv
    load_dotenv()

    _print_banner()

    # 无参数 → 交互模式，有参数 → CLI 模式
    if len(sys.argv) == 1:
        config = _interactive_mode()
    else:
        args = _parse_args()
        config = _build_config_from_args(args)

    from duosub.pipeline import run

    try:
        result = run(config)
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        log_error(str(e))
        sys.exit(1)

    _print_preview(result)

    print(f"\n{_C.GREEN}{_C.BOLD}  ✦ All done! Subtitles saved to: {os.path.abspath(result.subtitle_path)} ✦{_C.RESET}\n")


if __name__ == "__main__":
    main()
