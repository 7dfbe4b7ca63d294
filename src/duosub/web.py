"""Gradio Web UI for DuoSub"""

import os
import tempfile

import gradio as gr

from duosub.config import Config
from duosub.subtitle import render_srt
from duosub.utils import format_time


def _run_pipeline(
    media_path: str | None,
    engine: str,
    model: str,
) -> tuple[str, str | None, str]:
    """
    执行完整流水线，返回 (SRT 文本, SRT 文件路径, 状态信息)。
    复用 pipeline 模块，字幕写到临时目录。
    """
    if not media_path:
        return "", None, "请先上传视频或音频文件"

    title = os.path.splitext(os.path.basename(media_path))[0]
    output = os.path.join(tempfile.mkdtemp(prefix="duosub_web_"), f"{title}.srt")
    config = Config(
        input=media_path,
        engine=engine,
        whisper_model=model,
        output=output,
    )

    from duosub.pipeline import run

    try:
        result = run(config)
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        return "", None, f"处理失败: {e}"

    status_parts: list[str] = [f"文件: {title}"]
    for name, transcript in (("RU", result.ru), ("EN", result.en)):
        if transcript is not None:
            status_parts.append(
                f"{name}: {transcript.engine}, {len(transcript.segments)} 段, "
                f"耗时 {transcript.transcribe_time:.1f}s"
            )
    status_parts.append(f"合并后字幕: {len(result.segments)} 条")
    if result.segments:
        status_parts.append(f"时间范围: {format_time(result.segments[0].start)} → {format_time(result.segments[-1].end)}")

    return render_srt(result.segments), result.subtitle_path, "\n".join(status_parts)


def _build_ui() -> gr.Blocks:
    """构建 Gradio 界面"""
    with gr.Blocks(title="DuoSub") as demo:
        gr.Markdown("# ✦ DuoSub ✦\n俄语 + 英语双模型识别，自动合并成一份字幕")

        with gr.Row():
            with gr.Column(scale=1):
                media_input = gr.File(
                    label="视频或音频文件",
                    type="filepath",
                )
                engine_radio = gr.Radio(
                    choices=["whisper", "paraformer"],
                    value="whisper",
                    label="ASR 引擎",
                )
                model_dropdown = gr.Dropdown(
                    choices=["tiny", "base", "small", "medium", "large-v3"],
                    value="small",
                    label="Whisper 模型",
                )
                run_btn = gr.Button("生成字幕", variant="primary", size="lg")

            with gr.Column(scale=2):
                srt_output = gr.Textbox(
                    label="SRT 字幕",
                    lines=20,
                    max_lines=50,
                )
                file_output = gr.File(label="下载 .srt")
                status_output = gr.Textbox(
                    label="状态信息",
                    lines=4,
                    interactive=False,
                )

        run_btn.click(
            fn=_run_pipeline,
            inputs=[media_input, engine_radio, model_dropdown],
            outputs=[srt_output, file_output, status_output],
        )

    return demo


def main() -> None:
    from dotenv import load_dotenv
    load_dotenv()

    demo = _build_ui()
    demo.launch(inbrowser=True, theme=gr.themes.Soft())


if __name__ == "__main__":
    main()
