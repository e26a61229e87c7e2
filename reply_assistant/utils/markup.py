# reply_assistant/utils/markup.py
import html


def rtl_paragraph(text: str) -> str:
    """Right-to-left paragraph for Arabic text; model output is always escaped"""
    content = html.escape(text or "").replace("\n", "<br>")
    return f'<p dir="rtl" lang="ar">{content}</p>'
