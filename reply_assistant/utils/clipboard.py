# reply_assistant/utils/clipboard.py
import html
import json

import streamlit.components.v1 as components

from reply_assistant.logger import get_logger

logger = get_logger(__name__)


def copy_button_html(text: str, label: str = "Copy All") -> str:
    """A button that writes text to the clipboard when clicked.

    The click has to land inside the component's own frame; browsers refuse
    clipboard writes without a user gesture in that frame.
    """
    # JSON string literals with "<" escaped cannot close the script tag
    literal = json.dumps(text, ensure_ascii=False).replace("<", "\\u003c")
    label_literal = json.dumps(label, ensure_ascii=False).replace("<", "\\u003c")
    return f"""
    <button id="copyBtn"
            style="padding:4px 10px;border-radius:8px;border:1px solid #cbd5e1;background:#f1f5f9;cursor:pointer;font-size:0.8em;">
      {html.escape(label)}
    </button>
    <script>
      (function() {{
        var b = document.getElementById('copyBtn');
        var txt = {literal}, label = {label_literal};
        b.addEventListener('click', function() {{
          navigator.clipboard.writeText(txt).then(function() {{
            b.innerText = '✓ Copied';
          }}, function() {{
            b.innerText = 'Copy failed, select the text instead';
          }}).then(function() {{
            setTimeout(function() {{ b.innerText = label; }}, 1500);
          }});
        }});
      }})();
    </script>
    """


def copy_to_clipboard(text: str, label: str = "Copy All") -> bool:
    """Render a copy button for text; blank text renders nothing"""
    if not text or not text.strip():
        return False
    try:
        components.html(copy_button_html(text, label), height=40)
    except Exception:
        logger.exception("Could not render copy button")
        return False
    return True
