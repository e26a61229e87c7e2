from unittest.mock import MagicMock

import pytest

from reply_assistant.utils import clipboard


@pytest.mark.parametrize("text", ["", "   ", None])
def test_copy_blank_text_is_a_noop(monkeypatch, text):
    html_mock = MagicMock()
    monkeypatch.setattr(clipboard.components, "html", html_mock)

    assert clipboard.copy_to_clipboard(text) is False
    html_mock.assert_not_called()


def test_copy_renders_button_inside_component(monkeypatch):
    html_mock = MagicMock()
    monkeypatch.setattr(clipboard.components, "html", html_mock)

    assert clipboard.copy_to_clipboard('أهلا "friend"') is True

    markup = html_mock.call_args[0][0]
    assert '<button id="copyBtn"' in markup
    assert 'var txt = "أهلا \\"friend\\""' in markup
    assert html_mock.call_args[1] == {"height": 40}


def test_clipboard_write_only_happens_on_click():
    markup = clipboard.copy_button_html("Salam")

    listener = markup.index("addEventListener('click'")
    assert markup.index("navigator.clipboard.writeText") > listener
    assert markup.count("writeText") == 1


def test_copy_failure_is_reported_on_the_button():
    markup = clipboard.copy_button_html("Salam")

    assert "Copy failed" in markup
    assert ".catch(function(){})" not in markup


def test_markup_cannot_close_its_tags():
    markup = clipboard.copy_button_html("</script><b>hi</b>", label="<i>Copy</i>")

    assert markup.count("</script>") == 1
    assert "<i>" not in markup
    assert "&lt;i&gt;Copy&lt;/i&gt;" in markup


def test_copy_failure_is_swallowed(monkeypatch):
    monkeypatch.setattr(clipboard.components, "html", MagicMock(side_effect=RuntimeError("no browser")))

    assert clipboard.copy_to_clipboard("Salam") is False
