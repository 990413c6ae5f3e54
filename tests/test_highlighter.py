"""Tests for marker and metadata decoration in sdg_inspect/formatting/highlighter.py."""

from __future__ import annotations

import json

from sdg_inspect.formatting import escape_html, highlight_qna_pairs, process_metadata
from sdg_inspect.formatting.highlighter import (
    ASSISTANT_TAG,
    USER_TAG,
    has_markers,
    process_messages,
)


class TestEscapeHtml:
    """Tests for escape_html()."""

    def test_escapes_all_special_characters(self):
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;"
        )

    def test_ampersand_escaped_first(self):
        """Existing entities are escaped again, not preserved."""
        assert escape_html("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert escape_html("hello world") == "hello world"


class TestHighlightQnaPairs:
    """Tests for highlight_qna_pairs()."""

    def test_single_pair(self):
        result = highlight_qna_pairs("<|user|>Q<|assistant|>A")
        assert result == (
            USER_TAG
            + '\n<div class="sdg-question">Q</div>\n'
            + ASSISTANT_TAG
            + '\n<div class="sdg-answer">A</div>\n'
        )

    def test_prefix_is_kept_and_segments_trimmed(self):
        result = highlight_qna_pairs("Context first <|user|> What is 2+2? <|assistant|> 4")
        assert result.startswith("Context first " + USER_TAG)
        assert '<div class="sdg-question">What is 2+2?</div>' in result
        assert '<div class="sdg-answer">4</div>' in result

    def test_no_markers_returns_input(self):
        assert highlight_qna_pairs("plain text <b>bold</b>") == "plain text <b>bold</b>"

    def test_content_without_markers_is_not_escaped(self):
        assert highlight_qna_pairs("a < b & c") == "a < b & c"

    def test_raw_markers_do_not_survive(self):
        result = highlight_qna_pairs("<|user|>Q<|assistant|>A")
        assert "<|user|>" not in result
        assert "<|assistant|>" not in result

    def test_one_tag_per_marker(self):
        content = "<|user|>Q1<|assistant|>A1<|user|>Q2<|assistant|>A2"
        result = highlight_qna_pairs(content)
        assert result.count(USER_TAG) == 2
        assert result.count(ASSISTANT_TAG) == 2

    def test_multiple_pairs_are_flat(self):
        """Each marker span is wrapped on its own, never nested."""
        content = "<|user|>Q1<|assistant|>A1<|user|>Q2<|assistant|>A2"
        result = highlight_qna_pairs(content)
        assert result.count('<div class="sdg-question">') == 2
        assert result.count('<div class="sdg-answer">') == 2
        assert '<div class="sdg-question">Q1</div>' in result
        assert '<div class="sdg-answer">A2</div>' in result
        # every wrapper closes before the next tag opens
        for chunk in result.split("<span")[1:]:
            assert chunk.count("<div") == chunk.count("</div>")

    def test_lone_assistant_marker(self):
        result = highlight_qna_pairs("answer only <|assistant|>done")
        assert result == "answer only " + ASSISTANT_TAG + '\n<div class="sdg-answer">done</div>\n'

    def test_marker_at_end_wraps_empty_segment(self):
        result = highlight_qna_pairs("Q<|user|>")
        assert result == "Q" + USER_TAG + '\n<div class="sdg-question"></div>\n'

    def test_has_markers(self):
        assert has_markers("x <|user|> y")
        assert has_markers("<|assistant|>")
        assert not has_markers("<|system|>")


class TestProcessMetadata:
    """Tests for process_metadata()."""

    def test_wraps_document_and_domain(self):
        record = {"metadata": json.dumps({"sdgDocument": "Doc", "domain": "math", "x": 1})}
        process_metadata(record)
        parsed = json.loads(record["metadata"])
        assert parsed["sdgDocument"] == '<span class="sdg-document">Doc</span>'
        assert parsed["domain"] == '<span class="sdg-domain">math</span>'
        assert parsed["x"] == 1

    def test_malformed_metadata_left_untouched(self):
        record = {"metadata": "{not json"}
        process_metadata(record)
        assert record["metadata"] == "{not json"

    def test_non_object_metadata_left_untouched(self):
        record = {"metadata": "[1, 2]"}
        process_metadata(record)
        assert record["metadata"] == "[1, 2]"

    def test_non_string_metadata_left_untouched(self):
        record = {"metadata": {"domain": "math"}}
        process_metadata(record)
        assert record["metadata"] == {"domain": "math"}

    def test_missing_metadata(self):
        record = {"messages": []}
        process_metadata(record)
        assert "metadata" not in record

    def test_empty_values_not_wrapped(self):
        record = {"metadata": json.dumps({"sdgDocument": "", "domain": None})}
        process_metadata(record)
        parsed = json.loads(record["metadata"])
        assert parsed == {"sdgDocument": "", "domain": None}

    def test_unicode_preserved(self):
        record = {"metadata": json.dumps({"domain": "mathématiques"})}
        process_metadata(record)
        assert "mathématiques" in record["metadata"]


class TestProcessMessages:
    """Tests for process_messages()."""

    def test_only_string_content_is_decorated(self):
        messages = [
            {"role": "user", "content": "<|user|>Q"},
            {"role": "assistant", "content": None},
            {"role": "tool", "content": {"k": "v"}},
            "not a dict",
        ]
        process_messages(messages)
        assert messages[0]["content"].startswith(USER_TAG)
        assert messages[1]["content"] is None
        assert messages[2]["content"] == {"k": "v"}
        assert messages[3] == "not a dict"
