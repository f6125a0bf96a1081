"""Tests for the code highlighting rules and the embedded client script."""

import json
import re

import pytest

from inkview.highlight import (
    CLIENT_SCRIPT,
    HIGHLIGHT_CONFIG_TOKEN,
    LANGUAGES,
    CodeToken,
    highlight,
    normalize_language,
    tokenize,
)


def non_plain(tokens):
    return [(token.text, token.kind) for token in tokens if token.kind != "plain"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("js", "javascript"),
        ("ts", "javascript"),
        ("TypeScript", "javascript"),
        ("py", "python"),
        ("sh", "bash"),
        ("zsh", "bash"),
        ("json", "json"),
        ("", "plain"),
        (None, "plain"),
        ("rust", "rust"),
    ],
)
def test_normalize_language(name, expected):
    assert normalize_language(name) == expected


def test_python_keywords_numbers_and_comment():
    tokens = tokenize("def f(): return 1  # ok", "python")
    assert non_plain(tokens) == [
        ("def", "keyword"),
        ("return", "keyword"),
        ("1", "number"),
        ("# ok", "comment"),
    ]


def test_tokens_cover_input_without_overlap():
    code = 'def f(x):\n    s = "a # b"  # note\n    return x + 2.5\n'
    tokens = tokenize(code, "py")
    assert "".join(token.text for token in tokens) == code
    assert ("\"a # b\"", "string") in non_plain(tokens)
    assert ("# note", "comment") in non_plain(tokens)
    assert ("2.5", "number") in non_plain(tokens)


def test_adjacent_plain_text_is_merged():
    tokens = tokenize("x = y", "python")
    assert tokens == [CodeToken("x = y", "plain")]


def test_string_escapes_are_honoured():
    tokens = tokenize(r'x = "a\"b" // done', "javascript")
    assert non_plain(tokens) == [(r'"a\"b"', "string"), ("// done", "comment")]


def test_keywords_inside_strings_and_comments_are_not_keywords():
    tokens = tokenize("'return' # if", "python")
    assert non_plain(tokens) == [("'return'", "string"), ("# if", "comment")]


def test_keywords_match_whole_words_only():
    tokens = tokenize("define classy import_x", "python")
    assert non_plain(tokens) == []


def test_block_comments_span_lines():
    code = "let a = 1; /* one\ntwo */ let b = `t`;"
    assert non_plain(tokenize(code, "js")) == [
        ("let", "keyword"),
        ("1", "number"),
        ("/* one\ntwo */", "comment"),
        ("let", "keyword"),
        ("`t`", "string"),
    ]


def test_json_has_only_double_quoted_strings_and_no_comments():
    tokens = tokenize("{\"a\": true, 'b': 2} // x", "json")
    assert non_plain(tokens) == [
        ('"a"', "string"),
        ("true", "keyword"),
        ("2", "number"),
    ]


def test_bash_hash_comments():
    assert non_plain(tokenize("for f in *; do echo \"$f\"; done # loop", "sh")) == [
        ("for", "keyword"),
        ("in", "keyword"),
        ("do", "keyword"),
        ('"$f"', "string"),
        ("done", "keyword"),
        ("# loop", "comment"),
    ]


def test_unknown_language_highlights_numbers_only():
    assert non_plain(tokenize('fn main() { let x = "7"; 42 }', "rust")) == [("7", "number"), ("42", "number")]


def test_numbers_inside_identifiers_are_plain():
    assert non_plain(tokenize("x1 = v2", None)) == []


def test_highlight_wraps_and_escapes():
    html = highlight('if a < 3: print("<b>")', "python")
    assert html == (
        '<span class="token keyword">if</span> a &lt; <span class="token number">3</span>: '
        'print(<span class="token string">"&lt;b&gt;"</span>)'
    )


def test_every_language_declares_rules():
    for name, rules in LANGUAGES.items():
        assert set(rules) == {"keywords", "strings", "comments"}, name


def test_client_script_embeds_generated_rules():
    assert HIGHLIGHT_CONFIG_TOKEN not in CLIENT_SCRIPT
    match = re.search(r"const config = (\{.*?\});\n", CLIENT_SCRIPT)
    assert match is not None
    config = json.loads(match.group(1).replace("<\\/", "</"))
    assert config["aliases"]["py"] == "python"
    assert set(config["languages"]) == set(LANGUAGES)
    assert config["languages"]["json"]["spans"] == '("(?:\\\\.|[^"\\\\])*")|((?!))'
    assert config["languages"]["plain"]["spans"] is None


def test_client_script_copy_behaviour():
    assert "navigator.clipboard" in CLIENT_SCRIPT
    assert 'document.execCommand("copy")' in CLIENT_SCRIPT
    assert "COPY_FEEDBACK_MS = 1400" in CLIENT_SCRIPT
    assert "DOMContentLoaded" in CLIENT_SCRIPT
    assert "</script" not in CLIENT_SCRIPT


# ===========================================================================
# The in-document script, run in Qt's JavaScript engine
# ===========================================================================


@pytest.fixture(scope="module")
def js_engine(qapp):
    from PySide6.QtQml import QJSEngine

    engine = QJSEngine()
    global_object = engine.globalObject()
    global_object.setProperty("window", global_object)
    # A still-loading document defers block enhancement, leaving only the
    # highlighter entry point to call.
    global_object.setProperty(
        "document", engine.evaluate("({readyState: 'loading', addEventListener: function () {}})")
    )
    result = engine.evaluate(CLIENT_SCRIPT)
    assert not result.isError(), result.toString()
    return engine


def client_highlight(engine, code, language):
    call = f"window.__inkviewHighlightCode({json.dumps(code)}, {json.dumps(normalize_language(language))})"
    result = engine.evaluate(call)
    assert not result.isError(), result.toString()
    return result.toString()


def test_word_boundaries_are_ascii_only():
    assert non_plain(tokenize("é1 = x٣ + 2", "py")) == [("1", "number"), ("2", "number")]


@pytest.mark.parametrize(
    "code, language",
    [
        ("def f(): return 1  # ok", "python"),
        ("é1 = x٣ + 2", "py"),
        ("naïve_if = résumé2 if ü else 3.5", "python"),
        ('s = "a\\"b # c" # note\nreturn None', "py"),
        ("let a = 1; /* one\ntwo */ const t = `x${a}` // é", "js"),
        ('{"a": true, "ü": [1, 2.5, null]} // no comments', "json"),
        ("for f in *; do echo \"$f\" # x\ndone", "zsh"),
        ("guard let x = y else { return 0 }", "swift"),
        ("fn main() { let x = \"7\"; 42 < 43 && 1 > 0 }", "rust"),
        ("", None),
    ],
)
def test_client_script_matches_python_highlighter(js_engine, code, language):
    assert client_highlight(js_engine, code, language) == highlight(code, language)
