"""Tests for HTML document assembly."""

from inkview.document import ERROR_DOCUMENT_TITLE, STYLESHEET, assemble, error_document
from inkview.highlight import CLIENT_SCRIPT


def test_assemble_wraps_body_in_full_document():
    doc = assemble("<p>hello</p>", "notes.md")
    assert doc.startswith("<!doctype html>")
    assert "<title>notes.md</title>" in doc
    assert "<main><p>hello</p></main>" in doc
    assert doc.rstrip().endswith("</html>")


def test_assemble_escapes_title_but_not_body():
    doc = assemble("<em>raw</em>", "<b>&\"x\".md")
    assert "<title>&lt;b&gt;&amp;&quot;x&quot;.md</title>" in doc
    assert "<em>raw</em>" in doc


def test_assemble_embeds_static_style_and_script():
    doc = assemble("", "a")
    assert f"<style>{STYLESHEET}</style>" in doc
    assert f"<script>{CLIENT_SCRIPT}</script>" in doc
    assert doc.index("</main>") < doc.index("<script>")


def test_assemble_is_pure():
    assert assemble("<p>x</p>", "t") == assemble("<p>x</p>", "t")


def test_stylesheet_has_dark_variant_and_token_classes():
    assert "prefers-color-scheme: dark" in STYLESHEET
    assert "serif" in STYLESHEET
    for kind in ("keyword", "string", "comment", "number"):
        assert f".token.{kind}" in STYLESHEET
    assert ".copy-button" in STYLESHEET
    assert "blockquote" in STYLESHEET


def test_error_document_shows_escaped_message():
    doc = error_document("bad <path>")
    assert "<h1>Unable to load file</h1>" in doc
    assert "<p>bad &lt;path&gt;</p>" in doc
    assert f"<title>{ERROR_DOCUMENT_TITLE}</title>" in doc
