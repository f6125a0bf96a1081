"""Code block highlighting rules, a Python tokenizer and the in-document script.

The per-language rules below are the single source of truth: `tokenize()`
runs them in Python and `CLIENT_SCRIPT` embeds the very same regex sources for
the browser. Patterns are compiled with `re.ASCII` because browser regexes
treat `\b` and `\d` as ASCII-only; with that, both produce the same markup.
"""

from __future__ import annotations

import html
import json
import re
from typing import NamedTuple

# Never matches; keeps group numbering stable when a language lacks a rule.
_NEVER = "(?!)"
_NUMBER = r"\b\d+(?:\.\d+)?\b"
_DOUBLE_QUOTED = r'"(?:\\.|[^"\\])*"'
_SINGLE_QUOTED = r"'(?:\\.|[^'\\])*'"
_BACKTICK_QUOTED = r"`(?:\\.|[^`\\])*`"
_C_COMMENTS = r"//[^\n]*|/\*[\s\S]*?\*/"
_HASH_COMMENTS = r"#[^\n]*"

HIGHLIGHT_CONFIG_TOKEN = "__INKVIEW_HIGHLIGHT_CONFIG_JSON__"

LANGUAGE_ALIASES = {
    "js": "javascript",
    "javascript": "javascript",
    "ts": "javascript",
    "typescript": "javascript",
    "py": "python",
    "python": "python",
    "sh": "bash",
    "bash": "bash",
    "zsh": "bash",
    "swift": "swift",
    "json": "json",
}

LANGUAGES: dict[str, dict] = {
    "swift": {
        "keywords": [
            "let", "var", "func", "class", "struct", "enum", "protocol", "extension",
            "import", "return", "if", "else", "switch", "case", "for", "while", "in",
            "guard", "defer", "do", "catch", "try", "throws", "throw", "public", "private",
            "fileprivate", "internal", "open", "static", "final", "override", "where",
        ],
        "strings": f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}",
        "comments": _C_COMMENTS,
    },
    "javascript": {
        "keywords": [
            "const", "let", "var", "function", "class", "return", "if", "else", "switch",
            "case", "for", "while", "in", "of", "try", "catch", "finally", "throw", "new",
            "this", "super", "import", "export", "default", "async", "await",
        ],
        "strings": f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}|{_BACKTICK_QUOTED}",
        "comments": _C_COMMENTS,
    },
    "python": {
        "keywords": [
            "def", "class", "return", "if", "elif", "else", "for", "while", "in", "try",
            "except", "finally", "import", "from", "as", "pass", "break", "continue",
            "with", "lambda", "yield", "True", "False", "None",
        ],
        "strings": f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}",
        "comments": _HASH_COMMENTS,
    },
    "bash": {
        "keywords": [
            "if", "then", "fi", "for", "while", "do", "done", "function", "case",
            "esac", "in", "select", "elif", "else",
        ],
        "strings": f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}",
        "comments": _HASH_COMMENTS,
    },
    "json": {
        "keywords": ["true", "false", "null"],
        "strings": _DOUBLE_QUOTED,
        "comments": None,
    },
    "plain": {
        "keywords": [],
        "strings": None,
        "comments": None,
    },
}


class CodeToken(NamedTuple):
    text: str
    kind: str


def normalize_language(name: str | None) -> str:
    """Map a fence info string such as `py` or `ZSH` to a rule-table key."""
    if not name:
        return "plain"
    lower = name.strip().lower()
    return LANGUAGE_ALIASES.get(lower, lower)


def _span_source(rules: dict) -> str | None:
    """Pass 1 regex: group 1 is a string literal, group 2 a comment."""
    strings = rules.get("strings")
    comments = rules.get("comments")
    if not strings and not comments:
        return None
    return f"({strings or _NEVER})|({comments or _NEVER})"


def _word_source(rules: dict) -> str:
    """Pass 2 regex: group 1 is a keyword, group 2 a number."""
    keywords = rules.get("keywords") or []
    keyword_part = r"\b(?:" + "|".join(re.escape(word) for word in keywords) + r")\b" if keywords else _NEVER
    return f"({keyword_part})|({_NUMBER})"


def _compiled_rules() -> dict[str, dict[str, str | None]]:
    return {name: {"spans": _span_source(rules), "words": _word_source(rules)} for name, rules in LANGUAGES.items()}


_SOURCES = _compiled_rules()
_PATTERNS = {
    name: (
        re.compile(sources["spans"], re.ASCII) if sources["spans"] else None,
        re.compile(sources["words"], re.ASCII),
    )
    for name, sources in _SOURCES.items()
}


def _word_tokens(text: str, words: re.Pattern) -> list[CodeToken]:
    tokens: list[CodeToken] = []
    last = 0
    for match in words.finditer(text):
        if match.start() > last:
            tokens.append(CodeToken(text[last : match.start()], "plain"))
        kind = "keyword" if match.group(1) is not None else "number"
        tokens.append(CodeToken(match.group(0), kind))
        last = match.end()
    if last < len(text):
        tokens.append(CodeToken(text[last:], "plain"))
    return tokens


def tokenize(code: str, language: str | None) -> list[CodeToken]:
    """Split `code` into keyword/string/comment/number/plain tokens."""
    normalized = normalize_language(language)
    spans, words = _PATTERNS.get(normalized, _PATTERNS["plain"])

    tokens: list[CodeToken] = []
    if spans is None:
        tokens = _word_tokens(code, words)
    else:
        last = 0
        for match in spans.finditer(code):
            tokens.extend(_word_tokens(code[last : match.start()], words))
            kind = "string" if match.group(1) is not None else "comment"
            tokens.append(CodeToken(match.group(0), kind))
            last = match.end()
        tokens.extend(_word_tokens(code[last:], words))

    merged: list[CodeToken] = []
    for token in tokens:
        if merged and token.kind == "plain" and merged[-1].kind == "plain":
            merged[-1] = CodeToken(merged[-1].text + token.text, "plain")
        else:
            merged.append(token)
    return merged


def highlight(code: str, language: str | None) -> str:
    """Return `code` as escaped HTML with token spans, matching the browser output."""
    parts = []
    for token in tokenize(code, language):
        escaped = html.escape(token.text, quote=False)
        if token.kind == "plain":
            parts.append(escaped)
        else:
            parts.append(f'<span class="token {token.kind}">{escaped}</span>')
    return "".join(parts)


_SCRIPT_TEMPLATE = """
(() => {
  const config = __INKVIEW_HIGHLIGHT_CONFIG_JSON__;
  const COPY_FEEDBACK_MS = 1400;

  function normalizeLanguage(name) {
    if (!name) return "plain";
    const lower = name.trim().toLowerCase();
    return config.aliases[lower] || lower;
  }

  function escapeHtml(text) {
    return text
      .replace(/&/g, "&amp;")
      .replace(/</g, "&lt;")
      .replace(/>/g, "&gt;");
  }

  function wrapToken(text, kind) {
    return `<span class="token ${kind}">${escapeHtml(text)}</span>`;
  }

  function highlightWords(text, rules) {
    const pattern = new RegExp(rules.words, "g");
    let result = "";
    let lastIndex = 0;
    let match;
    while ((match = pattern.exec(text)) !== null) {
      result += escapeHtml(text.slice(lastIndex, match.index));
      result += wrapToken(match[0], match[1] !== undefined ? "keyword" : "number");
      lastIndex = pattern.lastIndex;
    }
    return result + escapeHtml(text.slice(lastIndex));
  }

  function highlightCode(code, language) {
    const rules = config.languages[language] || config.languages.plain;
    if (!rules.spans) return highlightWords(code, rules);

    const pattern = new RegExp(rules.spans, "g");
    let result = "";
    let lastIndex = 0;
    let match;
    while ((match = pattern.exec(code)) !== null) {
      result += highlightWords(code.slice(lastIndex, match.index), rules);
      result += wrapToken(match[0], match[1] !== undefined ? "string" : "comment");
      lastIndex = pattern.lastIndex;
    }
    return result + highlightWords(code.slice(lastIndex), rules);
  }

  function flashCopied(button) {
    if (!button) return;
    button.classList.add("copied");
    button.textContent = "Copied";
    setTimeout(() => {
      button.classList.remove("copied");
      button.textContent = "Copy";
    }, COPY_FEEDBACK_MS);
  }

  function legacyCopy(text, button) {
    const textarea = document.createElement("textarea");
    textarea.value = text;
    textarea.setAttribute("readonly", "");
    textarea.style.position = "fixed";
    textarea.style.top = "-1000px";
    textarea.style.opacity = "0";
    document.body.appendChild(textarea);
    textarea.focus();
    textarea.select();
    try {
      if (document.execCommand("copy")) flashCopied(button);
    } finally {
      document.body.removeChild(textarea);
    }
  }

  function copyBlock(pre, code, button) {
    const text = code.textContent || "";
    if (navigator.clipboard && navigator.clipboard.writeText) {
      navigator.clipboard.writeText(text)
        .then(() => flashCopied(button))
        .catch(() => legacyCopy(text, button));
    } else {
      legacyCopy(text, button);
    }
  }

  function addCopyButton(pre, code) {
    let button = pre.querySelector(".copy-button");
    if (!button) {
      button = document.createElement("button");
      button.className = "copy-button";
      button.type = "button";
      button.textContent = "Copy";
      button.addEventListener("click", (event) => {
        event.preventDefault();
        event.stopPropagation();
        copyBlock(pre, code, button);
      });
      pre.appendChild(button);
    }
    pre.addEventListener("click", () => {
      const selection = window.getSelection();
      if (selection && selection.toString().length > 0) return;
      copyBlock(pre, code, button);
    });
  }

  function enhanceCodeBlocks() {
    document.querySelectorAll("pre > code").forEach((code) => {
      const match = (code.className || "").match(/language-([A-Za-z0-9_+-]+)/);
      const language = normalizeLanguage(match ? match[1] : "");
      code.innerHTML = highlightCode(code.textContent || "", language);
      addCopyButton(code.parentElement, code);
    });
  }

  window.__inkviewHighlightCode = highlightCode;

  if (document.readyState === "loading") {
    document.addEventListener("DOMContentLoaded", enhanceCodeBlocks);
  } else {
    enhanceCodeBlocks();
  }
})();
"""


def _build_client_script() -> str:
    payload = json.dumps({"aliases": LANGUAGE_ALIASES, "languages": _SOURCES})
    # `</` inside an inline script would close the element early.
    payload = payload.replace("</", "<\\/")
    return _SCRIPT_TEMPLATE.replace(HIGHLIGHT_CONFIG_TOKEN, payload)


CLIENT_SCRIPT = _build_client_script()
