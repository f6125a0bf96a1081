"""Wrap rendered Markdown bodies in a complete, styled HTML document."""

from __future__ import annotations

import html

from .highlight import CLIENT_SCRIPT

ERROR_DOCUMENT_TITLE = "inkview"

STYLESHEET = """
    :root {
      color-scheme: light dark;
      --fg: #1c1b1a;
      --bg: #fdfbf7;
      --muted: #4e4a44;
      --link: #0f5cc9;
      --code-bg: rgba(15, 92, 201, 0.08);
      --pre-bg: #f3efe8;
      --border: #dbcfc0;
      --th-bg: #f3ede3;
      --quote-border: #d5c9b6;
      --quote-bg: rgba(213, 201, 182, 0.2);
      --button-border: rgba(28, 27, 26, 0.25);
      --button-bg: rgba(253, 251, 247, 0.9);
      --copied: #077341;
      --copied-border: rgba(7, 115, 65, 0.5);
      --token-keyword: #8b2d64;
      --token-string: #0e6b3a;
      --token-comment: #6f6a64;
      --token-number: #1a5fb4;
    }
    @media (prefers-color-scheme: dark) {
      :root {
        --fg: #ece7e1;
        --bg: #0f1113;
        --muted: #c4c0bb;
        --link: #9ad1ff;
        --code-bg: rgba(154, 209, 255, 0.12);
        --pre-bg: #1c1f22;
        --border: #2b2f33;
        --th-bg: #191c20;
        --quote-border: #4b4a44;
        --quote-bg: rgba(255, 255, 255, 0.05);
        --button-border: rgba(236, 231, 225, 0.2);
        --button-bg: rgba(15, 17, 19, 0.9);
        --copied: #6ae39c;
        --copied-border: rgba(106, 227, 156, 0.5);
        --token-keyword: #f08db0;
        --token-string: #7fe19d;
        --token-comment: #8a9096;
        --token-number: #7fb6ff;
      }
    }
    body {
      margin: 0;
      padding: 48px 56px 64px;
      font-family: "Iowan Old Style", "Palatino", "Palatino Linotype", "Times New Roman", serif;
      font-size: 17px;
      line-height: 1.65;
      background: var(--bg);
      color: var(--fg);
    }
    main {
      max-width: 920px;
      margin: 0 auto;
    }
    h1, h2, h3, h4, h5, h6 {
      font-family: "Palatino", "Iowan Old Style", "Times New Roman", serif;
      line-height: 1.2;
      margin: 1.8em 0 0.6em;
    }
    h1 { font-size: 2.4rem; letter-spacing: -0.01em; }
    h2 { font-size: 1.9rem; }
    h3 { font-size: 1.5rem; }
    p { margin: 0.9em 0; }
    a { color: var(--link); text-decoration: none; }
    a:hover { text-decoration: underline; }
    blockquote {
      margin: 1.5em 0;
      padding: 0.3em 1.2em;
      border-left: 3px solid var(--quote-border);
      color: var(--muted);
      background: var(--quote-bg);
    }
    ul, ol { padding-left: 1.4em; margin: 1em 0; }
    li { margin: 0.35em 0; }
    code {
      font-family: "SF Mono", "Menlo", "DejaVu Sans Mono", "Consolas", monospace;
      font-size: 0.92em;
      background: var(--code-bg);
      padding: 0.1em 0.3em;
      border-radius: 4px;
    }
    pre {
      position: relative;
      background: var(--pre-bg);
      padding: 18px 20px;
      border-radius: 10px;
      overflow-x: auto;
      margin: 1.2em 0;
    }
    pre code {
      background: none;
      padding: 0;
      font-size: 0.9em;
      display: block;
      white-space: pre;
    }
    .copy-button {
      position: absolute;
      top: 12px;
      right: 12px;
      font-size: 12px;
      letter-spacing: 0.03em;
      text-transform: uppercase;
      border: 1px solid var(--button-border);
      background: var(--button-bg);
      color: var(--fg);
      padding: 4px 8px;
      border-radius: 6px;
      cursor: pointer;
    }
    .copy-button.copied {
      border-color: var(--copied-border);
      color: var(--copied);
    }
    table {
      border-collapse: collapse;
      width: 100%;
      margin: 1.4em 0;
      font-size: 0.95em;
    }
    th, td {
      border: 1px solid var(--border);
      padding: 10px 12px;
      text-align: left;
    }
    th { background: var(--th-bg); }
    img {
      max-width: 100%;
      border-radius: 10px;
      margin: 1em 0;
    }
    .token.keyword { color: var(--token-keyword); font-weight: 600; }
    .token.string { color: var(--token-string); }
    .token.comment { color: var(--token-comment); font-style: italic; }
    .token.number { color: var(--token-number); }
"""


def assemble(body_html: str, title: str) -> str:
    """Build the full document; only `body_html` and the escaped title vary."""
    escaped_title = html.escape(title)
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>{escaped_title}</title>
  <style>{STYLESHEET}</style>
</head>
<body>
  <main>{body_html}</main>
  <script>{CLIENT_SCRIPT}</script>
</body>
</html>
"""


def error_document(message: str) -> str:
    """Render a minimal page explaining why the file could not be shown."""
    body = f"<h1>Unable to load file</h1><p>{html.escape(message)}</p>"
    return assemble(body, ERROR_DOCUMENT_TITLE)
