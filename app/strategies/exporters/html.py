"""Printable HTML rendering for finished documents.

The same page is used for the print dialog and for previews; only the
print path includes the script that opens the dialog on load.
"""

import re
from datetime import date
from pathlib import PurePath

from jinja2 import Environment, select_autoescape

DEFAULT_FOOTER = "Generated by Legal Document Engine"

_MARKDOWN_TITLE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_FILE_EXTENSIONS = {".pdf", ".txt", ".html", ".htm", ".md"}

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ language }}">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
      @page {
        size: A4;
        margin: 2cm;
      }
      html, body {
        margin: 0;
        padding: 0;
        font-size: 12pt;
        color: black;
        background-color: white;
      }
      body {
        font-family: "Times New Roman", Times, Georgia, serif;
        line-height: 1.5;
        padding: 0.5cm;
      }
      .document-header {
        text-align: center;
        margin-bottom: 1.5cm;
      }
      .document-title {
        font-size: 18pt;
        font-weight: bold;
        margin-bottom: 0.5cm;
      }
      .document-date {
        font-size: 12pt;
        margin-bottom: 1cm;
        color: #444;
      }
      pre {
        white-space: pre-wrap;
        word-wrap: break-word;
        font-family: "Courier New", Courier, monospace;
        font-size: 11pt;
        line-height: 1.4;
        margin: 0;
      }
      .document-footer {
        margin-top: 1cm;
        font-size: 9pt;
        color: #999;
        text-align: right;
      }
      @media print {
        body {
          padding: 0;
          -webkit-print-color-adjust: exact;
          print-color-adjust: exact;
        }
        .document-footer {
          position: fixed;
          bottom: 0.5cm;
          right: 0.5cm;
        }
      }
    </style>
  </head>
  <body>
    <div class="document-header">
      <div class="document-title">{{ title }}</div>
      <div class="document-date">{{ generated_on }}</div>
    </div>
    <div class="document-content">
      <pre>{{ content }}</pre>
    </div>
    {% if footer %}<div class="document-footer">{{ footer }}</div>{% endif %}
    {% if auto_print %}
    <script>
      window.addEventListener("load", function () {
        window.focus();
        window.print();
      });
    </script>
    {% endif %}
  </body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))
_page = _env.from_string(_PAGE_TEMPLATE)


def format_long_date(value: date) -> str:
    """``date(2026, 10, 18)`` -> ``October 18, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"


def derive_title(content: str, title: str | None = None) -> str:
    """Pick the heading shown on the printed page.

    A leading Markdown ``# Heading`` in the content wins. Otherwise the given
    title is used with any file extension removed.
    """
    if content.lstrip().startswith("#"):
        match = _MARKDOWN_TITLE.search(content.lstrip())
        if match and match.group(1).strip():
            return match.group(1).strip()

    if not title or not title.strip():
        return "Document"

    title = title.strip()
    path = PurePath(title)
    if path.suffix.lower() in _FILE_EXTENSIONS and path.stem:
        return path.stem
    return title


def render_document_html(
    content: str,
    title: str,
    *,
    auto_print: bool = False,
    generated_on: date | None = None,
    footer: str | None = DEFAULT_FOOTER,
    language: str = "en",
) -> str:
    """Render a document as a standalone, print-styled HTML page.

    Args:
        content: Final document text, shown preformatted.
        title: Page heading.
        auto_print: Include the script that opens the print dialog on load.
        generated_on: Date shown under the heading. Defaults to today.
        footer: Footer text, or None for no footer.
        language: ``lang`` attribute of the page.

    Returns:
        The HTML page. Content and title are HTML-escaped.
    """
    return _page.render(
        content=content,
        title=title,
        auto_print=auto_print,
        generated_on=format_long_date(generated_on or date.today()),
        footer=footer,
        language=language,
    )
