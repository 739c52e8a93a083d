"""
Minimal markdown to HTML conversion for content summaries.

Handles headings (# to ###), **bold**, *italic*, unordered (-) and ordered
(1.) lists, fenced code blocks and blank-line separated paragraphs. The
source is HTML-escaped first, so embedded markup is shown as text.
"""
import html
import re
from typing import List

HEADING_RE = re.compile(r'^(#{1,3}) (.*)$')
BULLET_RE = re.compile(r'^- (.*)$')
NUMBERED_RE = re.compile(r'^\d+\. (.*)$')
BOLD_RE = re.compile(r'\*\*(.+?)\*\*')
ITALIC_RE = re.compile(r'\*(.+?)\*')


def render_inline(text: str) -> str:
    text = BOLD_RE.sub(r'<strong>\1</strong>', text)
    return ITALIC_RE.sub(r'<em>\1</em>', text)


def markdown_to_html(markdown: str) -> str:
    blocks: List[str] = []
    paragraph: List[str] = []
    list_tag = None
    list_items: List[str] = []
    code_lines = None

    def flush_paragraph():
        if paragraph:
            blocks.append(f"<p>{render_inline(' '.join(paragraph))}</p>")
            paragraph.clear()

    def flush_list():
        nonlocal list_tag
        if list_tag:
            items = ''.join(f"<li>{render_inline(item)}</li>" for item in list_items)
            blocks.append(f"<{list_tag}>{items}</{list_tag}>")
            list_items.clear()
            list_tag = None

    for raw_line in html.escape(markdown or '', quote=False).split('\n'):
        line = raw_line.rstrip()
        stripped = line.strip()

        if stripped.startswith('```'):
            if code_lines is None:
                flush_paragraph()
                flush_list()
                code_lines = []
            else:
                blocks.append("<pre><code>" + '\n'.join(code_lines) + "</code></pre>")
                code_lines = None
            continue

        if code_lines is not None:
            code_lines.append(raw_line)
            continue

        if not stripped:
            flush_paragraph()
            flush_list()
            continue

        heading = HEADING_RE.match(stripped)
        bullet = BULLET_RE.match(stripped)
        numbered = NUMBERED_RE.match(stripped)

        if heading:
            flush_paragraph()
            flush_list()
            level = len(heading.group(1))
            blocks.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
        elif bullet or numbered:
            flush_paragraph()
            tag = 'ul' if bullet else 'ol'
            if list_tag != tag:
                flush_list()
                list_tag = tag
            list_items.append((bullet or numbered).group(1))
        else:
            flush_list()
            paragraph.append(stripped)

    # unterminated fence: keep the code rather than drop it
    if code_lines is not None:
        blocks.append("<pre><code>" + '\n'.join(code_lines) + "</code></pre>")
    flush_paragraph()
    flush_list()

    return '\n'.join(blocks)
