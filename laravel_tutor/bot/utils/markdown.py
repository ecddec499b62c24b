"""Markdown -> Telegram HTML for lesson text generated by the provider."""
import html
import re
from typing import List

TELEGRAM_MESSAGE_LIMIT = 4096

_FENCE_RE = re.compile(r"```[^\n]*\n(.*?)```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC_STAR_RE = re.compile(r"(?<!\*)\*(?!\s)([^*]+?)(?<!\s)\*(?!\*)")
_ITALIC_UNDERSCORE_RE = re.compile(r"(?<!\w)_(?!\s)([^_]+?)(?<!\s)_(?!\w)")
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.*)$")
_BULLET_RE = re.compile(r"^(\s*)[-*+]\s+(.*)$")

_PRE_OPEN = "<pre><code>"
_PRE_CLOSE = "</code></pre>"


def render_markdown(markdown: str) -> str:
    """
    Convert the markdown subset used in lessons to Telegram HTML.

    Supports fenced and inline code, bold, italic, headings and bullet
    lists. Everything else is escaped and passed through as plain text.
    """
    if not markdown:
        return ""

    parts = []
    pos = 0
    for match in _FENCE_RE.finditer(markdown):
        parts.append(_render_text(markdown[pos:match.start()]))
        parts.append(f"\n{_PRE_OPEN}{html.escape(match.group(1).rstrip(), quote=False)}{_PRE_CLOSE}\n")
        pos = match.end()
    parts.append(_render_text(markdown[pos:]))

    rendered = "".join(parts)
    # Collapse the blank lines left around code blocks
    return re.sub(r"\n{3,}", "\n\n", rendered).strip()


def code_block(code: str) -> str:
    """Escape code for display inside <pre>."""
    return f"{_PRE_OPEN}{html.escape(code, quote=False)}{_PRE_CLOSE}"


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> List[str]:
    """Split rendered HTML into chunks that fit into one Telegram message.

    Splits on line boundaries and re-opens a <pre> block that a split cuts
    through.
    """
    if len(text) <= limit:
        return [text]

    chunks: List[str] = []
    current = ""
    in_pre = False
    for line in text.split("\n"):
        candidate = f"{current}\n{line}" if current else line
        closing = _PRE_CLOSE if in_pre else ""
        if len(candidate) + len(closing) > limit and current:
            chunks.append(current + closing)
            current = (_PRE_OPEN if in_pre else "") + line
        else:
            current = candidate

        while len(current) > limit:
            cut = _safe_cut(current, limit - len(_PRE_CLOSE))
            head, current = current[:cut], current[cut:]
            if head.count(_PRE_OPEN) > head.count(_PRE_CLOSE):
                chunks.append(head + _PRE_CLOSE)
                current = _PRE_OPEN + current
            else:
                chunks.append(head)

        in_pre = _pre_is_open(line, in_pre)

    if current:
        chunks.append(current)
    return chunks


def _safe_cut(text: str, limit: int) -> int:
    """Where to cut an overlong line: never inside a tag or an entity.

    Prefers a point outside <b>, <i> and inline <code>, and after a space
    when one is in the second half of the range.
    """
    minimum = len(_PRE_OPEN) + 1
    in_tag = in_entity = in_pre = False
    depth = 0
    tag = ""
    outside = flat = space = 0
    for i in range(min(limit, len(text)) + 1):
        if not in_tag and not in_entity and i >= minimum:
            outside = i
            if depth == 0:
                flat = i
                if text[i - 1] == " ":
                    space = i
        if i == limit or i == len(text):
            break

        ch = text[i]
        if in_tag:
            if ch == ">":
                in_tag = False
                closing = tag.startswith("/")
                name = tag.lstrip("/").split(" ")[0]
                if name == "pre":
                    in_pre = not closing
                elif name in ("b", "i", "code") and not in_pre:
                    depth += -1 if closing else 1
            else:
                tag += ch
        elif in_entity:
            if ch == ";":
                in_entity = False
        elif ch == "<":
            in_tag, tag = True, ""
        elif ch == "&":
            in_entity = True

    if space >= limit // 2:
        return space
    return flat or outside or limit


def _pre_is_open(line: str, was_open: bool) -> bool:
    opened = line.count(_PRE_OPEN)
    closed = line.count(_PRE_CLOSE)
    if opened > closed:
        return True
    if closed > opened:
        return False
    return was_open


def _render_text(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        heading = _HEADING_RE.match(line)
        if heading:
            lines.append(f"<b>{_render_inline(heading.group(1))}</b>")
            continue
        bullet = _BULLET_RE.match(line)
        if bullet:
            indent, body = bullet.groups()
            lines.append(f"{indent}• {_render_inline(body)}")
            continue
        lines.append(_render_inline(line))
    return "\n".join(lines)


def _render_inline(text: str) -> str:
    out = []
    pos = 0
    for match in _INLINE_CODE_RE.finditer(text):
        out.append(_render_emphasis(text[pos:match.start()]))
        out.append(f"<code>{html.escape(match.group(1), quote=False)}</code>")
        pos = match.end()
    out.append(_render_emphasis(text[pos:]))
    return "".join(out)


def _render_emphasis(text: str) -> str:
    text = html.escape(text, quote=False)
    text = _BOLD_RE.sub(lambda m: f"<b>{m.group(1) or m.group(2)}</b>", text)
    text = _ITALIC_STAR_RE.sub(_italic, text)
    text = _ITALIC_UNDERSCORE_RE.sub(_italic, text)
    return text


def _italic(match: re.Match) -> str:
    # An italic span may not cross the edge of a bold or italic one
    inner = match.group(1)
    for tag in ("b", "i"):
        if inner.count(f"<{tag}>") != inner.count(f"</{tag}>"):
            return match.group(0)
    return f"<i>{inner}</i>"
