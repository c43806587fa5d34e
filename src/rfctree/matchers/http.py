"""HTTP message examples.

Requests and responses are recognized conservatively because prose mentions
"HTTP/1.1" and "word:" constantly. A request needs a method line whose
target looks like a request-target, plus real evidence: the HTTP version on
the request line itself, on a deeper wrapped continuation, or a header line
at the method's indentation:

    GET /authorize?response_type=code&client_id=s6BhdRkqt3&state=xyz
        &redirect_uri=https%3A%2F%2Fclient%2Eexample%2Ecom%2Fcb HTTP/1.1
    Host: server.example.com

A response needs a status line immediately followed by a header line.

A body is captured only after exactly one blank line, and only when the
message plausibly has one; otherwise the blank line and the text after it are
left for the following blocks.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import HttpRequest, HttpResponse
from rfctree.text import get_indentation, is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext

_METHOD_LINE_RE = re.compile(r"^ *([A-Z][A-Z0-9!#$%&'*+.^_`|~-]*) +(\S+)(.*)$")
_TARGET_RE = re.compile(r"^(?:/|\*|[A-Za-z][A-Za-z0-9+.\-]*://)")
_HTTP_TOKEN_RE = re.compile(r"\bHTTP/[0-9](?:\.[0-9])?\b")
_REQUEST_LINE_END_RE = re.compile(r"\sHTTP/[0-9](?:\.[0-9])?\s*$")
_STATUS_LINE_RE = re.compile(r"^ *HTTP/[0-9](?:\.[0-9])? +([0-9]{3})\b.*$")
HEADER_LINE_RE = re.compile(r"^ *[A-Za-z0-9][A-Za-z0-9\-]*: ?.*$")
_BODY_HEADER_RE = re.compile(r"^ *(?:Content-[A-Za-z0-9\-]+|Transfer-Encoding) *:", re.IGNORECASE)

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "TRACE"})
_LOOKAHEAD = 6


def is_header_line(line: str | None) -> bool:
    return line is not None and HEADER_LINE_RE.match(line) is not None


def _method_line(line: str | None) -> re.Match[str] | None:
    if line is None or is_blank_line(line):
        return None
    match = _METHOD_LINE_RE.match(line)
    if match is None or _TARGET_RE.match(match.group(2)) is None:
        return None
    return match


def _is_message_line(ctx: BlockContext, offset: int, indent: int) -> bool:
    line = ctx.peek(offset)
    return (
        line is not None
        and not is_blank_line(line)
        and not is_pagination(ctx, offset)
        and get_indentation(line) >= indent
    )


def _read_headers(ctx: BlockContext, indent: int) -> list[str]:
    """Header lines at ``indent`` plus their deeper wrapped continuations."""
    headers: list[str] = []
    while _is_message_line(ctx, 0, indent):
        line = ctx.peek() or ""
        if get_indentation(line) == indent and not is_header_line(line):
            break
        if get_indentation(line) > indent and not headers:
            break
        headers.append(ctx.advance())
    return headers


def _read_body(ctx: BlockContext, indent: int) -> tuple[str, ...] | None:
    """Consume one blank line and the block after it, if a body follows."""
    if not is_blank_line(ctx.peek()) or not _is_message_line(ctx, 1, indent):
        return None
    ctx.advance()
    body: list[str] = []
    while _is_message_line(ctx, 0, indent):
        body.append(ctx.advance())
    return tuple(body)


def _has_body_header(headers: list[str]) -> bool:
    return any(_BODY_HEADER_RE.match(line) for line in headers)


class HttpRequestMatcher:
    name = "http_request"
    priority = 46

    def test(self, ctx: BlockContext) -> bool:
        first = ctx.peek()
        if _method_line(first) is None:
            return False
        indent = get_indentation(first or "")
        if _REQUEST_LINE_END_RE.search(first or "") and is_header_line(ctx.peek(1)):
            return True
        for offset in range(1, _LOOKAHEAD + 1):
            if not _is_message_line(ctx, offset, indent):
                return False
            line = ctx.peek(offset) or ""
            if get_indentation(line) == indent:
                return is_header_line(line)
            if _HTTP_TOKEN_RE.search(line):
                return True
        return False

    def parse(self, ctx: BlockContext) -> HttpRequest:
        first = ctx.peek() or ""
        indent = get_indentation(first)
        method = _METHOD_LINE_RE.match(first)
        request = [ctx.advance()]
        while _is_message_line(ctx, 0, indent) and get_indentation(ctx.peek() or "") > indent:
            request.append(ctx.advance())
        headers = _read_headers(ctx, indent)

        body = None
        verb = method.group(1) if method is not None else ""
        if verb not in _BODYLESS_METHODS or _has_body_header(headers):
            body = _read_body(ctx, indent)
        return HttpRequest(
            request_lines=tuple(request), header_lines=tuple(headers), body_lines=body
        )


class HttpResponseMatcher:
    name = "http_response"
    priority = 47

    def test(self, ctx: BlockContext) -> bool:
        first = ctx.peek()
        if first is None or _STATUS_LINE_RE.match(first) is None:
            return False
        return is_header_line(ctx.peek(1)) and not is_pagination(ctx, 1)

    def parse(self, ctx: BlockContext) -> HttpResponse:
        status = ctx.advance()
        indent = get_indentation(status)
        headers = _read_headers(ctx, indent)

        body = None
        match = _STATUS_LINE_RE.match(status)
        code = int(match.group(1)) if match is not None else 0
        allows_body = not (100 <= code < 200 or code in (204, 304))
        if allows_body and _has_body_header(headers):
            body = _read_body(ctx, indent)
        return HttpResponse(status_line=status, header_lines=tuple(headers), body_lines=body)
