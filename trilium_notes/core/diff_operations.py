"""Partial content edits: search/replace blocks, unified diffs and read-back checks.

Every function here is a pure transform of an opaque content string. Fetching
the current content and persisting the result happen in the caller, and only
after the whole batch of edits has succeeded.
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from typing import Optional, Union

from unidiff import Hunk, PatchSet
from unidiff.constants import LINE_TYPE_NO_NEWLINE
from unidiff.errors import UnidiffParseError
from unidiff.patch import Line

from trilium_notes.constants import READBACK_ECHO_LIMIT, SEARCH_ECHO_LIMIT
from trilium_notes.data_models import ContentMutationRequest
from trilium_notes.errors import ContentMutationError, MutationFailure
from trilium_notes.models.base import SearchReplaceBlock

logger = logging.getLogger(__name__)

ConvertFn = Callable[[str], Union[str, Awaitable[str]]]

PATCH_FAILED_MESSAGE = (
    "Unified diff failed: the patch could not be applied to the current content. "
    "The content may have changed since the patch was created. "
    "Fetch the current content and retry with updated diffs."
)

# Counts are optional and recomputed from the hunk body
HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@(.*)$")
# Context, removal, addition, no-newline marker; "" is a blank context line
HUNK_LINE_PREFIXES = frozenset(("", " ", "-", "+", "\\"))


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _truncate(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters, marking the cut with ``...``."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _patch_failed(detail: Optional[str] = None) -> ContentMutationError:
    message = PATCH_FAILED_MESSAGE if detail is None else f"{PATCH_FAILED_MESSAGE} ({detail})"
    return ContentMutationError(MutationFailure.PATCH_FAILED, message)


def _split_lines(content: str) -> tuple[list[str], bool]:
    """Split content into lines without terminators plus its trailing-newline flag.

    Empty content counts as terminated, so lines inserted into a blank note end
    with a newline like any other line.
    """
    if not content:
        return [], True
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
        return lines, True
    return lines, False


def _line_text(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def _ensure_file_headers(patch: str) -> str:
    """Prefix bare ``@@`` hunks with placeholder ``---``/``+++`` headers."""
    for line in patch.splitlines():
        if line.startswith("--- "):
            return patch
        if line.startswith("@@"):
            return f"--- a\n+++ b\n{patch}"
    return patch


def _is_file_header(lines: list[str], index: int) -> bool:
    return (
        lines[index].startswith("--- ")
        and index + 1 < len(lines)
        and lines[index + 1].startswith("+++ ")
    )


def _recount_hunks(patch: str) -> str:
    """Rewrite every hunk header with line counts taken from the hunk body.

    unidiff stops reading a hunk once the header's counts are reached, so a
    miscounted header would silently drop the rest of the body. The body runs
    until the next hunk or file header; trailing blank lines are dropped and
    carriage returns are stripped from every line.

    Raises:
        ContentMutationError: ``PATCH_FAILED`` for an empty hunk or a body line
            that is not context, removal, addition or a no-newline marker.
    """
    lines = [_strip_cr(line) for line in patch.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()

    output: list[str] = []
    index = 0
    while index < len(lines):
        header_line = lines[index]
        header = HUNK_HEADER_PATTERN.match(header_line)
        index += 1
        if header is None:
            output.append(header_line)
            continue

        body: list[str] = []
        while (
            index < len(lines)
            and not lines[index].startswith(("@@", "diff "))
            and not _is_file_header(lines, index)
        ):
            body.append(lines[index])
            index += 1
        while body and body[-1] == "":
            body.pop()

        if not body:
            raise _patch_failed(f"hunk '{header_line}' has no lines")
        for line in body:
            if line[:1] not in HUNK_LINE_PREFIXES:
                raise _patch_failed(f"unexpected line in hunk: {_truncate(line, SEARCH_ECHO_LIMIT)!r}")

        source_length = sum(1 for line in body if line[:1] in ("", " ", "-"))
        target_length = sum(1 for line in body if line[:1] in ("", " ", "+"))
        output.append(
            f"@@ -{header.group(1)},{source_length} +{header.group(2)},{target_length} @@{header.group(3)}"
        )
        output.extend(body)

    return "\n".join(output) + "\n"


def _final_newline(hunk: Hunk, trailing_newline: bool) -> bool:
    """Apply a hunk's ``\\ No newline at end of file`` markers to the newline flag.

    A marker after an added line removes the final newline; a marker after a
    removed line means the new side gains one. Markers after context lines
    leave it unchanged.
    """
    previous: Optional[Line] = None
    for line in hunk:
        if line.line_type == LINE_TYPE_NO_NEWLINE and previous is not None:
            if previous.is_added:
                trailing_newline = False
            elif previous.is_removed:
                trailing_newline = True
        previous = line
    return trailing_newline


def _locate_hunk(lines: list[str], old: list[str], expected: int, floor: int) -> Optional[int]:
    """Find where ``old`` matches ``lines``, preferring positions near ``expected``.

    Candidates are tried outward from ``expected`` (expected, +1, -1, +2, ...)
    and never before ``floor``, so hunks apply in order without overlapping.
    """
    last = len(lines) - len(old)
    if last < floor:
        return None

    span = max(expected, len(lines)) + 1
    for distance in range(span + 1):
        candidates = (expected,) if distance == 0 else (expected + distance, expected - distance)
        for candidate in candidates:
            if floor <= candidate <= last and lines[candidate:candidate + len(old)] == old:
                return candidate
    return None


# ==============================================================================
# CONTENT OPERATIONS
# ==============================================================================


def apply_search_replace(content: str, changes: Sequence[SearchReplaceBlock]) -> str:
    """Apply search/replace blocks to ``content`` in order.

    Each block sees the output of the previous ones, so later blocks may match
    text introduced by earlier blocks. An empty ``old_string`` prepends
    ``new_string`` instead of searching.

    Args:
        content: Current note content.
        changes: Blocks with ``old_string`` (exact text to find) and
            ``new_string`` (replacement).

    Returns:
        The content with every block applied.

    Raises:
        ContentMutationError: ``NOT_FOUND`` if a search string is absent, or
            ``AMBIGUOUS`` if it occurs more than once. Nothing is applied when
            any block fails.
    """
    result = content

    for change in changes:
        search = change.old_string
        if search == "":
            result = change.new_string + result
            continue

        first_index = result.find(search)
        if first_index == -1:
            raise ContentMutationError(
                MutationFailure.NOT_FOUND,
                "Search/replace failed: could not find the search string in content. "
                f'Search string: "{_truncate(search, SEARCH_ECHO_LIMIT)}"',
            )

        if result.find(search, first_index + 1) != -1:
            raise ContentMutationError(
                MutationFailure.AMBIGUOUS,
                "Search/replace failed: the search string is ambiguous "
                "(appears multiple times in content). "
                f'Search string: "{_truncate(search, SEARCH_ECHO_LIMIT)}"',
            )

        result = result[:first_index] + change.new_string + result[first_index + len(search):]

    return result


def apply_unified_diff(content: str, patch: str) -> str:
    """Apply a single-file unified diff to ``content``.

    Hunks are matched exactly against their context and removed lines. A hunk
    whose stated position no longer matches is searched for nearby (offset),
    but never fuzzily. Header line counts are taken from the hunk bodies, so
    every body line is applied even when a header miscounts.

    The final newline follows the content unless a ``\\ No newline at end of
    file`` marker says otherwise. CRLF content is matched against LF patches
    (and the reverse) and keeps CRLF line endings.

    Raises:
        ContentMutationError: ``PATCH_FAILED`` if the patch cannot be parsed,
            covers more than one file, has no hunks, or any hunk does not match.
    """
    try:
        patch_set = PatchSet.from_string(_recount_hunks(_ensure_file_headers(patch)))
    except UnidiffParseError as exc:
        raise _patch_failed(f"unparsable patch: {exc}") from exc

    if len(patch_set) != 1:
        raise _patch_failed(f"expected a patch for one content string, got {len(patch_set)}")

    patched_file = patch_set[0]
    if len(patched_file) == 0:
        raise _patch_failed("patch contains no hunks")

    crlf = "\r\n" in content
    if crlf:
        content = content.replace("\r\n", "\n")

    lines, trailing_newline = _split_lines(content)
    offset = 0
    floor = 0

    for hunk in patched_file:
        old = [_line_text(line.value) for line in hunk if line.is_context or line.is_removed]
        new = [_line_text(line.value) for line in hunk if line.is_context or line.is_added]

        # A zero-length source range names the line after which to insert
        start = hunk.source_start if hunk.source_length == 0 else hunk.source_start - 1
        position = _locate_hunk(lines, old, start + offset, floor)
        if position is None:
            logger.debug("Hunk at source line %d did not match the current content", hunk.source_start)
            raise _patch_failed()

        lines[position:position + len(old)] = new
        offset += len(new) - len(old)
        floor = position + len(new)
        trailing_newline = _final_newline(hunk, trailing_newline)

    result = "\n".join(lines)
    if trailing_newline and lines:
        result += "\n"
    if crlf:
        result = result.replace("\n", "\r\n")
    return result


async def resolve_content(
    existing_content: str,
    request: ContentMutationRequest,
    convert_fn: Optional[ConvertFn] = None,
) -> str:
    """Produce new content from whichever mode ``request`` carries.

    Args:
        existing_content: Content currently stored (ignored in full-replacement mode).
        request: Mutation request with exactly one of ``content``, ``changes``
            or ``patch`` populated.
        convert_fn: Optional conversion (e.g. Markdown to HTML) applied to
            full-replacement content only. May be sync or async. Diff modes
            operate on the stored representation and are never converted.

    Raises:
        ContentMutationError: ``NO_MODE_SPECIFIED`` when nothing is populated,
            or any failure raised by the selected applier.
    """
    if request.content is not None:
        resolved = request.content
        if convert_fn is not None:
            converted = convert_fn(resolved)
            resolved = await converted if inspect.isawaitable(converted) else converted
        return resolved

    if request.changes is not None:
        return apply_search_replace(existing_content, request.changes)

    if request.patch is not None:
        return apply_unified_diff(existing_content, request.patch)

    raise ContentMutationError(
        MutationFailure.NO_MODE_SPECIFIED,
        'No content mode specified: provide one of "content", "changes", or "patch".',
    )


def verify_search_replace_results(persisted_content: str, changes: Sequence[SearchReplaceBlock]) -> None:
    """Check that every non-empty replacement survived the round trip to the server.

    Deletions (empty ``new_string``) are skipped since their absence is the
    expected outcome.

    Raises:
        ContentMutationError: ``READBACK_MISMATCH`` listing every missing
            replacement (each truncated for display).
    """
    missing = [
        change.new_string
        for change in changes
        if change.new_string and change.new_string not in persisted_content
    ]
    if not missing:
        return

    details = "\n".join(f'  - "{_truncate(text, READBACK_ECHO_LIMIT)}"' for text in missing)
    logger.warning("Read-back verification found %d missing replacement(s)", len(missing))
    raise ContentMutationError(
        MutationFailure.READBACK_MISMATCH,
        "Search/replace read-back verification failed: the note was saved but "
        f"{len(missing)} expected replacement(s) are missing from the stored content. "
        "The server may have normalized or altered the content. "
        "Fetch the current content to inspect it.\n"
        f"Missing:\n{details}",
    )
