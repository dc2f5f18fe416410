"""Render inbound Copilot payloads to the console.

Each log mode shows a different slice of the request: the raw JSON, a
parameter overview, the references of the last message, the contents of
attached files, or a per-message breakdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from copilot_relay.config import LogMode
from copilot_relay.models import (
    FileReference,
    OtherReference,
    RepositoryReference,
    SelectionReference,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from copilot_relay.models import ChatRequest, Message, Reference

FILE_PREVIEW_LENGTH = 500


def _kv_table(title: str, values: Mapping[str, Any]) -> Group:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in values.items():
        table.add_row(escape(key), escape(str(value)))
    return Group(Text(title, style="bold cyan"), table)


def _records_table(title: str, records: Sequence[Mapping[str, Any]]) -> Group:
    table = Table(show_header=True, header_style="bold magenta")
    if records:
        for column in records[0]:
            table.add_column(column, style="white")
        for record in records:
            table.add_row(*(escape(str(v)) for v in record.values()))
    return Group(Text(title, style="bold cyan"), table)


def _section(console: Console, title: str) -> None:
    console.print(f"\n[bold green]━━━ {escape(title)} ━━━[/bold green]")


def _reference_count(message: Message) -> int:
    return len(message.copilot_references or [])


def _numbered_lines(text: str, *, skip_blank: bool = False) -> str:
    lines = [
        f"{i:>3} | {line}"
        for i, line in enumerate(text.split("\n"), start=1)
        if line.strip() or not skip_blank
    ]
    return "\n".join(lines)


def _reference_details(ref: Reference) -> dict[str, Any] | None:
    if isinstance(ref, RepositoryReference):
        return {
            "name": ref.data.name,
            "owner": ref.data.owner_login,
            "id": ref.data.id,
            "visibility": ref.data.visibility,
        }
    if isinstance(ref, FileReference):
        return {"language": ref.data.language, "content_length": len(ref.data.content)}
    if isinstance(ref, SelectionReference):
        return {
            "start": f"{ref.data.start.line}:{ref.data.start.col}",
            "end": f"{ref.data.end.line}:{ref.data.end.col}",
        }
    if isinstance(ref, OtherReference):
        return None
    msg = f"Unhandled reference variant: {type(ref).__name__}"
    raise TypeError(msg)


# --- Log modes ---


def _log_json(payload: ChatRequest, console: Console) -> None:
    console.print("Payload:")
    console.print_json(data=payload.model_dump(mode="json", by_alias=True, exclude_unset=True))


def _log_overview(payload: ChatRequest, console: Console) -> None:
    _section(console, "Request Overview")
    console.print(f"Thread ID: {escape(str(payload.copilot_thread_id))}")
    console.print(f"Agent: {escape(str(payload.agent))}")
    console.print(
        _kv_table(
            "Parameters",
            {
                "temperature": payload.temperature,
                "top_p": payload.top_p,
                "max_tokens": payload.max_tokens,
                "message_count": len(payload.messages),
            },
        ),
    )
    console.print(
        _records_table(
            "Conversation History",
            [
                {
                    "index": i,
                    "role": msg.role,
                    "content_length": len(msg.content),
                    "has_references": _reference_count(msg),
                }
                for i, msg in enumerate(payload.messages)
            ],
        ),
    )
    last_refs = payload.messages[-1].copilot_references
    if last_refs:
        counts: dict[str, int] = {}
        for ref in last_refs:
            counts[ref.type] = counts.get(ref.type, 0) + 1
        console.print(_kv_table("Last Message References Summary", counts))


def _log_conversation(payload: ChatRequest, console: Console) -> None:
    _section(console, "Last Message Details")
    refs = payload.messages[-1].copilot_references
    if refs is None:
        return
    console.print(
        _records_table(
            "References",
            [{"type": r.type, "id": r.id, "implicit": r.is_implicit} for r in refs],
        ),
    )
    for ref in refs:
        details = _reference_details(ref)
        if details is not None:
            console.print(_kv_table(f"{ref.type}: {ref.id}", details))


def _log_file(payload: ChatRequest, console: Console) -> None:
    _section(console, "File Contents from Last Message")
    refs = payload.messages[-1].copilot_references
    if refs is None:
        return
    file_refs = [r for r in refs if isinstance(r, FileReference)]
    if not file_refs:
        console.print("No file references found in the last message")
        return
    for ref in file_refs:
        content = ref.data.content
        console.print(
            _kv_table(
                f"File: {ref.id}",
                {
                    "language": ref.data.language,
                    "size": len(content),
                    "implicit": ref.is_implicit,
                },
            ),
        )
        preview = content
        if len(content) > FILE_PREVIEW_LENGTH:
            preview = content[:FILE_PREVIEW_LENGTH] + "..."
        console.print(
            Panel(
                escape(_numbered_lines(preview)),
                title="[bold]Content Preview[/bold]",
                border_style="blue",
            ),
        )


def _log_message(payload: ChatRequest, console: Console) -> None:
    _section(console, "Conversation Messages Breakdown")
    for index, msg in enumerate(payload.messages, start=1):
        console.print(
            _kv_table(
                f"Message #{index} ({msg.role})",
                {
                    "role": msg.role,
                    "content_length": len(msg.content),
                    "has_references": _reference_count(msg),
                },
            ),
        )
        console.print(
            Panel(
                escape(_numbered_lines(msg.content, skip_blank=True)),
                title="[bold]Content[/bold]",
                border_style="blue",
            ),
        )
        for ref_index, ref in enumerate(msg.copilot_references or [], start=1):
            console.print(
                _kv_table(
                    f"Reference #{ref_index}: {ref.type}",
                    {"type": ref.type, "id": ref.id, "implicit": ref.is_implicit},
                ),
            )
        console.print("-----------------------------------")


PAYLOAD_LOGGERS: dict[LogMode, Callable[[ChatRequest, Console], None]] = {
    LogMode.JSON: _log_json,
    LogMode.OVERVIEW: _log_overview,
    LogMode.CONVERSATION: _log_conversation,
    LogMode.FILE: _log_file,
    LogMode.MESSAGE: _log_message,
}


def log_payload(payload: ChatRequest, mode: LogMode, *, console: Console | None = None) -> None:
    """Render ``payload`` in the given log mode."""
    out = console or Console()
    PAYLOAD_LOGGERS[mode](payload, out)
    out.print("=====================================")
