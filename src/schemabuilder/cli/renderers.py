from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from schemabuilder import __version__
from schemabuilder.core import events as ev
from schemabuilder.core.stages import STAGE_ORDER

RULE_WIDTH = 64
RULE_LINE = "-" * RULE_WIDTH
STATUS_GLYPHS = {
    "pending": "⏸",
    "running": "⠋",
    "success": "✅",
    "failed": "❌",
    "skipped": "⏭",
    "partial": "⚠️",
    "warning": "⚠️",
}


def run_events(events: Iterable[ev.BuilderEvent], renderer: "Renderer") -> int:
    exit_code = 0
    for event in events:
        renderer.handle(event)
        if isinstance(event, ev.CommandCompleted):
            exit_code = event.exit_code
    renderer.close()
    return exit_code


class Renderer:
    def handle(self, event: ev.BuilderEvent) -> None:  # noqa: D401
        """Handle a single event."""

    def close(self) -> None:
        return None


class StageRichRenderer(Renderer):
    """Progress and diagnostics on ``console``; generated text goes to ``out``."""

    def __init__(self, console: Console, out: Console):
        self.console = console
        self.out = out
        self._stages: list[tuple[str, str]] = []
        self._failure: ev.StageFailed | None = None
        self._warnings: list[ev.Warning] = []
        self._written: ev.FileWritten | None = None

    def handle(self, event: ev.BuilderEvent) -> None:
        if isinstance(event, ev.CommandStarted):
            self._stages = STAGE_ORDER.get(event.command, [])
            _print_header(self.console, event)
            return
        if isinstance(event, ev.StageCompleted):
            self._print_stage(event.stage_id, event.status, event.duration_ms)
            return
        if isinstance(event, ev.StageFailed):
            self._failure = event
            self._print_stage(event.stage_id, "failed", event.duration_ms)
            return
        if isinstance(event, ev.Warning):
            self._warnings.append(event)
            return
        if isinstance(event, ev.TreeRendered):
            self.out.print(_render_tree(event))
            return
        if isinstance(event, ev.OutputReady):
            _print_output(self.out, event.text)
            return
        if isinstance(event, ev.FileWritten):
            self._written = event
            return
        if isinstance(event, ev.CommandCompleted):
            self._finish(event)

    def _print_stage(self, stage_id: str, status: str, elapsed_ms: float) -> None:
        line = _format_stage_line(
            _stage_index(stage_id, self._stages),
            _stage_label(stage_id, self._stages),
            status,
            elapsed_ms,
            total=len(self._stages),
        )
        self.console.print(line, markup=False, highlight=False)

    def _finish(self, event: ev.CommandCompleted) -> None:
        if self._warnings:
            self.console.print(_warnings_panel(self._warnings))
        if not event.ok:
            if self._failure:
                self.console.print(_stage_failure_panel(self._failure))
            else:
                self.console.print("[red]Command failed.[/red]")
            return
        if self._written and self._written.path:
            self.console.print(
                f"[green]Wrote[/green] {self._written.path} ({_format_bytes(self._written.bytes)})"
            )


class StagePlainRenderer(Renderer):
    def __init__(self, console: Console, out: Console):
        self.console = console
        self.out = out
        self._stages: list[tuple[str, str]] = []

    def handle(self, event: ev.BuilderEvent) -> None:
        if isinstance(event, ev.CommandStarted):
            self._stages = STAGE_ORDER.get(event.command, [])
            _print_header(self.console, event)
            return
        if isinstance(event, ev.StageCompleted):
            self._print_stage(event.stage_id, event.status, event.duration_ms)
            return
        if isinstance(event, ev.StageFailed):
            self._print_stage(event.stage_id, "failed", event.duration_ms)
            self.console.print(f"Error: {event.message}", markup=False, highlight=False)
            if event.hint:
                self.console.print(f"Hint: {event.hint}", markup=False, highlight=False)
            return
        if isinstance(event, ev.Warning):
            where = f" ({event.path})" if event.path else ""
            self.console.print(f"Warning: {event.message}{where}", markup=False, highlight=False)
            return
        if isinstance(event, ev.TreeRendered):
            for line in _plain_tree_lines(event):
                self.out.print(line, markup=False, highlight=False)
            return
        if isinstance(event, ev.OutputReady):
            _print_output(self.out, event.text)
            return
        if isinstance(event, ev.FileWritten):
            self.console.print(f"Wrote {event.path} ({event.bytes} bytes)", markup=False, highlight=False)

    def _print_stage(self, stage_id: str, status: str, elapsed_ms: float) -> None:
        line = _format_stage_line(
            _stage_index(stage_id, self._stages),
            _stage_label(stage_id, self._stages),
            status,
            elapsed_ms,
            total=len(self._stages),
            include_status_word=True,
        )
        self.console.print(line, markup=False, highlight=False)


class JsonRenderer(Renderer):
    """Collects the run and prints one machine-readable report at the end."""

    def __init__(self, out: Console):
        self.out = out
        self._stages: dict[str, str] = {}
        self._warnings: list[dict[str, Any]] = []
        self._errors: list[dict[str, Any]] = []
        self._output: str | None = None
        self._written: str | None = None
        self._tree: dict[str, Any] | None = None

    def handle(self, event: ev.BuilderEvent) -> None:
        if isinstance(event, ev.StageCompleted):
            self._stages[event.stage_id] = event.status
        elif isinstance(event, ev.StageFailed):
            self._stages[event.stage_id] = "failed"
            self._errors.append(
                {
                    "stage": event.stage_id,
                    "code": event.error_code,
                    "message": event.message,
                    "hint": event.hint,
                }
            )
        elif isinstance(event, ev.Warning):
            self._warnings.append({"code": event.code, "message": event.message, "path": event.path})
        elif isinstance(event, ev.OutputReady):
            self._output = event.text
        elif isinstance(event, ev.FileWritten):
            self._written = str(event.path) if event.path else None
        elif isinstance(event, ev.TreeRendered):
            self._tree = {"title": event.title, "rows": event.rows}
        elif isinstance(event, ev.CommandCompleted):
            payload = {
                "ok": event.ok,
                "command": event.command,
                "stages": self._stages,
                "warnings": self._warnings,
                "errors": self._errors,
                "output": self._output,
                "written": self._written,
                "tree": self._tree,
            }
            _print_output(self.out, json.dumps(payload, indent=2, sort_keys=True) + "\n")


def _render_tree(event: ev.TreeRendered) -> Tree:
    root = Tree(Text(event.title or "Schema", style="bold"))
    branches: list[Tree] = [root]
    for row in event.rows:
        depth = row["depth"]
        del branches[depth + 1 :]
        parent = branches[depth] if depth < len(branches) else branches[-1]
        branches.append(parent.add(_row_text(row)))
    if not event.rows:
        root.add(Text("(no properties)", style="dim"))
    return root


def _row_text(row: dict[str, Any]) -> Text:
    text = Text()
    if row["role"] == "items":
        text.append("[items] ", style="magenta")
    text.append(row["title"] or "(unnamed)", style="bold")
    if row["key"] and row["key"] != row["title"]:
        text.append(f" ({row['key']})", style="dim")
    text.append(f"  {row['label']}", style="cyan")
    if row["required"]:
        text.append("  required", style="red")
    if row["constraints"]:
        joined = ", ".join(f"{name}={value}" for name, value in row["constraints"].items())
        text.append(f"  {joined}", style="bright_black")
    return text


def _plain_tree_lines(event: ev.TreeRendered) -> list[str]:
    lines = [event.title or "Schema", RULE_LINE]
    for row in event.rows:
        indent = "  " * row["depth"]
        marker = "[items] " if row["role"] == "items" else ""
        required = " *" if row["required"] else ""
        lines.append(f"{indent}{marker}{row['key']}: {row['label']}{required}")
    return lines


def _print_output(out: Console, text: str) -> None:
    out.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def _format_duration(elapsed_ms: float) -> str:
    if elapsed_ms < 1000:
        return f"{elapsed_ms:.0f}ms"
    seconds = elapsed_ms / 1000
    if seconds < 10:
        return f"{seconds:.2f}s"
    return f"{seconds:.1f}s"


def _format_bytes(num: int) -> str:
    size = float(num)
    for unit in ["B", "KB", "MB"]:
        if size < 1024 or unit == "MB":
            if unit == "B":
                return f"{size:.0f} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} MB"


def _print_header(console: Console, event: ev.CommandStarted) -> None:
    project = event.project_dir or Path(".")
    config = event.config_path or Path("schemabuilder.yaml")
    console.print(
        f"schemabuilder v{__version__} | {event.command} | project: {project} | config: {config}\n{RULE_LINE}",
        markup=False,
        highlight=False,
    )


def _format_stage_line(
    index: int,
    label: str,
    status: str,
    elapsed_ms: float | None,
    total: int = 0,
    include_status_word: bool = False,
) -> str:
    if include_status_word and status in {"success", "failed", "skipped", "partial"}:
        marker = _status_word(status)
    else:
        marker = STATUS_GLYPHS.get(status, "?")
        if status in {"skipped", "partial", "failed"}:
            marker = f"{marker} {status}"
    duration = f"  {_format_duration(elapsed_ms)}" if elapsed_ms is not None else ""
    padding = "." * max(2, 28 - len(label))
    return f"[{index}/{total}] {label} {padding} {marker}{duration}"


def _stage_label(stage_id: str, mapping: list[tuple[str, str]]) -> str:
    for key, label in mapping:
        if key == stage_id:
            return label
    return stage_id


def _stage_index(stage_id: str, mapping: list[tuple[str, str]]) -> int:
    for index, (key, _label) in enumerate(mapping, start=1):
        if key == stage_id:
            return index
    return 0


def _status_word(status: str) -> str:
    return {
        "success": "OK",
        "failed": "FAIL",
        "skipped": "SKIP",
        "partial": "PARTIAL",
    }.get(status, status.upper())


def _warnings_panel(warnings: list[ev.Warning]) -> Panel:
    lines = []
    for warning in warnings[:20]:
        where = f"{warning.path}: " if warning.path else ""
        lines.append(f"{where}{warning.message}")
    if len(warnings) > 20:
        lines.append(f"...and {len(warnings) - 20} more")
    return Panel(
        Text("\n".join(lines)),
        title=f"Warnings ({len(warnings)})",
        box=box.ROUNDED,
        title_align="left",
        border_style="yellow",
    )


def _stage_failure_panel(event: ev.StageFailed) -> Panel:
    body = "\n".join(
        [
            f"stage: {event.stage_id}",
            f"error: {event.message}",
        ]
    )
    if event.hint:
        body = "\n".join([body, f"hint: {event.hint}"])
    return Panel(Text(body), title=f"{event.command} failed", box=box.ROUNDED, title_align="left")
