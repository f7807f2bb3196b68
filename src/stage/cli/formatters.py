"""CLI output formatters supporting plain text and JSON modes."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol

from stage.cli.commands import CommandResult


class OutputFormatter(Protocol):
    def format_result(self, result: CommandResult) -> str:
        ...

    def format_config(self, config: Dict[str, Any]) -> str:
        ...

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        ...

    def format_status(self, status: Dict[str, Any]) -> str:
        ...

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        ...


class TextFormatter:
    def format_result(self, result: CommandResult) -> str:
        if not result.success:
            return self.format_error(result.message, result.error)
        return result.message

    def format_config(self, config: Dict[str, Any]) -> str:
        lines = [
            f"\n{'='*50}",
            "Stage Configuration",
            f"{'='*50}\n",
            f"Classifier: {config['provider']} ({config['base_url']})",
            f"Timeout: {config['timeout']}s",
            f"Labels: {', '.join(config['candidate_labels'])}",
            f"Hypothesis: {config['hypothesis_template']}",
            f"Multi-label: {config['multi_label']}",
            f"Trim at: {config['marker']!r} or {config['separator']!r}",
            f"Storage: {config['storage_dir']}",
        ]
        return "\n".join(lines)

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        if not sessions:
            return "No sessions found."

        lines = [f"\n{'='*50}", "Sessions", f"{'='*50}\n"]

        for s in sessions:
            lines.append(f"Session: {s['session_id']}")
            lines.append(f"  {s['record']}")
            lines.append(f"  Updated: {s['updated_at']}")
            lines.append("")

        return "\n".join(lines)

    def format_status(self, status: Dict[str, Any]) -> str:
        return "\n".join([
            f"\n{'='*50}",
            "Session Status",
            f"{'='*50}\n",
            f"Session ID: {status['session_id']}",
            f"Turns: {status['turn_count']}",
            status['record'],
            f"Updated: {status['updated_at']}",
        ])

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        lines = [f"\nError: {message}"]
        if error:
            lines.append(f"Details: {error}")
        return "\n".join(lines)


class JsonFormatter:
    def format_result(self, result: CommandResult) -> str:
        return json.dumps({
            "success": result.success,
            "message": result.message,
            "data": result.data,
            "error": result.error,
        }, indent=2, default=str)

    def format_config(self, config: Dict[str, Any]) -> str:
        return json.dumps({"config": config}, indent=2, default=str)

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        return json.dumps({"sessions": sessions}, indent=2, default=str)

    def format_status(self, status: Dict[str, Any]) -> str:
        return json.dumps({"status": status}, indent=2, default=str)

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        return json.dumps({
            "success": False,
            "message": message,
            "error": error,
        }, indent=2)


def get_formatter(json_mode: bool = False) -> OutputFormatter:
    return JsonFormatter() if json_mode else TextFormatter()
