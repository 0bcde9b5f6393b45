"""Completion trace log: human-readable markdown trace of completion calls."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path


def _safe_fence(content: str) -> str:
    """Return a backtick fence longer than any backtick run in content."""
    longest = 0
    for m in re.finditer(r"`+", content):
        longest = max(longest, len(m.group()))
    return "`" * max(longest + 1, 3)


class TraceLogger:
    """Accumulates completion records and writes a human-readable markdown file."""

    def __init__(self, output_path: Path, trace_id: str, file_path: str):
        self._output_path = output_path
        self._trace_id = trace_id
        self._file_path = file_path
        self._records: list[dict] = []
        self._finalized = False

    def log_completion(
        self,
        *,
        model: str,
        prompt: str,
        raw_response: str,
        cleaned: str,
        failure: str = "",
        detail: str = "",
        prompt_tokens: int | None = None,
        completion_tokens: int | None = None,
        elapsed_ms: int | None = None,
    ) -> None:
        self._records.append({
            "model": model,
            "prompt": prompt,
            "raw_response": raw_response,
            "cleaned": cleaned,
            "failure": failure,
            "detail": detail,
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "elapsed_ms": elapsed_ms,
        })

    def finalize(self) -> Path:
        """Write markdown trace to disk. Returns the output path.

        Raises RuntimeError if called more than once.
        """
        if self._finalized:
            raise RuntimeError("TraceLogger.finalize() already called")
        self._finalized = True
        self._output_path.parent.mkdir(parents=True, exist_ok=True)

        parts = [self._build_header()]
        for i, record in enumerate(self._records, 1):
            parts.append(self._format_record(i, record))

        self._output_path.write_text("\n".join(parts), encoding="utf-8")
        return self._output_path

    def _build_header(self) -> str:
        timestamp = datetime.now(timezone.utc).isoformat()
        failures = sum(1 for r in self._records if r["failure"])
        return (
            f"# Completion Trace: {self._trace_id}\n\n"
            f"**Generated:** {timestamp}\n\n"
            f"**File:** {self._file_path}\n\n"
            f"**Summary:** {len(self._records)} calls | {failures} without completion\n\n"
            f"---\n"
        )

    def _format_record(self, number: int, record: dict) -> str:
        pt = record["prompt_tokens"]
        ct = record["completion_tokens"]
        latency = record["elapsed_ms"]
        pt_str = str(pt) if pt is not None else "N/A"
        ct_str = str(ct) if ct is not None else "N/A"
        latency_str = f"{latency}ms" if latency is not None else "N/A"

        parts = [
            f"\n## Call {number}",
            f"Model: {record['model']} | Prompt tokens: {pt_str} | "
            f"Completion tokens: {ct_str} | Latency: {latency_str}\n",
        ]

        prompt = record["prompt"]
        fence = _safe_fence(prompt)
        parts.append(
            f"### Prompt\n"
            f"<details><summary>Prompt ({len(prompt)} chars)</summary>\n\n"
            f"{fence}\n{prompt}\n{fence}\n\n"
            f"</details>\n"
        )

        raw = record["raw_response"]
        fence = _safe_fence(raw)
        parts.append(f"### Raw Response\n{fence}\n{raw}\n{fence}\n")

        cleaned = record["cleaned"]
        fence = _safe_fence(cleaned)
        parts.append(f"### Inserted Text\n{fence}\n{cleaned}\n{fence}\n")

        if record["failure"]:
            message = record["failure"]
            if record["detail"]:
                message = f"{message}: {record['detail']}"
            fence = _safe_fence(message)
            parts.append(f"### Failure\n{fence}\n{message}\n{fence}\n")

        return "\n".join(parts)
