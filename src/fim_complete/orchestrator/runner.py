"""Completion orchestrator: extract -> assemble -> format -> submit -> sanitize -> insert."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fim_complete.context.assembly import assemble_context
from fim_complete.context.dataclasses import AssembledContext
from fim_complete.context.window import WindowExtractor
from fim_complete.llm.client import CompletionClient, FailureKind
from fim_complete.llm.fim import CompletionRequest, build_request, get_fim_format
from fim_complete.llm.sanitize import clean_completion
from fim_complete.locator.base import DefinitionLocator
from fim_complete.orchestrator.host import EditorHost

if TYPE_CHECKING:
    from fim_complete.config import CompletionSettings
    from fim_complete.trace import TraceLogger

logger = logging.getLogger(__name__)

STATUS_GENERATING = "Generating completion..."
STATUS_DONE = "Completion inserted"
STATUS_NO_COMPLETION = "No completion"


@dataclass(frozen=True)
class CompletionOutcome:
    inserted: bool
    text: str = ""
    failure: FailureKind | None = None
    status: str = STATUS_NO_COMPLETION


@dataclass(frozen=True)
class PreparedCompletion:
    context: AssembledContext
    request: CompletionRequest


def prepare_completion(
    host: EditorHost,
    settings: CompletionSettings,
    locator: DefinitionLocator | None = None,
) -> PreparedCompletion:
    """Run extraction, assembly and formatting without any network I/O."""
    extractor = WindowExtractor(
        locator=locator,
        import_line_count=settings.import_line_count,
        prefix_line_count=settings.prefix_line_count,
        suffix_line_count=settings.suffix_line_count,
    )
    window = extractor.extract(host.get_document(), host.get_cursor_position())
    context = assemble_context(window)
    request = build_request(context, settings.model, get_fim_format(settings.fim_format))
    return PreparedCompletion(context=context, request=request)


def complete_at_cursor(
    host: EditorHost,
    client: CompletionClient,
    settings: CompletionSettings,
    locator: DefinitionLocator | None = None,
    trace_logger: TraceLogger | None = None,
) -> CompletionOutcome:
    """Generate a completion at the host's cursor and insert it.

    Every failure ends in the same "no completion" status and no insertion.
    Nothing is inserted unless the full sanitized text is available.
    """
    prepared = prepare_completion(host, settings, locator)

    host.show_status(STATUS_GENERATING)
    result = client.submit(prepared.request)

    text = ""
    failure = result.failure
    if result.ok:
        text = clean_completion(result.text or "", get_fim_format(settings.fim_format))
        if not text:
            failure = FailureKind.EMPTY_COMPLETION

    if trace_logger is not None:
        trace_logger.log_completion(
            model=settings.model,
            prompt=prepared.request.prompt,
            raw_response=result.text or "",
            cleaned=text,
            failure=failure.value if failure is not None else "",
            detail=result.detail,
            prompt_tokens=result.prompt_tokens,
            completion_tokens=result.completion_tokens,
            elapsed_ms=result.latency_ms,
        )

    if failure is not None:
        logger.info("No completion produced (%s)", failure.value)
        host.show_status(STATUS_NO_COMPLETION)
        return CompletionOutcome(inserted=False, failure=failure, status=STATUS_NO_COMPLETION)

    host.insert_text(text)
    host.show_status(STATUS_DONE)
    return CompletionOutcome(inserted=True, text=text, status=STATUS_DONE)
