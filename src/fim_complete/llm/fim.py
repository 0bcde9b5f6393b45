"""FIM marker formats and completion request construction.

Marker tokens are protocol constants of a model family. Each family is a
FimFormat in FIM_FORMATS, so targeting another FIM-capable model is a config
change rather than a code change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fim_complete.context.dataclasses import AssembledContext

# Fixed sampling policy: deterministic, short, roughly one statement or block.
TEMPERATURE = 0
MAX_TOKENS = 128
BLOCK_STOP = "\n\n"


@dataclass(frozen=True)
class FimFormat:
    name: str
    prefix: str
    suffix: str
    middle: str
    pad: str
    end_of_text: str

    @property
    def markers(self) -> tuple[str, ...]:
        return (self.prefix, self.suffix, self.middle, self.pad, self.end_of_text)

    @property
    def stop_sequences(self) -> list[str]:
        return [self.pad, self.end_of_text, BLOCK_STOP]


QWEN_FIM = FimFormat(
    name="qwen",
    prefix="<|fim_prefix|>",
    suffix="<|fim_suffix|>",
    middle="<|fim_middle|>",
    pad="<|fim_pad|>",
    end_of_text="<|endoftext|>",
)

STARCODER_FIM = FimFormat(
    name="starcoder",
    prefix="<fim_prefix>",
    suffix="<fim_suffix>",
    middle="<fim_middle>",
    pad="<fim_pad>",
    end_of_text="<|endoftext|>",
)

FIM_FORMATS: dict[str, FimFormat] = {f.name: f for f in (QWEN_FIM, STARCODER_FIM)}


def get_fim_format(name: str) -> FimFormat:
    if name not in FIM_FORMATS:
        raise ValueError(
            f"Unknown fim_format {name!r}. Valid options: {', '.join(sorted(FIM_FORMATS))}"
        )
    return FIM_FORMATS[name]


@dataclass(frozen=True)
class CompletionOptions:
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_TOKENS
    stop_sequences: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    prompt: str
    options: CompletionOptions = field(default_factory=CompletionOptions)

    def to_payload(self) -> dict[str, Any]:
        """Wire format for Ollama's /api/generate with a pre-built raw prompt."""
        return {
            "model": self.model,
            "prompt": self.prompt,
            "raw": True,
            "stream": False,
            "options": {
                "temperature": self.options.temperature,
                "num_predict": self.options.max_tokens,
                "stop": list(self.options.stop_sequences),
            },
        }


def build_fim_prompt(context: AssembledContext, fim_format: FimFormat = QWEN_FIM) -> str:
    return (
        f"{fim_format.prefix}{context.final_prefix}"
        f"{fim_format.suffix}{context.suffix}"
        f"{fim_format.middle}"
    )


def build_request(
    context: AssembledContext, model: str, fim_format: FimFormat = QWEN_FIM,
) -> CompletionRequest:
    """Wrap an assembled context into a FIM completion request. No I/O."""
    return CompletionRequest(
        model=model,
        prompt=build_fim_prompt(context, fim_format),
        options=CompletionOptions(stop_sequences=tuple(fim_format.stop_sequences)),
    )
