"""
Builds the prompt text sent to Gemini for a stage (or idea flow) and its inputs.

Every Stage member maps to a template; the check at import time keeps the
mapping total. Building is pure: the same stage, inputs and variant always
render the same text.
"""

from collections import namedtuple
from enum import Enum
from typing import Dict, Mapping, Optional

from ideor.config import MAX_INPUT_CHARS, USE_COMPACT_PROMPTS
from . import ideas, stages_compact, stages_full
from .stages import Stage, parse_stage

PromptTemplate = namedtuple("PromptTemplate", ["text", "defaults"])


class PromptVariant(str, Enum):
    FULL = "full"
    COMPACT = "compact"


FULL_TEMPLATES: Dict[Stage, PromptTemplate] = {
    Stage.ETAPA1: PromptTemplate(stages_full.ETAPA1_PROMPT, stages_full.ETAPA1_DEFAULTS),
    Stage.ETAPA2: PromptTemplate(stages_full.ETAPA2_PROMPT, stages_full.ETAPA2_DEFAULTS),
    Stage.ETAPA3: PromptTemplate(stages_full.ETAPA3_PROMPT, stages_full.ETAPA3_DEFAULTS),
    Stage.ETAPA4: PromptTemplate(stages_full.ETAPA4_PROMPT, stages_full.ETAPA4_DEFAULTS),
    Stage.ETAPA5: PromptTemplate(stages_full.ETAPA5_PROMPT, stages_full.ETAPA5_DEFAULTS),
    Stage.ETAPA6: PromptTemplate(stages_full.ETAPA6_PROMPT, stages_full.ETAPA6_DEFAULTS),
    Stage.ETAPA7: PromptTemplate(stages_full.ETAPA7_PROMPT, stages_full.ETAPA7_DEFAULTS),
    Stage.SEGMENT: PromptTemplate(ideas.SEGMENT_PROMPT, ideas.SEGMENT_DEFAULTS),
    Stage.SEED_SEGMENT: PromptTemplate(ideas.SEED_SEGMENT_PROMPT, ideas.SEED_SEGMENT_DEFAULTS),
}

# Idea flows have a single template and fall back to FULL_TEMPLATES
COMPACT_TEMPLATES: Dict[Stage, PromptTemplate] = {
    Stage.ETAPA1: PromptTemplate(stages_compact.ETAPA1_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA2: PromptTemplate(stages_compact.ETAPA2_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA3: PromptTemplate(stages_compact.ETAPA3_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA4: PromptTemplate(stages_compact.ETAPA4_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA5: PromptTemplate(stages_compact.ETAPA5_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA6: PromptTemplate(stages_compact.ETAPA6_PROMPT, stages_compact.COMPACT_DEFAULTS),
    Stage.ETAPA7: PromptTemplate(stages_compact.ETAPA7_PROMPT, stages_compact.ETAPA7_DEFAULTS),
}

_missing = [stage.value for stage in Stage if stage not in FULL_TEMPLATES]
if _missing:
    raise RuntimeError(f"Stages without a prompt template: {_missing}")


def configured_variant() -> PromptVariant:
    """Variant selected by IDEOR_USE_COMPACT_PROMPTS."""
    return PromptVariant.COMPACT if USE_COMPACT_PROMPTS else PromptVariant.FULL


def clean_input(value, max_chars: int = MAX_INPUT_CHARS) -> str:
    """Trim a user-supplied value and cap its length."""
    if value is None:
        return ""
    return str(value).strip()[:max_chars]


def _select_template(stage: Stage, variant: PromptVariant) -> PromptTemplate:
    if PromptVariant(variant) == PromptVariant.COMPACT and stage in COMPACT_TEMPLATES:
        return COMPACT_TEMPLATES[stage]
    return FULL_TEMPLATES[stage]


def build_prompt(stage, inputs: Optional[Mapping[str, str]] = None,
                 variant: PromptVariant = PromptVariant.FULL) -> str:
    """
    Render the prompt for ``stage``.

    Args:
        stage: Stage member or its key ("etapa1".."etapa7", "segment", "seed+segment")
        inputs: Free-text values keyed by placeholder name; missing or blank
            values fall back to the template's placeholder markers
        variant: FULL for production prompts, COMPACT for development

    Raises:
        UnknownStageError: if ``stage`` is not a known stage key
    """
    template = _select_template(parse_stage(stage), variant)
    inputs = inputs or {}

    values = {}
    for key, default in template.defaults.items():
        values[key] = clean_input(inputs.get(key)) or default

    return template.text.format(**values)


def build_refine_prompt(content: str, feedback: str) -> str:
    """Prompt asking the model to revise an existing document with user feedback."""
    return stages_full.REFINE_PROMPT.format(
        documento=content or "",
        feedback=clean_input(feedback) or stages_full.NOT_PROVIDED,
    )
