"""
Stage identifiers for the project workflow and the idea suggestion prompts
"""

from enum import Enum
from typing import Dict

from ideor.errors import UnknownStageError


class Stage(str, Enum):
    ETAPA1 = "etapa1"
    ETAPA2 = "etapa2"
    ETAPA3 = "etapa3"
    ETAPA4 = "etapa4"
    ETAPA5 = "etapa5"
    ETAPA6 = "etapa6"
    ETAPA7 = "etapa7"
    SEGMENT = "segment"
    SEED_SEGMENT = "seed+segment"


# Stages that produce a project document, in workflow order
DOCUMENT_STAGES = (
    Stage.ETAPA1,
    Stage.ETAPA2,
    Stage.ETAPA3,
    Stage.ETAPA4,
    Stage.ETAPA5,
    Stage.ETAPA6,
    Stage.ETAPA7,
)

STAGE_TITLES: Dict[Stage, str] = {
    Stage.ETAPA1: "Problema e Oportunidade",
    Stage.ETAPA2: "Pesquisa de Mercado",
    Stage.ETAPA3: "Proposta de Valor",
    Stage.ETAPA4: "Modelo de Negócio",
    Stage.ETAPA5: "MVP (Minimum Viable Product)",
    Stage.ETAPA6: "Equipe Mínima",
    Stage.ETAPA7: "Pitch Deck + Plano Executivo + Resumo",
}


def parse_stage(value) -> Stage:
    """Convert a stage key into a Stage, raising UnknownStageError otherwise."""
    if isinstance(value, Stage):
        return value
    try:
        return Stage(str(value).strip())
    except ValueError:
        raise UnknownStageError(value)


def parse_document_stage(value) -> Stage:
    stage = parse_stage(value)
    if stage not in DOCUMENT_STAGES:
        raise UnknownStageError(value)
    return stage
