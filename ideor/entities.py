import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ideor.config import DEFAULT_PHASE, DEFAULT_VALUATION


def utc_now() -> str:
    return datetime.utcnow().isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


class TaskStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    EVALUATED = "evaluated"


class Project(BaseModel):
    """
    A startup project owned by one user.
    """
    id: str = Field(default_factory=new_id)
    owner_id: str
    name: str
    description: Optional[str] = None
    score: float = 0.0
    valuation: float = DEFAULT_VALUATION
    progress_breakdown: Dict[str, Any] = Field(default_factory=dict)
    current_phase: str = DEFAULT_PHASE
    category: Optional[str] = None
    generated_options: Optional[List[str]] = None
    product_structure: Optional[str] = None
    target_audience: Optional[str] = None
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)


class ProjectTask(BaseModel):
    """
    The document produced for one stage of a project.
    """
    id: str = Field(default_factory=new_id)
    project_id: str
    title: str
    description: Optional[str] = None
    phase: str
    content: Optional[str] = None
    status: TaskStatus = TaskStatus.DRAFT
    evaluation_result: Optional[Dict[str, Any]] = None
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)


class IaEvaluation(BaseModel):
    """Record of one model call that produced or changed a task's content."""
    id: str = Field(default_factory=new_id)
    task_id: str
    input_text: str
    output_json: Any = None
    model_used: str
    tokens_used: int = 0
    created_at: str = Field(default_factory=utc_now)
