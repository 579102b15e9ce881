# Request and response bodies of the HTTP API
# Field names are camelCase on the wire and snake_case in Python

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ideor.entities import Project, ProjectTask


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Projects ---

class CreateProjectRequest(ApiModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    product_structure: Optional[str] = None
    target_audience: Optional[str] = None


class UpdateProjectRequest(ApiModel):
    name: Optional[str] = None
    description: Optional[str] = None
    score: Optional[float] = None
    valuation: Optional[float] = None
    category: Optional[str] = None
    product_structure: Optional[str] = None
    target_audience: Optional[str] = None


class ChangePhaseRequest(ApiModel):
    new_phase: str = Field(min_length=1)


class UpdateProgressRequest(ApiModel):
    progress: Dict[str, Any]


class ProjectResponse(ApiModel):
    id: str
    owner_id: str
    name: str
    description: Optional[str] = None
    score: float
    valuation: float
    progress_breakdown: Dict[str, Any]
    current_phase: str
    category: Optional[str] = None
    generated_options: Optional[List[str]] = None
    product_structure: Optional[str] = None
    target_audience: Optional[str] = None
    created_at: str
    updated_at: str
    tasks_count: int = 0

    @classmethod
    def from_entity(cls, project: Project, tasks_count: int = 0) -> "ProjectResponse":
        return cls(**project.model_dump(), tasks_count=tasks_count)


# --- Tasks ---

class CreateTaskRequest(ApiModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    phase: str = Field(min_length=1)
    content: Optional[str] = None


class UpdateTaskRequest(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None


class ChangeTaskStatusRequest(ApiModel):
    new_status: str


class TaskResponse(ApiModel):
    id: str
    project_id: str
    title: str
    description: Optional[str] = None
    phase: str
    content: Optional[str] = None
    status: str
    evaluation_result: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str
    evaluations_count: int = 0

    @classmethod
    def from_entity(cls, task: ProjectTask, evaluations_count: int = 0) -> "TaskResponse":
        return cls(**task.model_dump(mode="json"), evaluations_count=evaluations_count)


class NextStageResponse(ApiModel):
    next_stage: Optional[str] = None
    message: str


class CanAdvanceResponse(ApiModel):
    can_advance: bool
    project_id: str


# --- Documents ---

class GenerateDocumentRequest(ApiModel):
    phase: str
    inputs: Dict[str, str] = Field(default_factory=dict)


class RefineDocumentRequest(ApiModel):
    feedback: str = Field(min_length=1)


class GenerateDocumentResponse(ApiModel):
    task_id: str
    phase: str
    generated_content: str
    model_used: str
    tokens_used: int
    status: str


# --- Ideas ---

class SuggestIdeasRequest(ApiModel):
    seed_idea: Optional[str] = ""
    segment_description: str
    count: Optional[int] = None
    project_id: Optional[str] = None


class SegmentIdeasRequest(ApiModel):
    segment_description: str
    count: Optional[int] = None
    project_id: Optional[str] = None


class IdeasResponse(ApiModel):
    ideas: List[str]


class PromptRequest(ApiModel):
    prompt: str = Field(min_length=1)
