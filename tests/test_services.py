import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ideor.document_service import DocumentService, estimate_tokens, parse_output
from ideor.entities import TaskStatus
from ideor.errors import UnknownStageError, ValidationFailedError
from ideor.project_service import ProjectService
from ideor.prompts.builder import PromptVariant
from ideor.stage_service import PHASE2_STAGES, StageService

OWNER = "user-1"
OTHER = "user-2"


def run(coro):
    return asyncio.run(coro)


def make_project(db, name="Frete Fácil", **fields):
    return run(ProjectService(db).create(OWNER, {"name": name, **fields}))


# --- ProjectService ---

def test_create_project_defaults(fake_db):
    project = make_project(fake_db, description="Fretes sob demanda", owner_id="ignored")
    assert project.owner_id == OWNER
    assert project.current_phase == "fase1"
    assert project.valuation == 250
    assert project.score == 0
    assert project.progress_breakdown == {}


def test_project_is_hidden_from_other_users(fake_db):
    project = make_project(fake_db)
    service = ProjectService(fake_db)
    assert run(service.get(project.id, OWNER)) == project
    assert run(service.get(project.id, OTHER)) is None
    assert run(service.update(project.id, OTHER, {"name": "x"})) is None
    assert run(service.delete(project.id, OTHER)) is False


def test_update_ignores_none_and_unknown_fields(fake_db):
    project = make_project(fake_db, description="original")
    service = ProjectService(fake_db)
    updated = run(service.update(project.id, OWNER, {"name": "Novo", "description": None, "id": "hack"}))
    assert updated.name == "Novo"
    assert updated.description == "original"
    assert updated.id == project.id
    assert updated.updated_at >= project.updated_at


def test_list_for_user_most_recent_first(fake_db):
    service = ProjectService(fake_db)
    first = make_project(fake_db, "Primeiro")
    second = make_project(fake_db, "Segundo")
    run(service.update(first.id, OWNER, {"description": "tocado"}))
    names = [p.name for p in run(service.list_for_user(OWNER))]
    assert names[0] == "Primeiro"
    assert set(names) == {"Primeiro", "Segundo"}
    assert second.name in names


def test_delete_cascades_tasks(fake_db):
    project = make_project(fake_db)
    stages = StageService(fake_db)
    run(stages.create_task(project.id, OWNER, {"title": "t", "phase": "etapa1"}))
    assert run(ProjectService(fake_db).delete(project.id, OWNER)) is True
    assert fake_db.tasks == {}


def test_phase_progress_and_generated_options(fake_db):
    project = make_project(fake_db)
    service = ProjectService(fake_db)
    assert run(service.change_phase(project.id, OWNER, "fase2")).current_phase == "fase2"
    assert run(service.update_progress(project.id, OWNER, {"etapa1": 100})).progress_breakdown == {"etapa1": 100}
    saved = run(service.save_generated_options(project.id, OWNER, ["a", "b"]))
    assert saved.generated_options == ["a", "b"]
    assert run(service.save_generated_options("missing", OWNER, ["a"])) is None


# --- StageService ---

def test_task_requires_accessible_project(fake_db):
    project = make_project(fake_db)
    stages = StageService(fake_db)
    assert run(stages.create_task(project.id, OTHER, {"title": "t", "phase": "etapa1"})) is None
    task = run(stages.create_task(project.id, OWNER, {"title": "t", "phase": "etapa1"}))
    assert task.status == TaskStatus.DRAFT
    assert run(stages.get_task(task.id, OWNER)) == task
    assert run(stages.list_tasks(project.id, OTHER)) is None


def test_change_status(fake_db):
    project = make_project(fake_db)
    stages = StageService(fake_db)
    task = run(stages.create_task(project.id, OWNER, {"title": "t", "phase": "etapa1"}))
    assert run(stages.change_status(task.id, OWNER, "submitted")).status == TaskStatus.SUBMITTED
    with pytest.raises(ValidationFailedError):
        run(stages.change_status(task.id, OWNER, "finished"))


def test_can_advance_phase1_needs_name(fake_db):
    project = make_project(fake_db)
    stages = StageService(fake_db)
    assert run(stages.can_advance(project.id, OWNER)) is True
    run(ProjectService(fake_db).update(project.id, OWNER, {"name": "   "}))
    assert run(stages.can_advance(project.id, OWNER)) is False
    assert run(stages.can_advance("missing", OWNER)) is False


def test_can_advance_phase2_needs_seven_evaluated_tasks(fake_db):
    project = make_project(fake_db, current_phase="fase2")
    stages = StageService(fake_db)
    for stage in PHASE2_STAGES[:6]:
        run(stages.create_task(project.id, OWNER, {"title": stage, "phase": stage, "status": "evaluated"}))
    assert run(stages.can_advance(project.id, OWNER)) is False
    run(stages.create_task(project.id, OWNER, {"title": "etapa7", "phase": "etapa7", "status": "evaluated"}))
    assert run(stages.can_advance(project.id, OWNER)) is True


def test_next_stage_progression(fake_db):
    project = make_project(fake_db)
    stages = StageService(fake_db)
    assert run(stages.next_stage(project.id, OWNER)) == "etapa1"

    created = {}
    for stage in PHASE2_STAGES:
        created[stage] = run(stages.create_task(project.id, OWNER, {"title": stage, "phase": stage}))
    # every stage has a task; the earliest unevaluated one is next
    assert run(stages.next_stage(project.id, OWNER)) == "etapa1"

    for stage in PHASE2_STAGES[:3]:
        run(stages.change_status(created[stage].id, OWNER, "evaluated"))
    assert run(stages.next_stage(project.id, OWNER)) == "etapa4"

    for stage in PHASE2_STAGES[3:]:
        run(stages.change_status(created[stage].id, OWNER, "evaluated"))
    assert run(stages.next_stage(project.id, OWNER)) is None


# --- DocumentService ---

def test_estimate_tokens_and_parse_output():
    assert estimate_tokens("abcdefgh") == 2
    assert estimate_tokens(None) == 0
    assert parse_output('{"a": 1}') == {"a": 1}
    assert parse_output("texto") == {"raw": "texto"}


def test_generate_document_creates_evaluated_task(fake_db, fake_writer):
    project = make_project(fake_db)
    documents = DocumentService(fake_writer, db=fake_db, variant=PromptVariant.FULL)

    task = run(documents.generate(project.id, OWNER, "etapa1", {"ideia": "Fretes sob demanda"}))
    assert task.phase == "etapa1"
    assert task.title == "Problema e Oportunidade"
    assert task.description == "Documento gerado automaticamente para a Problema e Oportunidade"
    assert task.status == TaskStatus.EVALUATED
    assert task.content == '{"resumo": "ok"}'
    assert "Fretes sob demanda" in fake_writer.prompts[0]

    history = run(documents.history(task.id, OWNER))
    assert history["task_id"] == task.id
    assert len(history["evaluations"]) == 1
    evaluation = history["evaluations"][0]
    assert evaluation["output_json"] == {"resumo": "ok"}
    assert evaluation["model_used"] == "gemini-test"


def test_generate_rejects_unknown_or_idea_stages(fake_db, fake_writer):
    project = make_project(fake_db)
    documents = DocumentService(fake_writer, db=fake_db)
    with pytest.raises(UnknownStageError):
        run(documents.generate(project.id, OWNER, "etapa8", {}))
    with pytest.raises(UnknownStageError):
        run(documents.generate(project.id, OWNER, "segment", {}))
    assert fake_writer.prompts == []


def test_generate_for_foreign_project_returns_none(fake_db, fake_writer):
    project = make_project(fake_db)
    documents = DocumentService(fake_writer, db=fake_db)
    assert run(documents.generate(project.id, OTHER, "etapa1", {})) is None
    assert fake_writer.prompts == []


def test_regenerate_and_refine(fake_db, fake_writer):
    project = make_project(fake_db)
    documents = DocumentService(fake_writer, db=fake_db, variant=PromptVariant.COMPACT)
    task = run(documents.generate(project.id, OWNER, "etapa2", {"ideia": "Horta"}))

    fake_writer.reply = '{"resumo": "novo"}'
    regenerated = run(documents.regenerate(task.id, OWNER, {"ideia": "Horta vertical"}))
    assert regenerated.content == '{"resumo": "novo"}'
    assert "Horta vertical" in fake_writer.prompts[-1]

    fake_writer.reply = '{"resumo": "refinado"}'
    refined = run(documents.refine(task.id, OWNER, "mais curto"))
    assert refined.content == '{"resumo": "refinado"}'
    assert "mais curto" in fake_writer.prompts[-1]
    assert len(run(documents.history(task.id, OWNER))["evaluations"]) == 3


def test_refine_without_content_returns_none(fake_db, fake_writer):
    project = make_project(fake_db)
    task = run(StageService(fake_db).create_task(project.id, OWNER, {"title": "t", "phase": "etapa1"}))
    documents = DocumentService(fake_writer, db=fake_db)
    assert run(documents.refine(task.id, OWNER, "feedback")) is None
    assert fake_writer.prompts == []
