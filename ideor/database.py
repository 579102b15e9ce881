# Database module for Firestore operations
# Projects, stage tasks and AI evaluation records, all scoped under the owning user

from typing import List, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ideor.entities import IaEvaluation, Project, ProjectTask

# Firestore client (lazy initialization)
_db = None

DELETE_BATCH_SIZE = 400


def get_db() -> firestore.Client:
    """Get or create Firestore client."""
    global _db
    if _db is None:
        _db = firestore.Client()
    return _db


def _user_collection(user_id: str, name: str):
    return get_db().collection("users").document(user_id).collection(name)


# --- Projects ---

async def get_project(user_id: str, project_id: str) -> Optional[Project]:
    doc = _user_collection(user_id, "projects").document(project_id).get()
    if doc.exists:
        return Project(**doc.to_dict())
    return None


async def list_projects(user_id: str) -> List[Project]:
    """Projects owned by the user, most recently updated first."""
    docs = (_user_collection(user_id, "projects")
            .order_by("updated_at", direction=firestore.Query.DESCENDING)
            .stream())
    return [Project(**doc.to_dict()) for doc in docs]


async def save_project(user_id: str, project: Project) -> Project:
    _user_collection(user_id, "projects").document(project.id).set(project.model_dump(mode="json"))
    return project


async def delete_project(user_id: str, project_id: str) -> None:
    """Delete a project with its tasks and their evaluations."""
    refs = []
    tasks = (_user_collection(user_id, "tasks")
             .where(filter=FieldFilter("project_id", "==", project_id))
             .stream())
    for task_doc in tasks:
        evaluations = (_user_collection(user_id, "ia_evaluations")
                       .where(filter=FieldFilter("task_id", "==", task_doc.id))
                       .stream())
        refs.extend(evaluation_doc.reference for evaluation_doc in evaluations)
        refs.append(task_doc.reference)
    # project document last
    refs.append(_user_collection(user_id, "projects").document(project_id))

    # a WriteBatch holds at most 500 writes
    db = get_db()
    for start in range(0, len(refs), DELETE_BATCH_SIZE):
        batch = db.batch()
        for ref in refs[start:start + DELETE_BATCH_SIZE]:
            batch.delete(ref)
        batch.commit()


# --- Tasks ---

async def get_task(user_id: str, task_id: str) -> Optional[ProjectTask]:
    doc = _user_collection(user_id, "tasks").document(task_id).get()
    if doc.exists:
        return ProjectTask(**doc.to_dict())
    return None


async def list_tasks(user_id: str, project_id: str) -> List[ProjectTask]:
    # single-field filter only; ordering is applied by the caller
    docs = (_user_collection(user_id, "tasks")
            .where(filter=FieldFilter("project_id", "==", project_id))
            .stream())
    return [ProjectTask(**doc.to_dict()) for doc in docs]


async def save_task(user_id: str, task: ProjectTask) -> ProjectTask:
    _user_collection(user_id, "tasks").document(task.id).set(task.model_dump(mode="json"))
    return task


# --- AI evaluations ---

async def add_evaluation(user_id: str, evaluation: IaEvaluation) -> IaEvaluation:
    _user_collection(user_id, "ia_evaluations").document(evaluation.id).set(
        evaluation.model_dump(mode="json"))
    return evaluation


async def list_evaluations(user_id: str, task_id: str) -> List[IaEvaluation]:
    docs = (_user_collection(user_id, "ia_evaluations")
            .where(filter=FieldFilter("task_id", "==", task_id))
            .stream())
    evaluations = [IaEvaluation(**doc.to_dict()) for doc in docs]
    return sorted(evaluations, key=lambda e: e.created_at)
