from projtrackr.database.kv_store import KVStore
from projtrackr.modules.projects.models import project_key, project_prefix
from projtrackr.modules.projects.schemas import ProjectCreate, ProjectUpdate, ProjectResponse
from projtrackr.core.exceptions import NotFound
from datetime import datetime, timezone
from typing import List
import logging
import uuid

logger = logging.getLogger(__name__)


class ProjectService:
    """Project CRUD over the KV store.

    user_id always comes from the verified token. Each call does at most one
    store read and one store write; there is no version check, so concurrent
    writers to the same project are last-writer-wins.
    """

    def __init__(self, kv: KVStore):
        self.kv = kv

    def list_projects(self, user_id: str) -> List[ProjectResponse]:
        """All projects owned by user_id, in no particular order"""
        records = self.kv.get_by_prefix(project_prefix(user_id))
        return [ProjectResponse(**record) for record in records]

    def create_project(self, user_id: str, project_data: ProjectCreate) -> ProjectResponse:
        project_id = str(uuid.uuid4())
        project = {
            **project_data.model_dump(mode="json"),
            "id": project_id,
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.kv.set(project_key(user_id, project_id), project)
        logger.info(f"Created project {project_id} for user {user_id}")
        return ProjectResponse(**project)

    def update_project(self, user_id: str, project_id: str, project_data: ProjectUpdate) -> ProjectResponse:
        """Shallow merge of the supplied fields over the stored record"""
        key = project_key(user_id, project_id)
        existing = self.kv.get(key)
        if not existing:
            raise NotFound("Project not found")

        updates = project_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        project = {
            **existing,
            **updates,
            "id": project_id,
            "user_id": user_id,
        }
        self.kv.set(key, project)
        logger.info(f"Updated project {project_id} for user {user_id}: {sorted(updates)}")
        return ProjectResponse(**project)

    def delete_project(self, user_id: str, project_id: str) -> bool:
        """Idempotent: a missing project is not an error"""
        self.kv.delete(project_key(user_id, project_id))
        logger.info(f"Deleted project {project_id} for user {user_id}")
        return True
