from fastapi import APIRouter, Depends
from projtrackr.core.dependencies import get_current_user, get_kv_store
from projtrackr.database.kv_store import KVStore
from projtrackr.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectEnvelope, ProjectListEnvelope, DeleteResponse
)
from projtrackr.modules.projects.service import ProjectService
from typing import Dict

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(kv: KVStore = Depends(get_kv_store)) -> ProjectService:
    return ProjectService(kv)


@router.get("", response_model=ProjectListEnvelope)
def list_projects(
    user_data: Dict = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """List the caller's projects"""
    return ProjectListEnvelope(projects=service.list_projects(user_data["id"]))


@router.post("", response_model=ProjectEnvelope, status_code=201)
def create_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """Create a project owned by the caller; any id/user_id/created_at in the body is ignored"""
    return ProjectEnvelope(project=service.create_project(user_data["id"], project_data))


@router.put("/{project_id}", response_model=ProjectEnvelope)
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """Partially update one of the caller's projects"""
    return ProjectEnvelope(project=service.update_project(user_data["id"], project_id, project_data))


@router.delete("/{project_id}", response_model=DeleteResponse)
def delete_project(
    project_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """Delete one of the caller's projects"""
    service.delete_project(user_data["id"], project_id)
    return DeleteResponse(success=True)
