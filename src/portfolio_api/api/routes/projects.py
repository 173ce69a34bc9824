"""Portfolio project endpoints.

Reads are public; create, replace and delete require an admin token.
"""

from typing import Annotated

from fastapi import APIRouter, Body, status

from src.portfolio_api.api.dependencies import CurrentAdmin, ProjectServiceDep
from src.portfolio_api.schemas.project import (
    ProjectDeleteResponse,
    ProjectMutationResponse,
    ProjectPayload,
    ProjectRead,
    ProjectViewResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])

_ID_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "Invalid project ID"},
    404: {"description": "Project not found"},
}


@router.get("", response_model=list[ProjectRead], summary="List projects")
async def list_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    """All projects, newest first."""
    return [ProjectRead.model_validate(p) for p in await service.list_all()]


@router.get("/featured", response_model=list[ProjectRead], summary="Featured projects")
async def featured_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    """Up to six featured projects, newest first."""
    return [ProjectRead.model_validate(p) for p in await service.featured()]


@router.get(
    "/category/{category}",
    response_model=list[ProjectRead],
    summary="Projects by category",
)
async def projects_by_category(category: str, service: ProjectServiceDep) -> list[ProjectRead]:
    return [ProjectRead.model_validate(p) for p in await service.by_category(category)]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    description="Returns the project as read, then counts one view.",
    responses=_ID_RESPONSES,
)
async def get_project(project_id: str, service: ProjectServiceDep) -> ProjectRead:
    return ProjectRead.model_validate(await service.get_and_count_view(project_id))


@router.post(
    "/{project_id}/view",
    response_model=ProjectViewResponse,
    summary="Record a view",
    responses=_ID_RESPONSES,
)
async def record_view(project_id: str, service: ProjectServiceDep) -> ProjectViewResponse:
    return ProjectViewResponse(views=await service.record_view(project_id))


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={400: {"description": "Title, description, and technologies are required"}},
)
async def create_project(
    _admin: CurrentAdmin,
    service: ProjectServiceDep,
    payload: Annotated[ProjectPayload | None, Body()] = None,
) -> ProjectMutationResponse:
    project = await service.create(payload or ProjectPayload())
    return ProjectMutationResponse(
        message="Project created successfully",
        project=ProjectRead.model_validate(project),
    )


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Replace project",
    description="Rewrites every field. Omitted fields are blanked, not kept.",
    responses=_ID_RESPONSES,
)
async def replace_project(
    project_id: str,
    _admin: CurrentAdmin,
    service: ProjectServiceDep,
    payload: Annotated[ProjectPayload | None, Body()] = None,
) -> ProjectMutationResponse:
    project = await service.replace(project_id, payload or ProjectPayload())
    return ProjectMutationResponse(
        message="Project updated successfully",
        project=ProjectRead.model_validate(project),
    )


@router.delete(
    "/{project_id}",
    response_model=ProjectDeleteResponse,
    summary="Delete project",
    responses=_ID_RESPONSES,
)
async def delete_project(
    project_id: str, _admin: CurrentAdmin, service: ProjectServiceDep
) -> ProjectDeleteResponse:
    deleted_id = await service.delete(project_id)
    return ProjectDeleteResponse(message="Project deleted successfully", deleted_id=deleted_id)
