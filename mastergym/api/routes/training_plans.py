"""API routes for training plans and plan assignment."""
from fastapi import APIRouter, Depends, status

from mastergym.api.routes.dependencies import (
    get_plan_assignment_service,
    get_training_plan_service,
)
from mastergym.schemas.training_plan import (
    AssignedUserResponse,
    AssignPlanRequest,
    AssignPlanResponse,
    DeletePlanResponse,
    TrainingPlanCreate,
    TrainingPlanResponse,
    TrainingPlanUpdate,
)
from mastergym.services.training_plan import PlanAssignmentService, TrainingPlanService

router = APIRouter()


@router.post("", response_model=TrainingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_training_plan(
    data: TrainingPlanCreate,
    service: TrainingPlanService = Depends(get_training_plan_service),
):
    return await service.create_plan(data)


@router.get("", response_model=list[TrainingPlanResponse])
async def list_training_plans(
    creator_id: int | None = None,
    include_copies: bool = False,
    service: TrainingPlanService = Depends(get_training_plan_service),
):
    """List plan templates, newest first. Per-user copies are hidden unless asked for."""
    if creator_id is not None:
        return await service.list_plans_by_creator(creator_id)
    return await service.list_plans(include_copies=include_copies)


@router.delete("/assignments/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_training_plan(
    user_id: int,
    service: PlanAssignmentService = Depends(get_plan_assignment_service),
):
    await service.unassign_plan(user_id)


@router.get("/{plan_id}", response_model=TrainingPlanResponse)
async def get_training_plan(
    plan_id: int,
    service: TrainingPlanService = Depends(get_training_plan_service),
):
    return await service.get_plan(plan_id)


@router.patch("/{plan_id}", response_model=TrainingPlanResponse)
async def update_training_plan(
    plan_id: int,
    updates: TrainingPlanUpdate,
    service: TrainingPlanService = Depends(get_training_plan_service),
):
    return await service.update_plan(plan_id, updates)


@router.delete("/{plan_id}", response_model=DeletePlanResponse)
async def delete_training_plan(
    plan_id: int,
    service: PlanAssignmentService = Depends(get_plan_assignment_service),
):
    detached = await service.delete_plan(plan_id)
    return DeletePlanResponse(detached_users=detached)


@router.post("/{plan_id}/assign", response_model=AssignPlanResponse, status_code=status.HTTP_201_CREATED)
async def assign_training_plan(
    plan_id: int,
    request: AssignPlanRequest,
    service: PlanAssignmentService = Depends(get_plan_assignment_service),
):
    """Assign a private copy of the plan to the user."""
    copy_id = await service.assign_plan(plan_id, request.user_id)
    return AssignPlanResponse(training_plan_id=copy_id)


@router.get("/{plan_id}/users", response_model=list[AssignedUserResponse])
async def list_assigned_users(
    plan_id: int,
    service: TrainingPlanService = Depends(get_training_plan_service),
):
    return await service.list_users_by_plan(plan_id)
