"""
Task time-logging API routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from backend.src.adapters.inbound.api.dependencies import get_progress_service
from backend.src.application.dto.log_time_request import LogTimeRequest
from backend.src.application.progress_service import ProgressService
from backend.src.core.entities.task import MAX_MINUTES

router = APIRouter()


class LogTaskBody(BaseModel):
    user_id: str = Field(default="", alias="userId")
    goal_id: Optional[str] = Field(default=None, alias="goalId")
    milestone_id: Optional[str] = Field(default=None, alias="milestoneId")
    task_id: str = Field(default="", alias="taskId")
    delta_mins: int = Field(default=0, alias="deltaMins", le=MAX_MINUTES)
    # Optional seeds (first time a task is seen)
    task_title: Optional[str] = Field(default=None, alias="taskTitle")
    estimate_mins: Optional[int] = Field(default=None, alias="estimateMins", le=MAX_MINUTES)
    color: Optional[str] = None

    model_config = {"populate_by_name": True}


class TaskResponse(BaseModel):
    task_id: str = Field(serialization_alias="taskId")
    title: str
    color: str
    milestone_id: Optional[str] = Field(default=None, serialization_alias="milestoneId")
    goal_id: Optional[str] = Field(default=None, serialization_alias="goalId")
    estimate_mins: int = Field(serialization_alias="estimateMins")
    logged_mins: int = Field(serialization_alias="loggedMins")


@router.post("/log", status_code=204, response_class=Response)
async def log_task(
    body: LogTaskBody,
    service: ProgressService = Depends(get_progress_service),
):
    await service.log_time(
        LogTimeRequest(
            user_id=body.user_id,
            task_id=body.task_id,
            delta_minutes=body.delta_mins,
            milestone_id=body.milestone_id,
            goal_id=body.goal_id,
            task_title=body.task_title,
            estimate_minutes=body.estimate_mins,
            color=body.color,
        )
    )
    return Response(status_code=204)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    service: ProgressService = Depends(get_progress_service),
):
    task = await service.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse(
        task_id=task.task_id,
        title=task.title,
        color=task.color,
        milestone_id=task.milestone_id,
        goal_id=task.goal_id,
        estimate_mins=task.estimate_minutes,
        logged_mins=task.logged_minutes,
    )
