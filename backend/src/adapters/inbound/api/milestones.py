"""
Milestone progress API routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from backend.src.adapters.inbound.api.dependencies import get_progress_service
from backend.src.application.progress_service import ProgressService

router = APIRouter()


class MilestoneTaskResponse(BaseModel):
    task_id: str = Field(serialization_alias="taskId")
    title: str
    color: str
    goal_id: Optional[str] = Field(default=None, serialization_alias="goalId")
    estimate_mins: int = Field(serialization_alias="estimateMins")
    logged_mins: int = Field(serialization_alias="loggedMins")
    remaining_mins: int = Field(serialization_alias="remainingMins")
    complete: bool


class MilestoneResponse(BaseModel):
    milestone_id: str = Field(serialization_alias="milestoneId")
    complete: bool
    estimate_mins: int = Field(serialization_alias="estimateMins")
    logged_mins: int = Field(serialization_alias="loggedMins")
    tasks: list[MilestoneTaskResponse]


@router.get("/{milestone_id}", response_model=MilestoneResponse)
async def get_milestone(
    milestone_id: str,
    service: ProgressService = Depends(get_progress_service),
):
    """Aggregate progress of every task logged under *milestone_id*."""
    progress = await service.get_milestone(milestone_id)
    if not progress.tasks:
        raise HTTPException(status_code=404, detail="Milestone not found")
    return MilestoneResponse(
        milestone_id=progress.milestone_id,
        complete=progress.complete,
        estimate_mins=progress.estimate_minutes,
        logged_mins=progress.logged_minutes,
        tasks=[
            MilestoneTaskResponse(
                task_id=t.task_id,
                title=t.title,
                color=t.color,
                goal_id=t.goal_id,
                estimate_mins=t.estimate_minutes,
                logged_mins=t.logged_minutes,
                remaining_mins=t.remaining_minutes,
                complete=t.is_complete,
            )
            for t in progress.tasks
        ],
    )
