"""``TaskAssigned``: tell a user that someone assigned them a task."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from notifyhub.domain.entities import NotificationRequest, RouteConfig, User
from notifyhub.utils import utc_now

from .base import RouteParameters, UserLookupResolver
from .kinds import TASK

ROUTE = "TaskAssigned"
DEFAULT_DUE_DAYS = 7
SYSTEM_ASSIGNER = "System"


class TaskAssignedParameters(RouteParameters):
    assignee_id: int
    assigner_id: int
    task_title: str | None = None
    task_description: str | None = None
    priority: str | None = None
    due_date: datetime | None = None


class TaskAssignedResolver(UserLookupResolver):
    route = ROUTE
    parameters_model = TaskAssignedParameters

    async def resolve_recipients(self, request: NotificationRequest) -> list[User]:
        params = self.parameters(request)
        return await self._single_recipient(params.assignee_id)

    async def resolve_full_data(self, request: NotificationRequest) -> dict[str, Any]:
        params = self.parameters(request)
        assignee = await self._require_user(params.assignee_id, "assigneeId")
        assigner = await self._find_user(params.assigner_id)
        now = utc_now()
        return {
            "AssigneeName": assignee.name,
            "AssignerName": assigner.name if assigner is not None else SYSTEM_ASSIGNER,
            "TaskTitle": params.task_title or "Untitled task",
            "TaskDescription": params.task_description or "",
            "Priority": params.priority or "Normal",
            "DueDate": params.due_date or now + timedelta(days=DEFAULT_DUE_DAYS),
            "AssignedDate": now,
        }


CONFIG = RouteConfig(
    name=ROUTE,
    template_name="TaskAssigned",
    display_name="Task Assigned",
    description="Notification sent when a task is assigned to a user",
    object_kind=TASK,
    tags=("task", "assignment", "work"),
    icon="bookmark-check",
)

__all__ = ["CONFIG", "ROUTE", "TaskAssignedParameters", "TaskAssignedResolver"]
