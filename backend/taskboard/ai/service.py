"""Task extraction service.

Turns free-form meeting notes into task rows: renders the extraction
prompt, calls the configured provider once, parses the reply and runs each
extracted item through the same validation and insert path as manual
creation.
"""

from typing import Any, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.ai.exceptions import AINotConfiguredError, AIProviderError
from taskboard.ai.parsing import parse_task_items
from taskboard.ai.providers.base import AIMessage, AIProvider
from taskboard.ai.providers.xai import XAIProvider
from taskboard.ai.templates import get_template, render_template
from taskboard.config import Settings
from taskboard.exceptions import ValidationError
from taskboard.models import DEFAULT_ASSIGNEE_NAME, DEFAULT_PROJECT_NAME, Task
from taskboard.schemas import TaskPayload, TaskStatus
from taskboard.services.tasks import TaskService
from taskboard.validation import validate_task

logger = structlog.get_logger()

API_KEY_SETTING = "XAI_API_KEY"
UNTITLED = "Untitled"
AI_GENERATED_TAGS = ["ai-generated"]


def _get_str(item: dict[str, Any], key: str) -> Optional[str]:
    """Read a string field; anything else counts as missing."""
    value = item.get(key)
    return value if isinstance(value, str) else None


class TaskExtractionService:
    """Extracts tasks from meeting notes through an AI provider.

    One instance lives on ``app.state`` for the lifetime of the application.
    The provider is built on first use from settings unless one is passed
    in.
    """

    def __init__(self, settings: Settings, provider: Optional[AIProvider] = None):
        self.settings = settings
        self._provider = provider

    def _get_provider(self) -> AIProvider:
        api_key = self.settings.xai_api_key.get_secret_value()
        if not api_key:
            raise AINotConfiguredError(API_KEY_SETTING)

        if self._provider is None:
            self._provider = XAIProvider(
                api_key=api_key,
                base_url=self.settings.xai_base_url,
                default_model=self.settings.xai_model,
                timeout=self.settings.xai_timeout,
            )
        return self._provider

    def build_messages(self, notes: str) -> list[AIMessage]:
        template = get_template("task_from_notes")
        variables = {
            "notes": notes,
            "default_project": DEFAULT_PROJECT_NAME,
            "default_assignee": DEFAULT_ASSIGNEE_NAME,
            "default_status": TaskStatus.TODO.value,
            "statuses": [status.value for status in TaskStatus],
        }
        return [
            AIMessage(role="system", content=render_template(template["system_prompt"], variables)),
            AIMessage(role="user", content=render_template(template["user_prompt_template"], variables)),
        ]

    async def materialize(self, item: dict[str, Any], tasks: TaskService) -> TaskPayload:
        """Build a task candidate from one extracted item, applying defaults.

        Unknown projects and assignees fall back to the defaults.
        """
        title = _get_str(item, "title")
        if title is None:
            title = UNTITLED

        raw_tags = item.get("tags")
        if isinstance(raw_tags, list):
            tags = [tag for tag in raw_tags if isinstance(tag, str)]
        else:
            tags = list(AI_GENERATED_TAGS)

        project = _get_str(item, "project") or DEFAULT_PROJECT_NAME
        if not await tasks.project_exists(project):
            project = DEFAULT_PROJECT_NAME

        assignee = _get_str(item, "assignee") or DEFAULT_ASSIGNEE_NAME
        if not await tasks.assignee_exists(assignee):
            assignee = DEFAULT_ASSIGNEE_NAME

        status = TaskStatus.parse(item.get("status")) or TaskStatus.TODO

        return TaskPayload(
            title=title,
            description=_get_str(item, "description") or "",
            tags=tags,
            deadline=_get_str(item, "deadline") or None,
            project=project,
            assignee=assignee,
            status=status.value,
            in_sprint=False,
            notes=None,
        )

    async def generate_tasks(self, meeting_notes: str, db: AsyncSession) -> list[Task]:
        """Extract tasks from notes and persist every valid one.

        Items that fail validation are dropped; the rest are inserted and
        returned in reply order.

        Raises:
            AINotConfiguredError: If no API key is configured
            ValidationError: If the notes are blank
            AIError: If the provider call or the reply parsing fails
        """
        provider = self._get_provider()

        notes = meeting_notes.strip()
        if not notes:
            raise ValidationError("meeting_notes must not be empty")

        try:
            response = await provider.complete(self.build_messages(notes))
        except AIProviderError as e:
            logger.warning(
                "Task extraction rejected upstream",
                provider=provider.provider_name,
                upstream_status=e.upstream_status,
            )
            raise
        logger.info(
            "Task extraction completed",
            provider=provider.provider_name,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
        )

        items = parse_task_items(response.content)

        tasks = TaskService(db)
        created: list[Task] = []
        for index, item in enumerate(items):
            candidate = await self.materialize(item, tasks)
            error = validate_task(candidate)
            if error:
                logger.debug("Dropping extracted task", index=index, reason=error)
                continue
            created.append(await tasks.insert_task(candidate))

        await db.commit()
        logger.info("Extracted tasks created", received=len(items), created=len(created))
        return created
