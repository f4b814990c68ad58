"""ManageTemplatesUseCase: reusable resolution snippets."""

from __future__ import annotations

import logging

from app.application.ports.template_repo import ResolutionTemplateRepository
from app.domain.entities.record import ResolutionTemplate

logger = logging.getLogger(__name__)


class ManageTemplatesUseCase:
    def __init__(self, template_repo: ResolutionTemplateRepository):
        self._templates = template_repo

    async def list_templates(self) -> list[ResolutionTemplate]:
        return await self._templates.get_all()

    async def add_template(self, value: str) -> ResolutionTemplate:
        text = (value or "").strip()
        if not text:
            raise ValueError("Template text must not be empty")
        template = await self._templates.add(text)
        logger.info("Added resolution template #%s", template.id)
        return template

    async def delete_template(self, template_id: int) -> bool:
        deleted = await self._templates.delete(template_id)
        if deleted:
            logger.info("Deleted resolution template #%d", template_id)
        else:
            logger.warning("Resolution template #%d not found", template_id)
        return deleted
