"""Resolution template endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.manage_templates import ManageTemplatesUseCase
from app.infrastructure.api.dependencies import get_db_session, get_templates_uc
from app.infrastructure.api.envelope import ok

router = APIRouter(prefix="/resolution-templates", tags=["templates"])


class TemplateCreate(BaseModel):
    value: str


@router.get("")
async def list_templates(uc: ManageTemplatesUseCase = Depends(get_templates_uc)):
    templates = await uc.list_templates()
    return ok(
        [{"id": t.id, "value": t.value} for t in templates],
        f"Found {len(templates)} resolution templates",
    )


@router.post("")
async def add_template(
    body: TemplateCreate,
    uc: ManageTemplatesUseCase = Depends(get_templates_uc),
    session: AsyncSession = Depends(get_db_session),
):
    template = await uc.add_template(body.value)
    await session.commit()
    return ok({"id": template.id, "value": template.value}, "Resolution template added")


@router.delete("/{template_id}")
async def delete_template(
    template_id: int,
    uc: ManageTemplatesUseCase = Depends(get_templates_uc),
    session: AsyncSession = Depends(get_db_session),
):
    if not await uc.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Resolution template not found")
    await session.commit()
    return ok(None, "Resolution template deleted")
