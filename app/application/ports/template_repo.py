"""Port interface for resolution template persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.record import ResolutionTemplate


class ResolutionTemplateRepository(ABC):
    @abstractmethod
    async def get_all(self) -> list[ResolutionTemplate]:
        ...

    @abstractmethod
    async def add(self, value: str) -> ResolutionTemplate:
        """Persist a template under the next free id (max + 1)."""
        ...

    @abstractmethod
    async def delete(self, template_id: int) -> bool:
        """Return False when no template had this id."""
        ...
