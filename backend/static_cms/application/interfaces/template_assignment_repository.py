"""Port for bulk-resetting the custom template of categories and pages."""

from abc import ABC, abstractmethod


class TemplateAssignmentRepository(ABC):
    @abstractmethod
    async def reset_category_templates(self, template: str) -> int:
        """Point every category at ``template``. Returns the number of rows touched."""
        ...

    @abstractmethod
    async def reset_page_templates(self, template: str) -> int:
        """Point every page at ``template``. Returns the number of rows touched."""
        ...
