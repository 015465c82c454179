"""Section endpoints."""

from onenote.envelope import ApiResponseEnvelope
from onenote.models import CopyOperation, GenericEntity
from onenote.query import ODataQuery, to_params
from onenote.resources.base import EntityList, Resource


class Sections(Resource):
    async def list(self, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", "sections", 200, EntityList, params=to_params(query)
        )

    async def list_in_notebook(self, notebook_id: str, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", f"notebooks/{notebook_id}/sections", 200, EntityList, params=to_params(query)
        )

    async def list_in_section_group(
        self, section_group_id: str, query: ODataQuery | None = None
    ) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET",
            f"sectionGroups/{section_group_id}/sections",
            200,
            EntityList,
            params=to_params(query),
        )

    async def get(self, section_id: str) -> ApiResponseEnvelope:
        return await self.client.request("GET", f"sections/{section_id}", 200, GenericEntity)

    async def create_in_notebook(self, notebook_id: str, name: str) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST", f"notebooks/{notebook_id}/sections", 201, GenericEntity, json={"name": name}
        )

    async def copy_to_notebook(
        self, section_id: str, notebook_id: str, rename_as: str | None = None
    ) -> ApiResponseEnvelope:
        return await self._copy(section_id, "CopyToNotebook", notebook_id, rename_as)

    async def copy_to_section_group(
        self, section_id: str, section_group_id: str, rename_as: str | None = None
    ) -> ApiResponseEnvelope:
        return await self._copy(section_id, "CopyToSectionGroup", section_group_id, rename_as)

    async def _copy(
        self, section_id: str, action: str, target_id: str, rename_as: str | None
    ) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST",
            f"sections/{section_id}/Microsoft.OneNote.Api.{action}",
            202,
            CopyOperation,
            json=self.copy_payload(target_id, rename_as),
            beta=True,
        )


__all__ = ["Sections"]
