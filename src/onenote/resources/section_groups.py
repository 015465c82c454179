"""Section group endpoints."""

from onenote.envelope import ApiResponseEnvelope
from onenote.models import GenericEntity
from onenote.query import ODataQuery, to_params
from onenote.resources.base import EntityList, Resource


class SectionGroups(Resource):
    async def list(self, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", "sectionGroups", 200, EntityList, params=to_params(query)
        )

    async def list_in_notebook(self, notebook_id: str, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", f"notebooks/{notebook_id}/sectionGroups", 200, EntityList, params=to_params(query)
        )

    async def list_in_section_group(
        self, section_group_id: str, query: ODataQuery | None = None
    ) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET",
            f"sectionGroups/{section_group_id}/sectionGroups",
            200,
            EntityList,
            params=to_params(query),
        )

    async def get(self, section_group_id: str) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", f"sectionGroups/{section_group_id}", 200, GenericEntity
        )

    async def create_in_notebook(self, notebook_id: str, name: str) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST", f"notebooks/{notebook_id}/sectionGroups", 201, GenericEntity, json={"name": name}
        )

    async def create_in_section_group(self, section_group_id: str, name: str) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST",
            f"sectionGroups/{section_group_id}/sectionGroups",
            201,
            GenericEntity,
            json={"name": name},
        )


__all__ = ["SectionGroups"]
