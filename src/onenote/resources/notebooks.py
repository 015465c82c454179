"""Notebook endpoints."""

from onenote.envelope import ApiResponseEnvelope
from onenote.models import CopyOperation, GenericEntity
from onenote.query import ODataQuery, to_params
from onenote.resources.base import EntityList, Resource


class Notebooks(Resource):
    async def list(self, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        """
        List notebooks.

        Example queries:
            ODataQuery(filter="name eq 'Work'")
            ODataQuery(filter="userRole ne Microsoft.OneNote.Api.UserRole'Owner'")
            ODataQuery(expand="sections,sectionGroups($expand=sections)")
        """
        return await self.client.request(
            "GET", "notebooks", 200, EntityList, params=to_params(query)
        )

    async def get(self, notebook_id: str) -> ApiResponseEnvelope:
        return await self.client.request("GET", f"notebooks/{notebook_id}", 200, GenericEntity)

    async def create(self, name: str) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST", "notebooks", 201, GenericEntity, json={"name": name}
        )

    async def copy(self, notebook_id: str, rename_as: str | None = None) -> ApiResponseEnvelope:
        """
        Start copying a notebook. Copy endpoints are only on the beta route.

        The API answers 409 if a notebook named ``rename_as`` already exists.
        """
        return await self.client.request(
            "POST",
            f"notebooks/{notebook_id}/Microsoft.OneNote.Api.CopyNotebook",
            202,
            CopyOperation,
            json=self.copy_payload(rename_as=rename_as),
            beta=True,
        )


__all__ = ["Notebooks"]
