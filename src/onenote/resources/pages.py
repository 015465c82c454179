"""Page endpoints: listing, search, content, creation, PATCH, delete and copy."""

from collections.abc import Mapping, Sequence

import aiohttp

from onenote.client import HTML
from onenote.envelope import ApiResponseEnvelope
from onenote.models import CopyOperation, ODataCollection, Page, PatchCommand
from onenote.query import ODataQuery, to_params
from onenote.resources.base import Resource

PageList = ODataCollection[Page]

# Name of the multipart part holding the page HTML
PRESENTATION_PART = "Presentation"


class Pages(Resource):
    async def list(self, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        """
        List pages.

        Example queries:
            ODataQuery(skip=20, top=10)
            ODataQuery(filter="contains(title,'Meeting')")
            ODataQuery(select="id,title", orderby="title")
        """
        return await self.client.request("GET", "pages", 200, PageList, params=to_params(query))

    async def search(self, term: str, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        """Full-text search across page content. Search is on the beta route."""
        params = to_params(query) or {}
        params["search"] = term
        return await self.client.request("GET", "pages", 200, PageList, params=params, beta=True)

    async def list_in_section(self, section_id: str, query: ODataQuery | None = None) -> ApiResponseEnvelope:
        return await self.client.request(
            "GET", f"sections/{section_id}/pages", 200, PageList, params=to_params(query)
        )

    async def get(self, page_id: str) -> ApiResponseEnvelope:
        return await self.client.request("GET", f"pages/{page_id}", 200, Page)

    async def get_content(self, page_id: str, include_ids: bool = False) -> ApiResponseEnvelope:
        """Fetch page HTML. The HTML is in ``envelope.body``; there is no entity."""
        params = {"includeIDs": "true"} if include_ids else None
        return await self.client.request(
            "GET", f"pages/{page_id}/content", 200, None, params=params, accept=HTML
        )

    async def create(
        self,
        html: str,
        section_id: str | None = None,
        section_name: str | None = None,
    ) -> ApiResponseEnvelope:
        """
        Create a page from HTML.

        Goes to the given section, or the section named ``section_name`` in
        the default notebook (created if missing), or the default section.
        """
        resource, params = self._target(section_id, section_name)
        return await self.client.request(
            "POST", resource, 201, Page, params=params, data=html, content_type=HTML
        )

    async def create_multipart(
        self,
        html: str,
        parts: Mapping[str, tuple[bytes | str, str]] | None = None,
        section_id: str | None = None,
        section_name: str | None = None,
    ) -> ApiResponseEnvelope:
        """
        Create a page with binary attachments or embedded resources.

        Args:
            html: Page HTML; refers to parts as ``name:{part_name}``
            parts: Part name to (content, content type)
            section_id: Target section id
            section_name: Target section name in the default notebook
        """
        resource, params = self._target(section_id, section_name)
        parts = dict(parts or {})

        def build_form() -> aiohttp.FormData:
            form = aiohttp.FormData()
            form.add_field(PRESENTATION_PART, html, content_type=HTML)
            for name, (content, content_type) in parts.items():
                form.add_field(name, content, content_type=content_type, filename=name)
            return form

        return await self.client.request("POST", resource, 201, Page, params=params, data=build_form)

    async def append_content(
        self, page_id: str, commands: Sequence[PatchCommand | dict]
    ) -> ApiResponseEnvelope:
        payload = [c.to_payload() if isinstance(c, PatchCommand) else dict(c) for c in commands]
        return await self.client.request("PATCH", f"pages/{page_id}/content", 204, json=payload)

    async def delete(self, page_id: str) -> ApiResponseEnvelope:
        return await self.client.request("DELETE", f"pages/{page_id}", 204)

    async def copy_to_section(
        self, page_id: str, section_id: str, rename_as: str | None = None
    ) -> ApiResponseEnvelope:
        return await self.client.request(
            "POST",
            f"pages/{page_id}/Microsoft.OneNote.Api.CopyToSection",
            202,
            CopyOperation,
            json=self.copy_payload(section_id, rename_as),
            beta=True,
        )

    @staticmethod
    def _target(section_id: str | None, section_name: str | None) -> tuple[str, dict[str, str] | None]:
        if section_id:
            return f"sections/{section_id}/pages", None
        if section_name:
            return "pages", {"sectionName": section_name}
        return "pages", None


__all__ = ["Pages", "PageList", "PRESENTATION_PART"]
