"""Tests for resource endpoint paths, statuses and payloads."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from onenote.api import OneNoteApi
from onenote.client import HTML
from onenote.envelope import ApiResponseEnvelope
from onenote.models import CopyOperation, GenericEntity, Page, PatchCommand
from onenote.query import ODataQuery
from onenote.resources import EntityList, PageList
from onenote.resources.pages import PRESENTATION_PART


@pytest.fixture
def client():
    client = MagicMock()
    client.request = AsyncMock(return_value=ApiResponseEnvelope(status_code=200, expected_status=200))
    return client


@pytest.fixture
def api(client):
    return OneNoteApi(client)


class TestNotebooks:
    async def test_list(self, api, client):
        await api.notebooks.list(ODataQuery(filter="name eq 'Work'"))
        client.request.assert_awaited_once_with(
            "GET", "notebooks", 200, EntityList, params={"$filter": "name eq 'Work'"}
        )

    async def test_get(self, api, client):
        await api.notebooks.get("0-1")
        client.request.assert_awaited_once_with("GET", "notebooks/0-1", 200, GenericEntity)

    async def test_create(self, api, client):
        await api.notebooks.create("My Notebook")
        client.request.assert_awaited_once_with(
            "POST", "notebooks", 201, GenericEntity, json={"name": "My Notebook"}
        )

    async def test_copy(self, api, client):
        await api.notebooks.copy("0-1", rename_as="Copy of Work")
        client.request.assert_awaited_once_with(
            "POST",
            "notebooks/0-1/Microsoft.OneNote.Api.CopyNotebook",
            202,
            CopyOperation,
            json={"renameAs": "Copy of Work"},
            beta=True,
        )


class TestSections:
    async def test_list_in_notebook(self, api, client):
        await api.sections.list_in_notebook("0-1")
        client.request.assert_awaited_once_with(
            "GET", "notebooks/0-1/sections", 200, EntityList, params=None
        )

    async def test_list_in_section_group(self, api, client):
        await api.sections.list_in_section_group("2-1")
        assert client.request.call_args.args[1] == "sectionGroups/2-1/sections"

    async def test_create_in_notebook(self, api, client):
        await api.sections.create_in_notebook("0-1", "Ideas")
        client.request.assert_awaited_once_with(
            "POST", "notebooks/0-1/sections", 201, GenericEntity, json={"name": "Ideas"}
        )

    async def test_copy_to_notebook(self, api, client):
        await api.sections.copy_to_notebook("1-1", "0-2")
        client.request.assert_awaited_once_with(
            "POST",
            "sections/1-1/Microsoft.OneNote.Api.CopyToNotebook",
            202,
            CopyOperation,
            json={"id": "0-2"},
            beta=True,
        )

    async def test_copy_to_section_group(self, api, client):
        await api.sections.copy_to_section_group("1-1", "2-1", rename_as="Archive")
        args, kwargs = client.request.call_args
        assert args[1] == "sections/1-1/Microsoft.OneNote.Api.CopyToSectionGroup"
        assert kwargs["json"] == {"id": "2-1", "renameAs": "Archive"}


class TestSectionGroups:
    async def test_list(self, api, client):
        await api.section_groups.list()
        client.request.assert_awaited_once_with("GET", "sectionGroups", 200, EntityList, params=None)

    async def test_list_nested(self, api, client):
        await api.section_groups.list_in_section_group("2-1")
        assert client.request.call_args.args[1] == "sectionGroups/2-1/sectionGroups"

    async def test_create_in_section_group(self, api, client):
        await api.section_groups.create_in_section_group("2-1", "Inner")
        client.request.assert_awaited_once_with(
            "POST", "sectionGroups/2-1/sectionGroups", 201, GenericEntity, json={"name": "Inner"}
        )


class TestPages:
    async def test_list(self, api, client):
        await api.pages.list(ODataQuery(top=10, skip=20))
        client.request.assert_awaited_once_with(
            "GET", "pages", 200, PageList, params={"$top": "10", "$skip": "20"}
        )

    async def test_search_uses_beta(self, api, client):
        await api.pages.search("budget", ODataQuery(top=5))
        client.request.assert_awaited_once_with(
            "GET", "pages", 200, PageList, params={"$top": "5", "search": "budget"}, beta=True
        )

    async def test_get(self, api, client):
        await api.pages.get("p-1")
        client.request.assert_awaited_once_with("GET", "pages/p-1", 200, Page)

    async def test_get_content(self, api, client):
        await api.pages.get_content("p-1", include_ids=True)
        client.request.assert_awaited_once_with(
            "GET", "pages/p-1/content", 200, None, params={"includeIDs": "true"}, accept=HTML
        )

    @pytest.mark.parametrize(
        "kwargs,resource,params",
        [
            ({"section_id": "1-1"}, "sections/1-1/pages", None),
            ({"section_name": "Quick Notes"}, "pages", {"sectionName": "Quick Notes"}),
            ({}, "pages", None),
        ],
    )
    async def test_create_targets(self, api, client, kwargs, resource, params):
        await api.pages.create("<html/>", **kwargs)
        client.request.assert_awaited_once_with(
            "POST", resource, 201, Page, params=params, data="<html/>", content_type=HTML
        )

    async def test_create_multipart_builds_fresh_form(self, api, client):
        await api.pages.create_multipart(
            "<html/>", parts={"image1": (b"\x89PNG", "image/png")}, section_id="1-1"
        )

        args, kwargs = client.request.call_args
        assert args[:4] == ("POST", "sections/1-1/pages", 201, Page)
        build = kwargs["data"]
        first, second = build(), build()
        assert isinstance(first, aiohttp.FormData)
        assert first is not second
        names = [field[0]["name"] for field in first._fields]
        assert names == [PRESENTATION_PART, "image1"]

    async def test_append_content(self, api, client):
        commands = [
            PatchCommand(target="body", action="append", content="<p>New</p>"),
            {"target": "#p1", "action": "replace", "content": "<p>Edit</p>"},
        ]

        await api.pages.append_content("p-1", commands)

        client.request.assert_awaited_once_with(
            "PATCH",
            "pages/p-1/content",
            204,
            json=[
                {"target": "body", "action": "append", "content": "<p>New</p>"},
                {"target": "#p1", "action": "replace", "content": "<p>Edit</p>"},
            ],
        )

    async def test_delete(self, api, client):
        await api.pages.delete("p-1")
        client.request.assert_awaited_once_with("DELETE", "pages/p-1", 204)

    async def test_copy_to_section(self, api, client):
        await api.pages.copy_to_section("p-1", "1-2")
        client.request.assert_awaited_once_with(
            "POST",
            "pages/p-1/Microsoft.OneNote.Api.CopyToSection",
            202,
            CopyOperation,
            json={"id": "1-2"},
            beta=True,
        )
