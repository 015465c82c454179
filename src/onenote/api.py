"""Convenience bundle of all resource groups over one client."""

from onenote.client import OneNoteClient
from onenote.resources import Notebooks, Pages, SectionGroups, Sections


class OneNoteApi:
    """
    All resource groups sharing one OneNoteClient.

    Usage:
        async with OneNoteClient(facade, provider, route) as client:
            api = OneNoteApi(client)
            envelope = await api.notebooks.list()
    """

    def __init__(self, client: OneNoteClient):
        self.client = client
        self.notebooks = Notebooks(client)
        self.sections = Sections(client)
        self.section_groups = SectionGroups(client)
        self.pages = Pages(client)


__all__ = ["OneNoteApi"]
