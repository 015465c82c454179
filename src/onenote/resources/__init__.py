"""Resource groups of the OneNote API."""

from onenote.resources.base import EntityList, Resource
from onenote.resources.notebooks import Notebooks
from onenote.resources.pages import PageList, Pages
from onenote.resources.section_groups import SectionGroups
from onenote.resources.sections import Sections

__all__ = [
    "Resource",
    "EntityList",
    "PageList",
    "Notebooks",
    "Sections",
    "SectionGroups",
    "Pages",
]
