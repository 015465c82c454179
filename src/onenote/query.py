"""OData query options for list endpoints."""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class ODataQuery:
    """
    Query options appended to a list request.

    Example:
        >>> ODataQuery(filter="name eq 'Work'", top=5).to_params()
        {'$filter': "name eq 'Work'", '$top': '5'}
    """

    filter: str | None = None
    select: str | None = None
    orderby: str | None = None
    expand: str | None = None
    top: int | None = None
    skip: int | None = None
    # Full-text search is a plain parameter, not an OData system option
    search: str | None = None

    def to_params(self) -> dict[str, str]:
        params = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            key = f.name if f.name == "search" else f"${f.name}"
            params[key] = str(value)
        return params


def to_params(query: ODataQuery | None) -> dict[str, str] | None:
    if query is None:
        return None
    return query.to_params() or None


__all__ = ["ODataQuery", "to_params"]
