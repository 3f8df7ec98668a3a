"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        if self.keys:
            for key in self.keys:
                if key in row:
                    value = row.get(key)
                    if value is not None:
                        break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            formatted = self.formatter(value)
            return "" if formatted is None else str(formatted)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _bool_formatter(value: Any) -> str:
    if value is None:
        return ""
    return "Yes" if bool(value) else "No"


def _link_rels(row: Row) -> Any:
    links = row.get("links")
    if not isinstance(links, list):
        return None
    rels = [str(link.get("rel")) for link in links if isinstance(link, Mapping)]
    return ", ".join(rels) or None


def _masked_code(value: Any) -> str:
    code = str(value)
    if len(code) <= 8:
        return code
    return f"{code[:4]}…{code[-4:]}"


def _sort_id(row: Row) -> Any:
    value = str(row.get("id") or "")
    return (0, int(value), "") if value.isdigit() else (1, 0, value)


def _sort_name(row: Row) -> str:
    return str(row.get("name") or "").lower()


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "enterprises.list": TableView(
        title="Enterprises",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name",)),
        ),
        sort_key=_sort_id,
    ),
    "users.list": TableView(
        title="Users",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Nick", keys=("nick",)),
            Column("Name", extractor=lambda r: " ".join(
                part for part in (r.get("name"), r.get("surname")) if part
            ) or None),
            Column("Email", keys=("email",)),
            Column("Active", keys=("active",), formatter=_bool_formatter, justify="center"),
        ),
        sort_key=lambda row: str(row.get("nick") or "").lower(),
    ),
    "datacenters.list": TableView(
        title="Datacenters",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name",)),
            Column("Location", keys=("location",)),
            Column("Links", extractor=_link_rels),
        ),
        sort_key=_sort_name,
    ),
    "racks.list": TableView(
        title="Racks",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name",)),
            Column("Description", keys=("shortDescription",)),
        ),
        sort_key=_sort_name,
    ),
    "licenses.list": TableView(
        title="Licenses",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Code", keys=("code",), formatter=_masked_code),
            Column("Expiration", keys=("expiration",)),
            Column("Cores", keys=("numcores",), justify="right"),
        ),
        sort_key=_sort_id,
    ),
    "hypervisors.list": TableView(
        title="Hypervisor Types",
        columns=(
            Column("Name", keys=("name",)),
            Column("Friendly Name", keys=("friendlyName",)),
        ),
        sort_key=_sort_name,
    ),
}
