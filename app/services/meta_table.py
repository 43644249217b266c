"""
Meta Table Renderer

Turns the meta mapping of one post, term or user into the editable
inspector table. Every stored value becomes one row, so a key holding three
values produces three rows.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from app.schemas.meta import EntityRef
from app.services.meta_values import from_stored

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

UPDATE_URL = "/admin/ajax/meta_inspector_update_meta_value"
STATIC_URL = "/static"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


@dataclass(frozen=True)
class MetaRow:
    key: str
    text: str
    kind: str


def build_rows(meta: Mapping[str, list[Any]]) -> list[MetaRow]:
    """Flatten key -> values into one row per value."""
    rows = []
    for key, values in meta.items():
        for value in values:
            wire_value = from_stored(value)
            rows.append(MetaRow(key=key, text=wire_value.display(), kind=wire_value.kind.value))
    return rows


def render_meta_table(
    entity: EntityRef,
    meta: Mapping[str, list[Any]],
    nonce: str,
    title: Optional[str] = None,
) -> Optional[Markup]:
    """
    Render the inspector for one object.

    Returns None when the object has no meta data, so the page gets neither
    the table nor the editor script.
    """
    if not meta:
        return None

    rows = build_rows(meta)
    template = _env.get_template("meta_inspector/table.html")
    html = template.render(
        entity=entity,
        rows=rows,
        nonce=nonce,
        title=title,
        update_url=UPDATE_URL,
        static_url=STATIC_URL,
    )
    logger.debug(f"Rendered {len(rows)} meta row(s) for {entity.type.value} {entity.object_id}")
    return Markup(html)
