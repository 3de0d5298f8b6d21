"""
Canvas construction and update for canvasapi.

New canvases go through one pipeline: Markdown import (when Markdown is
given), block canonicalization, template resolution, then field validation.
Updates only touch the sharing attributes; block content is never changed here.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel, to_snake

from .canonicalizer import canonicalize_blocks
from .config import config
from .errors import CanvasValidationError
from .importers import parse_markdown
from .models import Canvas, CanvasChangeset
from .models.canvas import LINK_ACCESS_VALUES
from .templates import TemplateResolver


class CanvasUpdateParams(BaseModel):
    """Attributes a caller may change on an existing canvas."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    is_template: Optional[bool] = None
    link_access: Optional[str] = None
    slack_channel_ids: Optional[List[str]] = None


class CanvasParams(CanvasUpdateParams):
    """Attributes a caller may supply for a new canvas."""

    markdown: Optional[str] = None
    blocks: Optional[List[Any]] = None


def _cast(params_class, raw_params: Optional[Mapping[str, Any]]):
    """Cast raw caller parameters, reporting type errors per field."""
    try:
        return params_class.model_validate(dict(raw_params or {}))
    except ValidationError as e:
        errors: Dict[str, List[str]] = {}
        for err in e.errors():
            field = to_snake(str(err["loc"][0])) if err["loc"] else "base"
            errors.setdefault(field, []).append(err["msg"])
        raise CanvasValidationError(errors) from e


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def validate_link_access(link_access: Optional[str]) -> None:
    """
    Check a link access value.

    Raises:
        CanvasValidationError: If the value is set and not one of none/read/edit
    """
    if link_access is not None and link_access not in LINK_ACCESS_VALUES:
        raise CanvasValidationError({"link_access": ["is invalid"]})


def construct_canvas(raw_params: Optional[Mapping[str, Any]],
                     creator_id: str,
                     team_id: str,
                     template_ref: Optional[Mapping[str, Any]] = None,
                     resolver: Optional[TemplateResolver] = None,
                     ignore_template_blocks: bool = False) -> Canvas:
    """
    Build a new canvas from caller-supplied parameters.

    Args:
        raw_params: Canvas attributes; 'markdown' takes precedence over 'blocks'
        creator_id: The already-resolved creating user
        team_id: The already-resolved team
        template_ref: Optional ``{"id": ..., "type": "canvas"}`` template reference
        resolver: Resolver used to apply ``template_ref``
        ignore_template_blocks: Link the template without cloning its blocks

    Returns:
        The new canvas, not yet stored

    Raises:
        CanvasValidationError: On the first failing step (block construction
            failures are raised as BlockConstructionError)
    """
    params = _cast(CanvasParams, raw_params)

    block_params = params.blocks
    if params.markdown:
        block_params = parse_markdown(params.markdown)

    changeset = CanvasChangeset(
        is_template=params.is_template,
        link_access=params.link_access,
        slack_channel_ids=params.slack_channel_ids,
        blocks=canonicalize_blocks(block_params),
    )

    if template_ref is not None:
        if resolver is None:
            logging.warning("Template reference given without a resolver; ignoring it")
        else:
            changeset = resolver.resolve(changeset, template_ref, ignore_blocks=ignore_template_blocks)

    validate_link_access(changeset.link_access)

    attributes: Dict[str, Any] = {
        "creator_id": creator_id,
        "team_id": team_id,
        "template_id": changeset.template_id,
        "native_version": config.native_version,
        "type": config.canvas_type,
        "edited_at": datetime.now(timezone.utc),
        "blocks": changeset.blocks,
    }
    if changeset.is_template is not None:
        attributes["is_template"] = changeset.is_template
    if changeset.link_access is not None:
        attributes["link_access"] = changeset.link_access
    if changeset.slack_channel_ids is not None:
        attributes["slack_channel_ids"] = _unique(changeset.slack_channel_ids)

    canvas = Canvas(**attributes)
    logging.info(f"Constructed canvas {canvas.id} with {len(canvas.blocks)} top-level blocks")
    return canvas


def update_canvas(existing: Canvas, raw_params: Optional[Mapping[str, Any]]) -> Canvas:
    """
    Apply an update to a canvas's sharing attributes.

    Only 'is_template', 'link_access' and 'slack_channel_ids' are read; any
    block or Markdown parameters are ignored.

    Args:
        existing: The canvas to update (left unmodified)
        raw_params: The new attribute values

    Returns:
        A new canvas carrying the changes

    Raises:
        CanvasValidationError: If a value is invalid
    """
    params = _cast(CanvasUpdateParams, raw_params)
    changes = params.model_dump(exclude_unset=True)

    if changes.get("is_template") is None:
        changes.pop("is_template", None)
    if changes.get("slack_channel_ids") is None:
        changes.pop("slack_channel_ids", None)
    else:
        changes["slack_channel_ids"] = _unique(changes["slack_channel_ids"])

    if "link_access" in changes:
        if changes["link_access"] is None:
            raise CanvasValidationError({"link_access": ["can't be blank"]})
        validate_link_access(changes["link_access"])

    return existing.model_copy(update=changes)
