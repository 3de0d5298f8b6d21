"""
Canvas service for canvasapi.

Ties the construction pipeline to a document store and reports failures as
structured results instead of raising them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from ..builder import construct_canvas, update_canvas
from ..database import DocumentStore
from ..errors import CanvasNotFound, CanvasValidationError
from ..models import Canvas
from ..templates import TemplateResolver


class CanvasResult(BaseModel):
    """
    The outcome of a create or update.
    """

    ok: bool = Field(..., description="Whether the canvas was stored")

    canvas: Optional[Canvas] = Field(
        None,
        description="The stored canvas, when successful"
    )

    errors: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Field-keyed error messages, when unsuccessful"
    )


class ChannelNotifier(ABC):
    """
    Tells chat channels about a canvas shared with them.

    Delivery (and any retry or delay handling) belongs to the implementation.
    """

    @abstractmethod
    def notify_new(self, canvas_id: str, notifier_id: str, channel_id: str, delay: int = 0) -> None:
        """
        Announce a canvas to a channel it was newly shared with.

        Args:
            canvas_id: The shared canvas
            notifier_id: The user sharing it
            channel_id: The channel to notify
            delay: Seconds to wait before delivering
        """
        pass


class CanvasService:
    """
    Creates, lists, shows, updates and deletes canvases.
    """

    def __init__(self, store: DocumentStore,
                 global_template_source_id: Optional[str] = None,
                 notifier: Optional[ChannelNotifier] = None,
                 web_base_url: str = "",
                 create_notify_delay: int = 300):
        """
        Initialize the canvas service.

        Args:
            store: Where canvases are persisted
            global_template_source_id: User whose templates are offered to everyone
            notifier: Receives new channel shares; no notifications are sent without one
            web_base_url: Base URL of the web client
            create_notify_delay: Seconds before channels hear about a new canvas
        """
        self.store = store
        self.global_template_source_id = global_template_source_id
        self.notifier = notifier
        self.web_base_url = web_base_url.rstrip("/")
        self.create_notify_delay = create_notify_delay
        self.resolver = TemplateResolver(store)

    def create(self, params: Optional[Mapping[str, Any]], creator_id: str, team_id: str,
               template: Optional[Mapping[str, Any]] = None,
               notifier_id: Optional[str] = None) -> CanvasResult:
        """
        Create and store a new canvas.

        Args:
            params: Canvas attributes (Markdown or blocks, sharing settings)
            creator_id: The creating user
            team_id: The team to create the canvas in
            template: Optional ``{"id": ..., "type": "canvas"}`` template reference;
                ignored if the template is not found
            notifier_id: If given, channels the canvas is shared with are notified
                on this user's behalf

        Returns:
            The result, holding the stored canvas or the validation errors
        """
        try:
            canvas = construct_canvas(params, creator_id, team_id,
                                      template_ref=template, resolver=self.resolver)
        except CanvasValidationError as e:
            logging.info(f"Rejected new canvas: {e}")
            return CanvasResult(ok=False, errors=e.errors)

        if not self.store.insert(canvas):
            return CanvasResult(ok=False, errors={"id": ["has already been taken"]})

        if notifier_id:
            self._notify_channels(notifier_id, canvas, [], delay=self.create_notify_delay)

        return CanvasResult(ok=True, canvas=self.store.get(canvas.id) or canvas)

    def list(self, creator_id: str, only_templates: bool = False) -> List[Canvas]:
        """
        List canvases on behalf of a user.

        Args:
            creator_id: The user to list canvases for
            only_templates: List only template canvases, including the global
                templates if a global template source is configured

        Returns:
            The canvases; templates are sorted by title
        """
        canvases = self.store.list_canvases(creator_id, only_templates=only_templates)
        if not only_templates:
            return canvases

        return sorted(self._merge_global_templates(canvases), key=lambda canvas: canvas.title())

    def show(self, canvas_id: str, team_id: str) -> Optional[Canvas]:
        """Get a canvas in a team, or None if there is none."""
        return self.store.get(canvas_id, team_id=team_id)

    def fetch(self, canvas_id: str, team_id: str) -> Canvas:
        """
        Get a canvas in a team.

        Raises:
            CanvasNotFound: If the team has no such canvas
        """
        canvas = self.show(canvas_id, team_id)
        if canvas is None:
            raise CanvasNotFound(canvas_id)
        return canvas

    def update(self, canvas: Canvas, params: Optional[Mapping[str, Any]],
               notifier_id: Optional[str] = None) -> CanvasResult:
        """
        Update a canvas's sharing attributes and store it.

        Args:
            canvas: The canvas to update
            params: New 'is_template', 'link_access' and/or 'slack_channel_ids'
            notifier_id: If given, newly added channels are notified on this
                user's behalf

        Returns:
            The result, holding the stored canvas or the validation errors
        """
        old_channel_ids = list(canvas.slack_channel_ids)

        try:
            updated = update_canvas(canvas, params)
        except CanvasValidationError as e:
            logging.info(f"Rejected update to canvas {canvas.id}: {e}")
            return CanvasResult(ok=False, errors=e.errors)

        if not self.store.update(updated):
            return CanvasResult(ok=False, errors={"id": ["does not exist"]})

        if notifier_id:
            self._notify_channels(notifier_id, updated, old_channel_ids)

        return CanvasResult(ok=True, canvas=self.store.get(updated.id) or updated)

    def delete(self, canvas_id: str, team_id: str) -> Optional[Canvas]:
        """
        Delete a canvas in a team.

        Returns:
            The deleted canvas, or None if the team has no such canvas
        """
        canvas = self.show(canvas_id, team_id)
        if canvas is None:
            return None
        if not self.store.delete(canvas):
            logging.warning(f"Canvas {canvas.id} was already gone when deleting it")
            return None
        return canvas

    def web_url(self, canvas: Canvas, team_domain: str) -> str:
        """Get the web client URL of a canvas."""
        return f"{self.web_base_url}/{team_domain}/{canvas.id}"

    def _merge_global_templates(self, templates: List[Canvas]) -> List[Canvas]:
        if not self.global_template_source_id:
            return templates

        global_templates = self.store.list_canvases(self.global_template_source_id, only_templates=True)
        known_ids = {canvas.id for canvas in templates}
        return templates + [canvas for canvas in global_templates if canvas.id not in known_ids]

    def _notify_channels(self, notifier_id: str, canvas: Canvas, old_channel_ids: List[str],
                         delay: int = 0) -> None:
        if self.notifier is None:
            return

        for channel_id in canvas.slack_channel_ids:
            if channel_id not in old_channel_ids:
                logging.info(f"Notifying channel {channel_id} about canvas {canvas.id}")
                self.notifier.notify_new(canvas.id, notifier_id, channel_id, delay=delay)
