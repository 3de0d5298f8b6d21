"""
Database manager for canvasapi.

This module stores canvases in DuckDB. Each canvas is kept as its JSON
document, next to the columns it is looked up by.
"""

import duckdb
import logging
from datetime import datetime
from typing import Any, List, Optional, Sequence

from ..models import Canvas
from .base import DocumentStore


# Kept as columns rather than in the JSON document
_ROW_TIMESTAMPS = {"inserted_at", "updated_at"}


class DatabaseManager(DocumentStore):
    """
    Manages the DuckDB database holding canvases.
    """

    def __init__(self, db_path: str = "canvas.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file (":memory:" for a throwaway database)
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS canvases (
                id VARCHAR PRIMARY KEY,
                team_id VARCHAR,
                creator_id VARCHAR,
                is_template BOOLEAN NOT NULL DEFAULT false,
                document TEXT NOT NULL,
                inserted_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """)
        connection.execute("CREATE INDEX IF NOT EXISTS canvases_creator_idx ON canvases (creator_id)")

    @staticmethod
    def _serialize(canvas: Canvas) -> str:
        return canvas.model_dump_json(by_alias=True, exclude=_ROW_TIMESTAMPS)

    @staticmethod
    def _row_to_canvas(row: Sequence[Any]) -> Canvas:
        canvas = Canvas.model_validate_json(row[0])
        return canvas.model_copy(update={"inserted_at": row[1], "updated_at": row[2]})

    def get(self, canvas_id: str, team_id: Optional[str] = None) -> Optional[Canvas]:
        """
        Retrieve a canvas by ID.

        Args:
            canvas_id: The ID of the canvas to retrieve
            team_id: If given, only a canvas in this team matches

        Returns:
            The canvas if found, None otherwise
        """
        connection = self._require_connection()

        query = "SELECT document, inserted_at, updated_at FROM canvases WHERE id = ?"
        params: List[Any] = [canvas_id]
        if team_id is not None:
            query += " AND team_id = ?"
            params.append(team_id)

        result = connection.execute(query, params).fetchone()
        if result:
            return self._row_to_canvas(result)
        return None

    def insert(self, canvas: Canvas) -> bool:
        """
        Add a new canvas to the database.

        Args:
            canvas: The canvas to add

        Returns:
            True if the canvas was added, False if it already existed
        """
        connection = self._require_connection()
        now = datetime.now()

        try:
            connection.execute("""
                INSERT INTO canvases (id, team_id, creator_id, is_template, document, inserted_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                canvas.id,
                canvas.team_id,
                canvas.creator_id,
                canvas.is_template,
                self._serialize(canvas),
                now,
                now
            ])
            logging.info(f"Inserted canvas {canvas.id}")
            return True
        except duckdb.IntegrityError:
            # Canvas already exists
            logging.warning(f"Canvas {canvas.id} already exists; not inserted")
            return False

    def update(self, canvas: Canvas) -> bool:
        """
        Replace a stored canvas with the given one.

        Args:
            canvas: The updated canvas

        Returns:
            True if the canvas was updated, False if it was not found
        """
        connection = self._require_connection()

        result = connection.execute("""
            UPDATE canvases
            SET team_id = ?, creator_id = ?, is_template = ?, document = ?, updated_at = ?
            WHERE id = ?
            RETURNING id
        """, [
            canvas.team_id,
            canvas.creator_id,
            canvas.is_template,
            self._serialize(canvas),
            datetime.now(),
            canvas.id
        ]).fetchone()

        if result:
            logging.info(f"Updated canvas {canvas.id}")
            return True
        logging.warning(f"Canvas {canvas.id} not found; nothing updated")
        return False

    def delete(self, canvas: Canvas) -> bool:
        """
        Delete a canvas.

        Args:
            canvas: The canvas to delete

        Returns:
            True if the canvas was deleted, False if it was not found
        """
        connection = self._require_connection()

        result = connection.execute(
            "DELETE FROM canvases WHERE id = ? RETURNING id", [canvas.id]
        ).fetchone()

        if result:
            logging.info(f"Deleted canvas {canvas.id}")
            return True
        return False

    def list_canvases(self, creator_id: str, only_templates: bool = False) -> List[Canvas]:
        """
        List canvases created by a user.

        Args:
            creator_id: The creating user
            only_templates: Only return canvases marked as templates

        Returns:
            List of canvases, oldest first
        """
        connection = self._require_connection()

        query = """
            SELECT document, inserted_at, updated_at
            FROM canvases
            WHERE creator_id = ?
        """
        if only_templates:
            query += " AND is_template = true"
        query += " ORDER BY inserted_at, id"

        results = connection.execute(query, [creator_id]).fetchall()
        return [self._row_to_canvas(row) for row in results]
