"""
Unit tests for core canvasapi components.

Tests configuration management, data models and database operations.
"""

import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from canvasapi.config import ConfigManager
from canvasapi.database import DatabaseManager
from canvasapi.models import Block, Canvas


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "canvas.db")
        self.assertEqual(config.summary_length, 140)
        self.assertEqual(config.native_version, "1.0.0")
        self.assertIsNone(config.global_template_source_id)

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
database:
  filename: "test.db"

templates:
  global_source_id: "template-user"

web:
  base_url: "https://canvas.example.com"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "test.db")
        self.assertEqual(config.global_template_source_id, "template-user")
        self.assertEqual(config.web_base_url, "https://canvas.example.com")
        # Keys missing from the file use property defaults
        self.assertEqual(config.summary_length, 140)

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertEqual(config.get("canvas.type"), "http://sharejs.org/types/JSONv0")
        self.assertEqual(config.get("notifications.create_delay"), 300)
        self.assertEqual(config.get("nonexistent.key", "default"), "default")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("canvas:\n  summary_length: 80")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.summary_length, 80)

        with open(self.config_path, 'w') as f:
            f.write("canvas:\n  summary_length: 60")

        config.reload()
        self.assertEqual(config.summary_length, 60)


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_block_creation(self):
        """Test Block model creation assigns an ID."""
        block = Block(type="paragraph", content="Test content")

        self.assertEqual(block.type, "paragraph")
        self.assertEqual(block.content, "Test content")
        self.assertEqual(len(block.id), 22)
        self.assertEqual(block.blocks, [])
        self.assertEqual(block.meta, {})

    def test_block_ids_are_unique(self):
        """Test that freshly created blocks get distinct IDs."""
        ids = {Block(type="paragraph").id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_block_none_content_is_empty(self):
        """Test that a missing content value becomes an empty string."""
        block = Block(type="paragraph", content=None)
        self.assertEqual(block.content, "")

    def test_block_identity_is_by_id(self):
        """Test that blocks compare by ID, not content."""
        first = Block(type="paragraph", content="same")
        second = Block(type="paragraph", content="same")
        copy = Block(id=first.id, type="heading", content="different")

        self.assertNotEqual(first, second)
        self.assertEqual(first, copy)
        self.assertEqual(len({first, second, copy}), 2)

    def test_block_id_is_immutable(self):
        """Test that a block's ID cannot be reassigned."""
        block = Block(type="paragraph")
        with self.assertRaises(ValidationError):
            block.id = "another-id"

    def test_block_content_is_mutable(self):
        """Test that content and children may change in place."""
        block = Block(type="list")
        block.content = "changed"
        block.blocks.append(Block(type="unordered-list-item"))

        self.assertEqual(block.content, "changed")
        self.assertEqual(len(block.blocks), 1)

    def test_to_template_params_strips_ids(self):
        """Test template params keep types and content but drop IDs."""
        block = Block(type="list", blocks=[
            Block(type="checklist-item", content="Buy milk", meta={"level": 1, "checked": True})
        ])

        params = block.to_template_params()

        self.assertEqual(params, {
            "type": "list",
            "content": "",
            "meta": {},
            "blocks": [{
                "type": "checklist-item",
                "content": "Buy milk",
                "meta": {"level": 1, "checked": True},
                "blocks": []
            }]
        })

    def test_canvas_defaults(self):
        """Test Canvas model defaults."""
        canvas = Canvas()

        self.assertFalse(canvas.is_template)
        self.assertEqual(canvas.link_access, "none")
        self.assertEqual(canvas.version, 0)
        self.assertEqual(canvas.slack_channel_ids, [])
        self.assertIsNone(canvas.template_id)

    def test_canvas_rejects_unknown_link_access(self):
        """Test Canvas model only accepts none/read/edit link access."""
        with self.assertRaises(ValidationError):
            Canvas(link_access="public")

    def test_canvas_document_shape(self):
        """Test the JSON document uses camelCase keys."""
        canvas = Canvas(team_id="T1", creator_id="U1", blocks=[Block(type="title", content="Hi")])

        document = canvas.to_document()

        for key in ("id", "isTemplate", "linkAccess", "nativeVersion", "type", "version",
                    "slackChannelIds", "editedAt", "blocks", "creatorId", "teamId", "templateId"):
            self.assertIn(key, document)
        self.assertEqual(document["blocks"][0]["content"], "Hi")

    def test_canvas_accepts_camel_case_input(self):
        """Test Canvas can be read back from its document shape."""
        canvas = Canvas.model_validate({"teamId": "T1", "linkAccess": "read", "isTemplate": True})

        self.assertEqual(canvas.team_id, "T1")
        self.assertEqual(canvas.link_access, "read")
        self.assertTrue(canvas.is_template)


class TestDatabaseManager(unittest.TestCase):
    """Test database management functionality."""

    def setUp(self):
        """Set up test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "test.db"

    def tearDown(self):
        """Clean up test database."""
        for path in Path(self.temp_dir).iterdir():
            path.unlink()
        os.rmdir(self.temp_dir)

    def _canvas(self, **attributes) -> Canvas:
        defaults = {
            "team_id": "T1",
            "creator_id": "U1",
            "blocks": [
                Block(type="title", content="Stored"),
                Block(type="list", blocks=[Block(type="unordered-list-item", content="item")])
            ]
        }
        defaults.update(attributes)
        return Canvas(**defaults)

    def test_database_initialization(self):
        """Test database creation and table initialization."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()

            self.assertTrue(self.db_path.exists())
            self.assertIsNotNone(db.connection)

    def test_operations_require_connection(self):
        """Test that using the manager before connecting fails loudly."""
        db = DatabaseManager(str(self.db_path))
        with self.assertRaises(RuntimeError):
            db.get("anything")

    def test_canvas_insert_and_get(self):
        """Test storing and retrieving a canvas."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            canvas = self._canvas()

            self.assertTrue(db.insert(canvas))

            retrieved = db.get(canvas.id)
            self.assertIsNotNone(retrieved)
            if retrieved:  # Type guard for linter
                self.assertEqual(retrieved.id, canvas.id)
                self.assertEqual(retrieved.title(), "Stored")
                self.assertEqual(retrieved.blocks[1].blocks[0].id, canvas.blocks[1].blocks[0].id)
                self.assertIsNotNone(retrieved.inserted_at)
                self.assertIsNotNone(retrieved.updated_at)

    def test_duplicate_insert(self):
        """Test inserting the same canvas twice."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            canvas = self._canvas()

            self.assertTrue(db.insert(canvas))
            self.assertFalse(db.insert(canvas))

    def test_get_with_team_constraint(self):
        """Test that a team constraint hides other teams' canvases."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            canvas = self._canvas()
            db.insert(canvas)

            self.assertIsNotNone(db.get(canvas.id, team_id="T1"))
            self.assertIsNone(db.get(canvas.id, team_id="T2"))
            self.assertIsNone(db.get("missing"))

    def test_canvas_update(self):
        """Test replacing a stored canvas."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            canvas = self._canvas()
            db.insert(canvas)

            updated = canvas.model_copy(update={"is_template": True, "link_access": "edit"})
            self.assertTrue(db.update(updated))

            retrieved = db.get(canvas.id)
            if retrieved:  # Type guard for linter
                self.assertTrue(retrieved.is_template)
                self.assertEqual(retrieved.link_access, "edit")

            self.assertFalse(db.update(self._canvas()))

    def test_canvas_delete(self):
        """Test deleting a canvas."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            canvas = self._canvas()
            db.insert(canvas)

            self.assertTrue(db.delete(canvas))
            self.assertIsNone(db.get(canvas.id))
            self.assertFalse(db.delete(canvas))

    def test_list_canvases(self):
        """Test listing canvases by creator, optionally only templates."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            plain = self._canvas()
            template = self._canvas(is_template=True)
            other = self._canvas(creator_id="U2")
            for canvas in (plain, template, other):
                db.insert(canvas)

            all_ids = {canvas.id for canvas in db.list_canvases("U1")}
            template_ids = [canvas.id for canvas in db.list_canvases("U1", only_templates=True)]

            self.assertEqual(all_ids, {plain.id, template.id})
            self.assertEqual(template_ids, [template.id])


if __name__ == '__main__':
    # Run all tests
    unittest.main(verbosity=2)
