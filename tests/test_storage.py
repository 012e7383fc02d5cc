"""Tests for markdown note storage and frontmatter handling."""

import time

from hashy_ai import storage
from hashy_ai.storage import NoteFrontmatter


class TestFrontmatter:
    def test_parse(self):
        fm = storage.parse_frontmatter("---\nicon: 🛒\ntitle: Groceries\ntags:\n- home\n---\n\nbody")

        assert fm == NoteFrontmatter(icon="🛒", title="Groceries", tags=["home"])

    def test_parse_without_block(self):
        assert storage.parse_frontmatter("just text") is None

    def test_parse_malformed_yaml(self):
        assert storage.parse_frontmatter("---\ntitle: [unclosed\n---\nbody") is None

    def test_body(self):
        assert storage.note_body("---\ntitle: A\n---\n\nLine 1\nLine 2") == "Line 1\nLine 2"
        assert storage.note_body("no frontmatter") == "no frontmatter"

    def test_update_roundtrip_keeps_body(self):
        content = storage.update_frontmatter(NoteFrontmatter(title="A", tags=["x"]), "Hello\n")

        assert content.startswith("---\ntitle: A\n")
        assert storage.note_body(content) == "Hello\n"
        assert storage.parse_frontmatter(content) == NoteFrontmatter(title="A", tags=["x"])

    def test_update_replaces_existing_block(self):
        original = "---\ntitle: Old\n---\n\nBody"
        updated = storage.update_frontmatter(NoteFrontmatter(title="New"), original)

        assert updated.count("---") == 2
        assert storage.parse_frontmatter(updated).title == "New"
        assert storage.note_body(updated) == "Body"

    def test_empty_frontmatter_is_not_written(self):
        assert storage.update_frontmatter(NoteFrontmatter(), "---\ntitle: A\n---\n\nBody") == "Body"

    def test_unicode_is_kept_readable(self):
        content = storage.update_frontmatter(NoteFrontmatter(icon="📝", title="Café"), "")
        assert "📝" in content
        assert "Café" in content


class TestNoteIds:
    def test_shape(self):
        note_id = storage.new_note_id()

        assert len(note_id) == 26
        assert set(note_id) <= set("0123456789ABCDEFGHJKMNPQRSTVWXYZ")

    def test_ordered_by_time(self):
        first = storage.new_note_id()
        time.sleep(0.002)
        second = storage.new_note_id()

        assert first < second


class TestNoteFiles:
    def test_scan_reads_metadata_newest_first(self, notes_dir):
        notes = storage.scan_notes(notes_dir)

        assert [n.name for n in notes] == [
            "scratch",
            "01BBBBBBBBBBBBBBBBBBBBBBBB",
            "01AAAAAAAAAAAAAAAAAAAAAAAA",
        ]
        groceries = notes[2]
        assert groceries.title == "Groceries"
        assert groceries.icon == "🛒"
        assert groceries.tags == ("shopping", "home")
        # Title falls back to the filename
        assert notes[0].title == "scratch"

    def test_scan_ignores_other_files(self, notes_dir):
        (notes_dir / "image.png").write_bytes(b"\x89PNG")
        (notes_dir / "folder.md").mkdir()

        assert len(storage.scan_notes(notes_dir)) == 3

    def test_create_load_save_delete(self, tmp_path):
        path = storage.create_note(tmp_path, "Ideas", content="- one", icon="💡", tags=["misc"])
        note = storage.scan_notes(tmp_path)[0]

        assert note.path == path
        assert note.title == "Ideas"
        assert storage.note_body(storage.load_content(note)) == "- one"

        storage.save_content("plain", note)
        assert storage.load_content(note) == "plain"

        storage.delete_note(note)
        assert not path.exists()
