"""Unit tests for character flyweights and TextDocument."""

import pytest

from flyx import InvalidKeyError
from flyx.domains import CharacterKey, Position, TextDocument
from tests.test_factories import create_hello_document


@pytest.mark.unit
class TestTextDocument:
    """Documents share glyph flyweights between repeated characters."""

    def test_hello_shares_flyweights(self, characters):
        """Five characters use four flyweights; both l's share one."""
        document = create_hello_document(characters)

        assert document.character_count() == 5
        assert document.flyweight_count() == 4
        placed = document.characters
        assert placed[2].flyweight is placed[3].flyweight
        assert placed[0].flyweight is not placed[1].flyweight

    def test_render(self, characters):
        """Rendering combines intrinsic glyph and extrinsic placement."""
        rendered = create_hello_document(characters).render()

        assert len(rendered) == 5
        assert rendered[0] == "Character 'H' at (0, 0) with font: Arial bold 12px black"
        assert rendered[4] == "Character 'o' at (40, 0) with font: Arial normal 12px black"

    def test_extrinsic_state_differs_per_instance(self, characters):
        """Shared glyphs keep their own position, size and color."""
        document = TextDocument(characters)
        a = document.add_character("x", "Mono", "italic", Position(0, 0), 10, "red")
        b = document.add_character("x", "Mono", "italic", Position(5, 7), 14, "blue")

        assert a.flyweight is b.flyweight
        assert a.render() != b.render()
        assert "(5, 7)" in b.render()
        assert "14px blue" in b.render()

    def test_memory_footprint(self, characters):
        """The footprint summarises instances against flyweights."""
        footprint = create_hello_document(characters).memory_footprint()

        assert footprint == (
            "Total characters: 5, Unique flyweights: 4, Memory saved: 1 objects"
        )

    def test_report(self, characters):
        """report() exposes the same accounting as numbers."""
        report = create_hello_document(characters).report()

        assert (report.instances, report.flyweights, report.saved) == (5, 4, 1)

    def test_add_text_lays_out_one_line(self, characters):
        """add_text advances the x position per character."""
        document = TextDocument(characters)
        placed = document.add_text("aaa", "Arial", "normal", Position(100, 5), 12, "black")

        assert [p.position for p in placed] == [
            Position(100, 5),
            Position(110, 5),
            Position(120, 5),
        ]
        assert document.flyweight_count() == 1

    def test_multi_character_rejected(self, characters):
        """A CharacterKey holds exactly one character."""
        document = TextDocument(characters)

        with pytest.raises(InvalidKeyError, match="single character"):
            document.add_character("ab", "Arial", "normal", Position(0, 0), 12, "black")

        assert document.character_count() == 0

    def test_empty_font_rejected(self, characters):
        """Empty intrinsic fields are invalid keys."""
        with pytest.raises(InvalidKeyError, match="font_style"):
            characters.get_or_create(CharacterKey("a", "Arial", ""))

    def test_flyweight_is_read_only(self, characters):
        """Flyweight attributes cannot be reassigned."""
        glyph = characters.get_or_create(CharacterKey("a", "Arial", "normal"))

        with pytest.raises(AttributeError):
            glyph.character = "b"
        with pytest.raises(AttributeError):
            glyph.extra = 1

    def test_non_string_character_rejected(self, characters):
        """A non-string character is an invalid key, not a TypeError."""
        with pytest.raises(InvalidKeyError, match="single character"):
            characters.get_or_create(CharacterKey(5, "Arial", "normal"))

        assert characters.count() == 0
