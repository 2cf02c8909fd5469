"""Tests for @font-face CSS generation."""

import logging

import pytest

from fontface.core.exceptions import (
    FileWriteError,
    FontNotFoundError,
    InvalidDescriptorError,
    ValidationError,
)
from fontface.fonts import (
    FontFaceOverrides,
    FontRegistry,
    generate_css_file,
    generate_font_css,
    sanitize_family_name,
    write_css_file,
)

ROBOTO_CSS = (
    "@font-face {\n"
    "  font-family: 'Roboto';\n"
    "  src: url('https://cdn.example.com/roboto.woff2') format('woff2');\n"
    "  font-weight: normal;\n"
    "  font-style: normal;\n"
    "  font-display: swap;\n"
    "}"
)


@pytest.fixture
def emitter_registry():
    registry = FontRegistry()
    registry.register_font("A", source="/fonts/a.ttf")
    registry.register_font("B", source="/fonts/b.otf", weight="700")
    return registry


class TestGenerateFontCSS:
    """Test single-block generation."""

    def test_block_format(self, registry):
        """Test the exact block layout."""
        assert generate_font_css(registry, "Roboto") == ROBOTO_CSS

    def test_output_is_deterministic(self, registry):
        assert generate_font_css(registry, "Roboto", {}) == generate_font_css(
            registry, "Roboto", {}
        )

    def test_descriptor_values_used(self, registry):
        css = generate_font_css(registry, "Lobster")

        assert "  font-weight: 700;\n" in css
        assert "format('truetype')" in css

    def test_overrides_win(self, registry):
        """Test per-call overrides over descriptor defaults."""
        overrides = {"fontWeight": "300", "fontStyle": "italic", "fontDisplay": "block"}
        css = generate_font_css(registry, "Lobster", overrides)

        assert "  font-weight: 300;\n" in css
        assert "  font-style: italic;\n" in css
        assert "  font-display: block;\n" in css

    def test_partial_overrides(self, registry):
        css = generate_font_css(registry, "Lobster", FontFaceOverrides(style="oblique"))

        assert "  font-weight: 700;\n" in css
        assert "  font-style: oblique;\n" in css

    def test_unknown_font_raises(self, registry):
        with pytest.raises(FontNotFoundError) as exc_info:
            generate_font_css(registry, "ghost")

        assert exc_info.value.font_name == "ghost"
        assert "ghost" in str(exc_info.value)

    def test_family_name_is_sanitized(self):
        """Test that the family is sanitized while lookups stay exact."""
        registry = FontRegistry()
        registry.register_font("My Font (Bold)!", source="/fonts/my.ttf")

        css = generate_font_css(registry, "My Font (Bold)!")

        assert "font-family: 'MyFontBold';" in css
        assert registry.get_font_info("MyFontBold") is None
        with pytest.raises(FontNotFoundError):
            generate_font_css(registry, "MyFontBold")

    def test_cjk_family_name(self, registry):
        """Test CJK handling in the family name."""
        css = generate_font_css(registry, "思源黑体", allow_cjk=True)
        assert "font-family: '思源黑体';" in css

    def test_empty_family_name_rejected(self, registry):
        """Test that a name sanitized to nothing never yields an empty family."""
        with pytest.raises(InvalidDescriptorError) as exc_info:
            generate_font_css(registry, "思源黑体")

        assert exc_info.value.font_name == "思源黑体"

    @pytest.mark.parametrize("overrides", [{"weight": ["x"]}, {"fontStyle": {"a": 1}}])
    def test_malformed_overrides(self, registry, overrides):
        with pytest.raises(ValidationError):
            generate_font_css(registry, "Roboto", overrides)


class TestSanitizeFamilyName:
    @pytest.mark.parametrize(
        ("name", "allow_cjk", "expected"),
        [
            ("Roboto-Regular_v2", False, "Roboto-Regular_v2"),
            ("Open Sans", False, "OpenSans"),
            ("a'b\"c;d{e}", False, "abcde"),
            ("Noto 思源 Sans", False, "NotoSans"),
            ("Noto 思源 Sans", True, "Noto思源Sans"),
            ("Ünïcode", True, "ncode"),
        ],
    )
    def test_sanitize(self, name, allow_cjk, expected):
        assert sanitize_family_name(name, allow_cjk) == expected


class TestGenerateCSSFile:
    """Test batch generation."""

    def test_single_name(self, registry):
        assert generate_css_file(registry, "Roboto") == ROBOTO_CSS

    def test_batch_skips_missing_fonts(self, emitter_registry, caplog):
        """Test that a missing font is logged and left out."""
        with caplog.at_level(logging.WARNING, logger="fontface.fonts.css"):
            css = generate_css_file(emitter_registry, ["A", "ghost", "B"])

        expected = "\n\n".join(
            [
                generate_font_css(emitter_registry, "A"),
                generate_font_css(emitter_registry, "B"),
            ]
        )
        assert css == expected
        assert css.count("@font-face") == 2
        assert css.index("/fonts/a.ttf") < css.index("/fonts/b.otf")
        assert "Font not found: ghost" in caplog.text

    def test_batch_output_is_trimmed(self, emitter_registry):
        css = generate_css_file(emitter_registry, ["A", "B"])

        assert css == css.strip()
        assert css.endswith("}")

    def test_batch_skips_empty_family_names(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="fontface.fonts.css"):
            css = generate_css_file(registry, ["思源黑体", "Roboto"])

        assert css == ROBOTO_CSS
        assert "font-family: ''" not in css
        assert "思源黑体" in caplog.text

    def test_all_missing_gives_empty_string(self, emitter_registry):
        assert generate_css_file(emitter_registry, ["x", "y"]) == ""

    def test_overrides_apply_to_every_block(self, emitter_registry):
        css = generate_css_file(emitter_registry, ["A", "B"], {"display": "optional"})

        assert css.count("font-display: optional;") == 2


class TestWriteCSSFile:
    """Test writing generated CSS to disk."""

    def test_write_css_file(self, tmp_path, registry):
        output = tmp_path / "fonts.css"
        output.write_text("stale content", encoding="utf-8")

        written = write_css_file(registry, ["Roboto", "思源黑体"], output)

        assert written == output
        assert output.read_text(encoding="utf-8") == generate_css_file(
            registry, ["Roboto", "思源黑体"]
        )

    def test_write_css_file_is_utf8(self, tmp_path, registry):
        output = tmp_path / "cjk.css"

        write_css_file(registry, "思源黑体", output, allow_cjk=True)

        assert "思源黑体" in output.read_bytes().decode("utf-8")

    def test_write_failure_raises(self, tmp_path, registry):
        """Test that I/O failures surface to the caller."""
        with pytest.raises(FileWriteError):
            write_css_file(registry, "Roboto", tmp_path / "missing-dir" / "fonts.css")
