"""
Pytest configuration and fixtures for font registry tests.
"""

import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from fontface.fonts import FontManager, FontRegistry, HTMLDocument, StaticFontProvider


def build_test_font(chars: str) -> bytes:
    """Build a minimal TrueType font with a square glyph for each character."""
    glyph_names = {ord(ch): f"uni{ord(ch):04X}" for ch in dict.fromkeys(chars)}
    glyph_order = [".notdef", *glyph_names.values()]

    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        pen.moveTo((0, 0))
        pen.lineTo((0, 500))
        pen.lineTo((500, 500))
        pen.lineTo((500, 0))
        pen.closePath()
        glyphs[name] = pen.glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(glyph_names)
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Fontface Test", "styleName": "Regular"})
    builder.setupOS2()
    builder.setupPost()

    buffer = io.BytesIO()
    builder.save(buffer)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def test_font_bytes():
    """TrueType font covering the default load-check text and a few letters."""
    return build_test_font("BESbswyabcdefgh")


@pytest.fixture
def fonts_dir(tmp_path):
    """Font directory laid out as chinese/english category folders."""
    root = tmp_path / "fonts"
    chinese = root / "chineseFint"
    english = root / "englishFonts"
    chinese.mkdir(parents=True)
    english.mkdir(parents=True)

    (chinese / "SourceHanSans.otf").write_bytes(b"otf")
    (chinese / "NotoSerifSC.TTF").write_bytes(b"ttf")
    (english / "Roboto-Regular.ttf").write_bytes(b"ttf")
    (english / "Lobster.otf").write_bytes(b"otf")
    (english / "Inter.woff2").write_bytes(b"woff2")
    (english / "README.txt").write_text("not a font")

    return root


@pytest.fixture
def url_fonts():
    """Descriptor list in the URL-based input format."""
    return [
        {"name": "Roboto", "url": "https://cdn.example.com/roboto.woff2", "type": "english"},
        {
            "name": "Lobster",
            "url": "https://cdn.example.com/lobster.ttf",
            "type": "english",
            "weight": "700",
        },
        {"name": "思源黑体", "url": "https://cdn.example.com/siyuan.otf", "type": "chinese"},
    ]


@pytest.fixture
def registry(url_fonts):
    """Registry populated from the URL descriptor list."""
    return FontRegistry(StaticFontProvider(url_fonts))


@pytest.fixture
def html_document(tmp_path):
    """HTML document with one unrelated style element."""
    markup = (
        "<html><head><title>Fonts</title>"
        '<style id="site">body { margin: 0; }</style>'
        "</head><body><p>Hello</p></body></html>"
    )
    return HTMLDocument(markup, base_path=tmp_path)


@pytest.fixture
def local_font_manager(tmp_path, test_font_bytes, html_document):
    """Manager over a local font file, attached to an HTML document."""
    font_path = tmp_path / "assets" / "TestSans.ttf"
    font_path.parent.mkdir()
    font_path.write_bytes(test_font_bytes)

    registry = FontRegistry()
    registry.register_font("TestSans", source=str(font_path), category="english")
    registry.register_font("Broken", source=str(tmp_path / "assets" / "missing.ttf"))
    return FontManager(registry, document=html_document)
