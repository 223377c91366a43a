from __future__ import annotations

import pytest

from ppt_studio.canvas import ShapeFill, ShapeKind, SpeakerNote, TextBlock
from ppt_studio.layout_manager import (
    LAYOUT_ROUTINES,
    LayoutRenderer,
    available_layouts,
    render,
    render_content,
)
from ppt_studio.models import Presentation, SlideLayout, SlideSpec, Theme
from ppt_studio.slide_generator import normalize
from ppt_studio.themes import THEME_CONFIGS, ThemeConfig, resolve_theme

CONTENT = ("Revenue up 40%", "Churn down to 3%", "Three new markets", "Series B closed", "Hiring plan")


def _single(layout: str, content=CONTENT, notes=None, subtitle: str = "") -> Presentation:
    slide = SlideSpec(title=f"Heading for {layout}", content=tuple(content), notes=notes, layout=layout)
    return Presentation(title="Deck", subtitle=subtitle, theme="professional", slides=(slide,))


def _texts(canvas) -> list:
    return [block.text for block in canvas.text_blocks()]


def test_every_layout_has_a_routine() -> None:
    assert set(LAYOUT_ROUTINES) == set(SlideLayout)
    assert available_layouts() == [layout.value for layout in SlideLayout]


@pytest.mark.parametrize("layout", [layout.value for layout in SlideLayout])
def test_layout_shows_title_and_every_item(layout: str) -> None:
    document = render(_single(layout))
    canvas = document.slides[0]
    texts = _texts(canvas)

    assert any(f"Heading for {layout}" in text for text in texts)
    for item in CONTENT:
        assert any(item in text for text in texts), f"{item!r} missing from {layout}"


@pytest.mark.parametrize("layout", [layout.value for layout in SlideLayout])
def test_layout_handles_empty_content(layout: str) -> None:
    canvas = render(_single(layout, content=())).slides[0]
    assert any(f"Heading for {layout}" in text for text in _texts(canvas))


@pytest.mark.parametrize("tag", ["nonexistent_layout", "", "CONTENT_SLIDE ", "hero"])
def test_unknown_layout_renders_like_content_slide(tag: str) -> None:
    unknown = render(_single(tag)).slides[0]
    content = render(_single("content_slide")).slides[0]

    assert unknown.layout == SlideLayout.CONTENT_SLIDE.value
    assert unknown.background == content.background
    assert [type(p) for p in unknown.primitives] == [type(p) for p in content.primitives]
    assert [p.box for p in unknown.shapes()] == [p.box for p in content.shapes()]


def test_unknown_layout_uses_content_geometry() -> None:
    canvas = render(_single("nonexistent_layout")).slides[0]
    theme = THEME_CONFIGS["professional"]

    assert canvas.background == theme.primary
    card = [s for s in canvas.shapes() if s.kind == ShapeKind.ROUNDED_RECTANGLE]
    assert len(card) == 1
    assert card[0].shadow is not None
    assert "1" in _texts(canvas)
    assert any(text.startswith("▸") and CONTENT[0] in text for text in _texts(canvas))


def test_render_is_idempotent() -> None:
    presentation = normalize("Solar Energy", 8, "creative", "")
    renderer = LayoutRenderer()

    first = renderer.render(presentation)
    second = renderer.render(presentation)

    assert list(first.iter_primitives()) == list(second.iter_primitives())
    assert [s.background for s in first.slides] == [s.background for s in second.slides]


@pytest.mark.parametrize("theme", [theme.value for theme in Theme])
def test_known_themes_resolve(theme: str) -> None:
    config = resolve_theme(theme)
    assert config == THEME_CONFIGS[theme]
    assert all(config.to_dict().values())
    render(normalize("T", 4, theme, ""))


def test_unknown_theme_falls_back_to_professional() -> None:
    assert resolve_theme("neon") == THEME_CONFIGS["professional"]
    assert resolve_theme(None) == THEME_CONFIGS["professional"]
    assert resolve_theme("MODERN") == THEME_CONFIGS["modern"]

    document = render(Presentation(title="T", theme="neon", slides=(SlideSpec("A"),)))
    assert document.slides[0].background == THEME_CONFIGS["professional"].primary
    assert document.theme == "neon"


def test_injected_theme_table() -> None:
    custom = ThemeConfig("111111", "222222", "333333", "444444", "555555", "666666")
    renderer = LayoutRenderer(themes={"professional": custom})

    canvas = renderer.render(_single("section")).slides[0]
    assert canvas.background == custom.dark


def test_two_column_splits_items() -> None:
    canvas = render(_single("two-column")).slides[0]
    bullets = [block for block in canvas.text_blocks() if block.text.startswith("• ")]

    left = [b.text for b in bullets if b.box.x < 5]
    right = [b.text for b in bullets if b.box.x >= 5]
    assert left == ["• " + item for item in CONTENT[:3]]
    assert right == ["• " + item for item in CONTENT[3:]]


def test_timeline_connects_all_but_last_dot() -> None:
    canvas = render(_single("timeline_flow")).slides[0]
    dots = [s for s in canvas.shapes() if s.kind == ShapeKind.ELLIPSE]
    connectors = [s for s in canvas.shapes() if s.kind == ShapeKind.RECTANGLE and s.box.h == 0.05]

    assert len(dots) == len(CONTENT)
    assert len(connectors) == len(CONTENT) - 1


def test_competitive_landscape_grid() -> None:
    canvas = render(_single("competitive_landscape")).slides[0]
    boxes = {b.text: b.box for b in canvas.text_blocks() if b.text in CONTENT}

    assert boxes[CONTENT[0]].y == boxes[CONTENT[1]].y
    assert boxes[CONTENT[1]].x > boxes[CONTENT[0]].x
    assert boxes[CONTENT[2]].y > boxes[CONTENT[0]].y


def test_title_slide_shows_subtitle_tagline_and_branding() -> None:
    renderer = LayoutRenderer(branding="Made by Us")
    presentation = _single("title", content=("Sub", "Made by Us", "Fast", "Cheap"), subtitle="Sub")

    texts = _texts(renderer.render(presentation).slides[0])

    assert "Sub" in texts
    assert "Fast • Cheap" in texts
    assert "Made by Us" in texts


def test_notes_become_speaker_note() -> None:
    canvas = render(_single("content", notes="Say this")).slides[0]
    assert canvas.notes() == [SpeakerNote("Say this")]

    canvas = render(_single("content")).slides[0]
    assert canvas.notes() == []


def test_slide_number_follows_index() -> None:
    presentation = normalize("Numbers", 4, "professional", "")
    renderer = LayoutRenderer()
    theme = THEME_CONFIGS["professional"]

    canvas = renderer.render_slide(SlideSpec("Any", ("x",)), theme, index=6)
    assert "7" in _texts(canvas)
    assert len(renderer.render(presentation).slides) == 4


def test_custom_routine_table() -> None:
    def only_title(slide, ctx):
        canvas = render_content(slide, ctx)
        canvas.primitives[:] = [p for p in canvas.primitives if isinstance(p, TextBlock)][:1]
        return canvas

    renderer = LayoutRenderer(routines={SlideLayout.SECTION: only_title})
    section = renderer.render(_single("section")).slides[0]
    other = renderer.render(_single("big-number")).slides[0]

    assert len(section.primitives) == 1
    assert any(isinstance(p, ShapeFill) for p in other.primitives)


def test_theme_enum_member_resolves_its_palette() -> None:
    assert resolve_theme(Theme.MODERN) == THEME_CONFIGS["modern"]

    presentation = normalize("Solar Energy", 3, Theme.MODERN, "")
    document = render(presentation)
    assert document.theme == "modern"
    assert document.slides[0].background == THEME_CONFIGS["modern"].primary


def test_big_number_bolds_only_first_line() -> None:
    canvas = render(_single("big-number")).slides[0]
    lines = [b for b in canvas.text_blocks() if b.text in CONTENT]

    assert [b.runs[0].bold for b in lines] == [True, False, False, False, False]
    assert all(b.runs[0].font_size == 22 for b in lines)


def test_comparison_matrix_rows_alternate() -> None:
    theme = THEME_CONFIGS["professional"]
    canvas = render(_single("comparison_matrix")).slides[0]
    rows = [s for s in canvas.shapes() if s.border is not None]

    assert [r.fill.color for r in rows] == [theme.light, "F9FAFB", theme.light, "F9FAFB", theme.light]
    assert all(r.border.color == theme.primary and r.border.width == 1 for r in rows)
    assert all(r.box.w == 9 for r in rows)


@pytest.mark.parametrize("layout", ["data_visualization", "financial_projection"])
def test_metric_cards_are_bold_primary(layout: str) -> None:
    theme = THEME_CONFIGS["professional"]
    canvas = render(_single(layout)).slides[0]
    cards = [b for b in canvas.text_blocks() if b.text in CONTENT]

    assert len(cards) == len(CONTENT)
    assert all(b.runs[0].bold and b.runs[0].color == theme.primary for b in cards)


def test_market_analysis_cards_are_narrower_than_financial() -> None:
    market = render(_single("market_analysis")).slides[0]
    financial = render(_single("financial_projection")).slides[0]

    assert {s.box.w for s in market.shapes() if s.border is not None} == {4}
    assert {s.box.w for s in financial.shapes() if s.border is not None} == {9}
    assert all(b.runs[0].color == THEME_CONFIGS["professional"].text
               for b in market.text_blocks() if b.text in CONTENT)


def test_conclusion_and_call_to_action_geometry_differ() -> None:
    conclusion = render(_single("conclusion")).slides[0]
    call_to_action = render(_single("conclusion_call_to_action")).slides[0]
    quote = render(_single("quote")).slides[0]

    def item_boxes(canvas):
        return [b.box for b in canvas.text_blocks() if b.text in CONTENT]

    assert conclusion.shapes()[0].box != call_to_action.shapes()[0].box
    assert item_boxes(conclusion)[0].y == 4.2
    assert item_boxes(call_to_action)[0].y == 3.5
    assert item_boxes(call_to_action) == item_boxes(quote)
    assert all(b.runs[0].font_size == 20 for b in conclusion.text_blocks() if b.text in CONTENT)
    assert all(b.runs[0].font_size == 24 for b in call_to_action.text_blocks() if b.text in CONTENT)
