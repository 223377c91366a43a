"""
PPT Studio - Layout Renderer
Renders each SlideSpec into draw primitives according to its layout variant
"""

import os
import math
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Sequence

from ppt_studio.canvas import (
    CANVAS_WIDTH,
    Border,
    Box,
    Fill,
    RenderedDocument,
    Shadow,
    ShapeFill,
    ShapeKind,
    SlideCanvas,
    SpeakerNote,
    TextBlock,
    TextRun,
)
from ppt_studio.catalogue import DEFAULT_BRANDING
from ppt_studio.models import Presentation, SlideLayout, SlideSpec
from ppt_studio.themes import PANEL_GRAY, THEME_CONFIGS, WHITE, ThemeConfig, resolve_theme

logger = logging.getLogger(__name__)

BULLET = "• "
POINTER = "▸  "
CHECK = "✓ "
SEPARATOR = " • "


@dataclass(frozen=True)
class RenderContext:
    """Everything a layout routine may read besides the slide itself"""

    theme: ThemeConfig
    index: int
    subtitle: str = ""
    branding: str = DEFAULT_BRANDING


LayoutRoutine = Callable[[SlideSpec, RenderContext], SlideCanvas]


# ============================================================================
# DRAWING HELPERS
# ============================================================================

def _shape(canvas: SlideCanvas, kind: ShapeKind, x: float, y: float, w: float, h: float,
           color: str, transparency: int = 0, border: Optional[Border] = None,
           shadow: Optional[Shadow] = None):
    canvas.add(ShapeFill(kind, Box(x, y, w, h), Fill(color, transparency), border, shadow))


def _text(canvas: SlideCanvas, text: str, x: float, y: float, w: float, h: float,
          size: int, color: str, bold: bool = False, align: str = "left",
          valign: str = "top", transparency: int = 0):
    run = TextRun(text, size, color, bold=bold, transparency=transparency)
    canvas.add(TextBlock((run,), Box(x, y, w, h), align=align, valign=valign))


def _full_rect(canvas: SlideCanvas, color: str):
    _shape(canvas, ShapeKind.RECTANGLE, 0, 0, CANVAS_WIDTH, 7.5, color)


def _header(canvas: SlideCanvas, title: str, theme: ThemeConfig, size: int = 36):
    """Primary-colored bar across the top holding the title"""
    _shape(canvas, ShapeKind.RECTANGLE, 0, 0, CANVAS_WIDTH, 0.9, theme.primary)
    _text(canvas, title, 0.6, 0.2, 8, 0.5, size, WHITE, bold=True)


def _card(canvas: SlideCanvas, text: str, x: float, y: float, w: float, h: float,
          theme: ThemeConfig, size: int, bold: bool = False, color: Optional[str] = None,
          fill: Optional[str] = None, border_width: float = 2, inset: float = 0.3):
    """Bordered box with its text inset"""
    _shape(canvas, ShapeKind.RECTANGLE, x, y, w, h, fill or theme.light,
           border=Border(theme.primary, border_width))
    _text(canvas, text, x + inset, y + 0.2, w - 2 * inset, max(h - 0.3, 0.3), size,
          color or theme.text, bold=bold)


# ============================================================================
# LAYOUT ROUTINES
# ============================================================================

def render_title(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.TITLE_SLIDE.value, theme.primary)
    _full_rect(canvas, theme.primary)

    # Decorative shapes
    _shape(canvas, ShapeKind.ELLIPSE, 6, 2, 6, 6, theme.secondary, transparency=30)
    _shape(canvas, ShapeKind.ELLIPSE, -2, -2, 4, 4, theme.accent, transparency=25)
    _shape(canvas, ShapeKind.TRIANGLE, 8.5, 5.5, 2, 2, theme.accent, transparency=40)

    _text(canvas, slide.title, 1, 2, 8, 2, 72, WHITE, bold=True, valign="middle")
    if ctx.subtitle:
        _text(canvas, ctx.subtitle, 1, 4.5, 7, 0.8, 32, WHITE)

    _shape(canvas, ShapeKind.RECTANGLE, 1, 5.4, 4, 0.15, theme.accent)

    shown = {ctx.subtitle, ctx.branding}
    tagline = [item for item in slide.content if item not in shown]
    if tagline:
        _text(canvas, SEPARATOR.join(tagline), 1, 5.7, 8, 0.5, 16, WHITE)

    _text(canvas, ctx.branding, 7, 6.5, 3, 0.4, 16, WHITE, align="right", transparency=70)
    return canvas


def render_section(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.SECTION.value, theme.dark)
    _shape(canvas, ShapeKind.ELLIPSE, 8, 2, 5, 5, theme.primary, transparency=50)
    _text(canvas, slide.title, 1, 3, 8, 1.5, 52, WHITE, bold=True, valign="middle")
    if slide.content:
        _text(canvas, SEPARATOR.join(slide.content), 1, 4.7, 7, 0.8, 20, theme.light)
    return canvas


def render_big_number(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.BIG_NUMBER.value, theme.light)
    _header(canvas, slide.title, theme, size=32)

    _shape(canvas, ShapeKind.RECTANGLE, 1.5, 2, 7, 3.2, WHITE, border=Border(theme.primary, 3))
    for i, point in enumerate(slide.content):
        _text(canvas, point, 2, 2.4 + i * 0.7, 6, 0.6, 22, theme.text, bold=i == 0)
    return canvas


def render_two_column(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.TWO_COLUMN.value, WHITE)
    _header(canvas, slide.title, theme, size=32)

    _shape(canvas, ShapeKind.RECTANGLE, 0.5, 1.5, 4.4, 4.8, theme.light)
    _shape(canvas, ShapeKind.RECTANGLE, 5.1, 1.5, 4.4, 4.8, PANEL_GRAY)

    mid = math.ceil(len(slide.content) / 2)
    for column_x, items in ((0.8, slide.content[:mid]), (5.4, slide.content[mid:])):
        for i, point in enumerate(items):
            _text(canvas, BULLET + point, column_x, 2 + i * 0.6, 3.8, 0.5, 18, theme.text)
    return canvas


def render_conclusion(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.CONCLUSION.value, theme.secondary)
    _shape(canvas, ShapeKind.ELLIPSE, 6.5, 1.5, 5, 5, theme.accent, transparency=50)
    _text(canvas, slide.title, 1, 2.5, 8, 1.2, 56, WHITE, bold=True, align="center", valign="middle")
    for i, point in enumerate(slide.content):
        _text(canvas, point, 1.5, 4.2 + i * 0.5, 7, 0.4, 20, WHITE, align="center")
    return canvas


def render_call_to_action(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.CONCLUSION_CALL_TO_ACTION.value, theme.secondary)
    _shape(canvas, ShapeKind.ELLIPSE, 6, 1, 6, 6, theme.accent, transparency=40)
    _text(canvas, slide.title, 1, 1.5, 8, 1.2, 56, WHITE, bold=True, align="center")
    for i, point in enumerate(slide.content):
        _text(canvas, point, 1.5, 3.5 + i * 0.6, 7, 0.5, 24, WHITE, align="center")
    return canvas


def render_content(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    """Default routine; unknown layouts land here"""
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.CONTENT_SLIDE.value, theme.primary)
    _full_rect(canvas, theme.primary)

    _shape(canvas, ShapeKind.TRIANGLE, 8.5, 0.5, 2, 2, theme.accent, transparency=40)
    _shape(canvas, ShapeKind.ELLIPSE, -1.5, 5, 3, 3, theme.secondary, transparency=30)

    # Frosted card
    _shape(canvas, ShapeKind.ROUNDED_RECTANGLE, 1, 0.8, 8, 5.5, WHITE, transparency=15,
           border=Border(WHITE, 3, transparency=60),
           shadow=Shadow(blur=30, opacity=0.2, offset=5, angle=90))

    _text(canvas, slide.title, 1.5, 1.2, 7, 0.8, 48, theme.text, bold=True)

    for i, point in enumerate(slide.content):
        runs = (
            TextRun(POINTER, 24, theme.accent, bold=True),
            TextRun(point, 28, theme.text),
        )
        canvas.add(TextBlock(runs, Box(1.8, 2.5 + i * 0.9, 6.5, 0.8)))

    _shape(canvas, ShapeKind.RECTANGLE, 1.5, 2.2, 4, 0.08, theme.accent)
    _text(canvas, str(ctx.index + 1), 8.5, 6.2, 1, 0.6, 24, WHITE, bold=True, align="center")
    return canvas


def render_data_visualization(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.DATA_VISUALIZATION.value, WHITE)
    _header(canvas, slide.title, theme)
    for i, point in enumerate(slide.content):
        _card(canvas, point, 0.8, 1.5 + i * 1.2, 8, 0.8, theme, 24, bold=True,
              color=theme.primary, inset=0.4)
    return canvas


def render_comparison_matrix(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.COMPARISON_MATRIX.value, WHITE)
    _header(canvas, slide.title, theme)
    for i, item in enumerate(slide.content):
        stripe = theme.light if i % 2 == 0 else PANEL_GRAY
        _card(canvas, item, 0.5, 1.2 + i * 0.8, 9, 0.7, theme, 20, fill=stripe, border_width=1)
    return canvas


def render_timeline_flow(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.TIMELINE_FLOW.value, theme.light)
    _header(canvas, slide.title, theme)

    last = len(slide.content) - 1
    for i, point in enumerate(slide.content):
        x = 0.5 + i * 2.2
        _shape(canvas, ShapeKind.ELLIPSE, x, 1.5, 0.3, 0.3, theme.accent)
        if i < last:
            _shape(canvas, ShapeKind.RECTANGLE, x + 0.3, 1.65, 1.9, 0.05, theme.accent)
        _text(canvas, point, x - 0.8, 2.2, 2.5, 1, 16, theme.text, align="center")
    return canvas


def render_executive_summary(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.EXECUTIVE_SUMMARY.value, theme.primary)
    _shape(canvas, ShapeKind.ELLIPSE, 7, 1, 4, 4, theme.secondary, transparency=30)
    _shape(canvas, ShapeKind.ELLIPSE, -1, -1, 3, 3, theme.accent, transparency=20)
    _text(canvas, slide.title, 0.7, 1, 8, 1, 48, WHITE, bold=True)
    for i, point in enumerate(slide.content):
        _text(canvas, CHECK + point, 0.7, 2.5 + i * 0.5, 7, 0.4, 24, WHITE)
    return canvas


def render_market_analysis(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.MARKET_ANALYSIS.value, WHITE)
    _header(canvas, slide.title, theme)
    for i, point in enumerate(slide.content):
        _card(canvas, point, 0.5, 1.5 + i * 0.8, 4, 0.6, theme, 18)
    return canvas


def render_financial_projection(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.FINANCIAL_PROJECTION.value, WHITE)
    _header(canvas, slide.title, theme)
    for i, point in enumerate(slide.content):
        _card(canvas, point, 0.5, 1.5 + i * 0.7, 9, 0.6, theme, 20, bold=True, color=theme.primary)
    return canvas


def render_competitive_landscape(slide: SlideSpec, ctx: RenderContext) -> SlideCanvas:
    theme = ctx.theme
    canvas = SlideCanvas(ctx.index, SlideLayout.COMPETITIVE_LANDSCAPE.value, WHITE)
    _header(canvas, slide.title, theme)
    for i, competitor in enumerate(slide.content):
        col, row = i % 2, i // 2
        _card(canvas, competitor, 0.5 + col * 4.5, 1.5 + row * 1, 4, 0.8, theme, 16, inset=0.2)
    return canvas


LAYOUT_ROUTINES: Mapping[SlideLayout, LayoutRoutine] = {
    SlideLayout.TITLE: render_title,
    SlideLayout.TITLE_SLIDE: render_title,
    SlideLayout.CONTENT: render_content,
    SlideLayout.CONTENT_SLIDE: render_content,
    SlideLayout.SECTION: render_section,
    SlideLayout.TWO_COLUMN: render_two_column,
    SlideLayout.BIG_NUMBER: render_big_number,
    SlideLayout.CONCLUSION: render_conclusion,
    SlideLayout.CONCLUSION_CALL_TO_ACTION: render_call_to_action,
    SlideLayout.QUOTE: render_call_to_action,
    SlideLayout.DATA_VISUALIZATION: render_data_visualization,
    SlideLayout.COMPARISON_MATRIX: render_comparison_matrix,
    SlideLayout.TIMELINE_FLOW: render_timeline_flow,
    SlideLayout.EXECUTIVE_SUMMARY: render_executive_summary,
    SlideLayout.MARKET_ANALYSIS: render_market_analysis,
    SlideLayout.COMPETITIVE_LANDSCAPE: render_competitive_landscape,
    SlideLayout.FINANCIAL_PROJECTION: render_financial_projection,
}

DEFAULT_ROUTINE: LayoutRoutine = render_content


# ============================================================================
# RENDERER
# ============================================================================

class LayoutRenderer:
    """Dispatches every slide of a Presentation to its layout routine"""

    def __init__(
        self,
        themes: Mapping[str, ThemeConfig] = THEME_CONFIGS,
        routines: Mapping[SlideLayout, LayoutRoutine] = LAYOUT_ROUTINES,
        branding: Optional[str] = None,
    ):
        self.themes = themes
        self.routines: Dict[SlideLayout, LayoutRoutine] = dict(routines)
        self.branding = branding or os.getenv("PPT_BRANDING", DEFAULT_BRANDING)

    def routine_for(self, layout: object) -> LayoutRoutine:
        """Routine for a layout tag; unknown tags get the content_slide routine"""
        return self.routines.get(SlideLayout.resolve(layout), DEFAULT_ROUTINE)

    def render(self, presentation: Presentation) -> RenderedDocument:
        """
        Render every slide in order

        Args:
            presentation: Normalized presentation

        Returns:
            RenderedDocument with one canvas per slide
        """
        theme = resolve_theme(presentation.theme, self.themes)
        document = RenderedDocument(
            title=presentation.title,
            subtitle=presentation.subtitle,
            theme=presentation.theme,
        )

        for index, slide in enumerate(presentation.slides):
            document.slides.append(self.render_slide(slide, theme, index, presentation.subtitle))

        logger.info(f"✅ Rendered {len(document.slides)} slides ({presentation.theme} theme)")
        return document

    def render_slide(self, slide: SlideSpec, theme: ThemeConfig, index: int, subtitle: str = "") -> SlideCanvas:
        ctx = RenderContext(theme=theme, index=index, subtitle=subtitle, branding=self.branding)
        canvas = self.routine_for(slide.layout)(slide, ctx)
        if slide.notes:
            canvas.add(SpeakerNote(slide.notes))
        return canvas


def render(presentation: Presentation) -> RenderedDocument:
    """Render with the default themes and routines"""
    return LayoutRenderer().render(presentation)


def available_layouts() -> Sequence[str]:
    return [layout.value for layout in SlideLayout]
