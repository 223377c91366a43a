"""
PPT Generator Module
Writes a RenderedDocument to a PowerPoint file using python-pptx
"""

from pptx import Presentation
from pptx.util import Inches, Pt, Emu
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR, MSO_AUTO_SIZE
from pptx.enum.shapes import MSO_SHAPE
from pptx.oxml.ns import qn
from pptx.oxml import parse_xml
from lxml import etree
from typing import Optional
import logging
import io
import os

from ppt_studio.canvas import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    RenderedDocument,
    Shadow,
    ShapeFill,
    ShapeKind,
    SlideCanvas,
    SpeakerNote,
    TextBlock,
)

logger = logging.getLogger(__name__)

SHAPE_TYPES = {
    ShapeKind.RECTANGLE: MSO_SHAPE.RECTANGLE,
    ShapeKind.ROUNDED_RECTANGLE: MSO_SHAPE.ROUNDED_RECTANGLE,
    ShapeKind.ELLIPSE: MSO_SHAPE.OVAL,
    ShapeKind.TRIANGLE: MSO_SHAPE.ISOSCELES_TRIANGLE,
}

ALIGNMENTS = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
}

ANCHORS = {
    "top": MSO_ANCHOR.TOP,
    "middle": MSO_ANCHOR.MIDDLE,
    "bottom": MSO_ANCHOR.BOTTOM,
}

WIDESCREEN_WIDTH = Inches(13.333)
BLANK_LAYOUT = 6
MIN_FONT_SCALE = 70  # percent
MAX_LINE_SPACING_REDUCTION = 20  # percent


class PPTGenerator:
    """Serializes rendered slides into a .pptx document"""

    def __init__(self, author: str = "PPT Studio", widescreen: bool = True):
        self.author = author
        self.widescreen = widescreen
        self.default_font = "Calibri"
        self.slide_width = WIDESCREEN_WIDTH if widescreen else Inches(CANVAS_WIDTH)
        self.slide_height = Inches(CANVAS_HEIGHT)

    def _set_color_alpha(self, color_parent, transparency_percent):
        """Add an <a:alpha> to the srgbClr under color_parent (0 = opaque, 100 = invisible)"""
        if color_parent is None or not transparency_percent:
            return
        try:
            color_elem = color_parent.find(qn('a:srgbClr'))
            if color_elem is None:
                color_elem = color_parent.find(qn('a:schemeClr'))
            if color_elem is None:
                return

            existing_alpha = color_elem.find(qn('a:alpha'))
            if existing_alpha is not None:
                color_elem.remove(existing_alpha)

            # Value is in 1000ths of a percent: 25% transparency = 75000
            alpha_value = int((100 - transparency_percent) * 1000)
            alpha_elem = etree.SubElement(color_elem, qn('a:alpha'))
            alpha_elem.set('val', str(alpha_value))
        except Exception as e:
            logger.warning(f"   ⚠️ Could not set transparency: {e}")

    def _set_shape_transparency(self, shape, transparency_percent):
        """Set transparency on a shape's solid fill"""
        spPr = shape._element.spPr
        self._set_color_alpha(spPr.find(qn('a:solidFill')), transparency_percent)

    def _set_line_transparency(self, shape, transparency_percent):
        ln = shape._element.spPr.find(qn('a:ln'))
        if ln is not None:
            self._set_color_alpha(ln.find(qn('a:solidFill')), transparency_percent)

    def _apply_shadow(self, shape, shadow: Shadow):
        """Outer shadow via DrawingML effectLst"""
        try:
            spPr = shape._element.spPr
            existing = spPr.find(qn('a:effectLst'))
            if existing is not None:
                spPr.remove(existing)

            effect_xml = (
                '<a:effectLst xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main">'
                f'<a:outerShdw blurRad="{Pt(shadow.blur)}" dist="{Pt(shadow.offset)}" '
                f'dir="{int(shadow.angle * 60000)}" algn="t" rotWithShape="0">'
                f'<a:srgbClr val="000000"><a:alpha val="{int(shadow.opacity * 100000)}"/></a:srgbClr>'
                '</a:outerShdw></a:effectLst>'
            )
            spPr.append(parse_xml(effect_xml))
        except Exception as e:
            logger.warning(f"   ⚠️ Could not apply shadow: {e}")

    def _shrink_on_overflow(self, text_frame):
        """Let PowerPoint shrink text that overflows its box, down to MIN_FONT_SCALE"""
        text_frame.auto_size = MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE
        norm_autofit = text_frame._bodyPr.find(qn('a:normAutofit'))
        if norm_autofit is None:
            logger.warning("   ⚠️ Shrink-on-overflow not written for text block")
            return
        # Units are 1000ths of a percent
        norm_autofit.set('fontScale', str(MIN_FONT_SCALE * 1000))
        norm_autofit.set('lnSpcReduction', str(MAX_LINE_SPACING_REDUCTION * 1000))

    # ========================================================================
    # GEOMETRY
    # ========================================================================

    def _geometry(self, box):
        """Canvas units to EMU; boxes spanning the canvas width span the slide width"""
        if box.spans_width:
            return Emu(0), Inches(box.y), self.slide_width, Inches(box.h)
        return Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h)

    # ========================================================================
    # DOCUMENT SURFACE
    # ========================================================================

    def create_document(self, document: RenderedDocument):
        prs = Presentation()
        prs.slide_width = self.slide_width
        prs.slide_height = self.slide_height

        props = prs.core_properties
        props.author = self.author
        props.title = document.title
        props.subject = document.title
        props.comments = document.subtitle
        return prs

    def add_slide(self, prs):
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])

        # Remove any placeholder shapes (like "Click to add title")
        for shape in list(slide.shapes):
            if shape.is_placeholder:
                sp = shape._element
                sp.getparent().remove(sp)
        return slide

    def set_background(self, slide, color: str):
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(color)

    def add_shape(self, slide, primitive: ShapeFill):
        left, top, width, height = self._geometry(primitive.box)
        shape = slide.shapes.add_shape(SHAPE_TYPES[primitive.kind], left, top, width, height)

        if primitive.kind == ShapeKind.ROUNDED_RECTANGLE:
            shape.adjustments[0] = 0.05

        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor.from_string(primitive.fill.color)
        self._set_shape_transparency(shape, primitive.fill.transparency)

        if primitive.border:
            shape.line.color.rgb = RGBColor.from_string(primitive.border.color)
            shape.line.width = Pt(primitive.border.width)
            self._set_line_transparency(shape, primitive.border.transparency)
        else:
            shape.line.fill.background()

        if primitive.shadow:
            self._apply_shadow(shape, primitive.shadow)
        return shape

    def add_text(self, slide, block: TextBlock):
        left, top, width, height = self._geometry(block.box)
        textbox = slide.shapes.add_textbox(left, top, width, height)
        tf = textbox.text_frame
        tf.word_wrap = True
        tf.vertical_anchor = ANCHORS.get(block.valign, MSO_ANCHOR.TOP)

        p = tf.paragraphs[0]
        p.alignment = ALIGNMENTS.get(block.align, PP_ALIGN.LEFT)
        for text_run in block.runs:
            run = p.add_run()
            run.text = text_run.text
            run.font.name = self.default_font
            run.font.size = Pt(text_run.font_size)
            run.font.bold = text_run.bold
            run.font.color.rgb = RGBColor.from_string(text_run.color)
            if text_run.transparency:
                self._set_color_alpha(run._r.find(qn('a:rPr')).find(qn('a:solidFill')),
                                      text_run.transparency)

        self._shrink_on_overflow(tf)
        return textbox

    def add_notes(self, slide, note: SpeakerNote):
        slide.notes_slide.notes_text_frame.text = note.text

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def build(self, document: RenderedDocument):
        """Replay every canvas onto a new python-pptx Presentation"""
        prs = self.create_document(document)
        for canvas in document.slides:
            self._write_slide(prs, canvas)

        logger.info(f"   📊 Wrote {len(prs.slides)} slides")
        return prs

    def _write_slide(self, prs, canvas: SlideCanvas):
        slide = self.add_slide(prs)
        self.set_background(slide, canvas.background)
        for primitive in canvas.primitives:
            if isinstance(primitive, ShapeFill):
                self.add_shape(slide, primitive)
            elif isinstance(primitive, TextBlock):
                self.add_text(slide, primitive)
            elif isinstance(primitive, SpeakerNote):
                self.add_notes(slide, primitive)
        return slide

    def to_bytes(self, document: RenderedDocument) -> bytes:
        buffer = io.BytesIO()
        self.build(document).save(buffer)
        return buffer.getvalue()

    def generate_ppt(self, document: RenderedDocument, output_path: str, author: Optional[str] = None) -> str:
        """
        Generate PowerPoint file from a rendered document

        Args:
            document: Output of LayoutRenderer.render
            output_path: Path to save the PPT
            author: Optional author override for the core properties

        Returns:
            Path to the generated PPT file
        """
        if author:
            self.author = author

        prs = self.build(document)
        prs.save(output_path)

        if os.path.exists(output_path):
            file_size = os.path.getsize(output_path)
            logger.info(f"   ✅ PPT saved successfully ({file_size:,} bytes)")

        return output_path
