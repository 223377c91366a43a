from __future__ import annotations

import io
from pathlib import Path

from pptx import Presentation as PptxPresentation
from pptx.enum.text import MSO_AUTO_SIZE
from pptx.oxml.ns import qn
from pptx.util import Inches

from ppt_generator import PPTGenerator
from ppt_studio.layout_manager import render
from ppt_studio.models import Presentation, SlideSpec
from ppt_studio.ppt_analyzer import PPTAnalyzer
from ppt_studio.slide_generator import normalize


def _deck() -> Presentation:
    return Presentation(
        title="Quarterly Review",
        subtitle="Q3 results",
        theme="modern",
        slides=(
            SlideSpec("Quarterly Review", ("Q3 results", "Board meeting"), "Open with the headline", "title_slide"),
            SlideSpec("Highlights", ("Revenue +12%", "Margin 31%"), None, "executive_summary"),
            SlideSpec("Timeline", ("Plan", "Build", "Ship"), "Walk left to right", "timeline_flow"),
            SlideSpec("Thanks", ("Questions?",), "Wrap up", "conclusion"),
        ),
    )


def test_serialized_deck_round_trips_through_python_pptx() -> None:
    presentation = _deck()
    data = PPTGenerator().to_bytes(render(presentation))

    prs = PptxPresentation(io.BytesIO(data))

    assert len(prs.slides) == len(presentation.slides)
    assert prs.slide_width == Inches(13.333)
    assert prs.slide_height == Inches(7.5)
    assert prs.core_properties.title == "Quarterly Review"
    assert prs.core_properties.author == "PPT Studio"


def test_notes_are_written_per_slide() -> None:
    presentation = _deck()
    prs = PptxPresentation(io.BytesIO(PPTGenerator().to_bytes(render(presentation))))

    for slide, spec in zip(prs.slides, presentation.slides):
        if spec.notes:
            assert slide.notes_slide.notes_text_frame.text == spec.notes
        else:
            assert not slide.has_notes_slide


def test_standard_width_when_not_widescreen() -> None:
    prs = PptxPresentation(io.BytesIO(PPTGenerator(widescreen=False).to_bytes(render(_deck()))))
    assert prs.slide_width == Inches(10)


def test_full_width_shapes_are_stretched() -> None:
    prs = PptxPresentation(io.BytesIO(PPTGenerator().to_bytes(render(_deck()))))
    title_slide = prs.slides[0]

    widths = [shape.width for shape in title_slide.shapes]
    assert Inches(13.333) in widths


def test_generate_ppt_writes_file(tmp_path: Path) -> None:
    output = tmp_path / "deck.pptx"
    document = render(normalize("Solar Energy", 6, "creative", ""))

    result = PPTGenerator().generate_ppt(document, str(output), author="Analyst")

    assert result == str(output)
    assert output.exists()
    prs = PptxPresentation(str(output))
    assert len(prs.slides) == 6
    assert prs.core_properties.author == "Analyst"


def test_analyzer_reads_texts_and_notes(tmp_path: Path) -> None:
    output = tmp_path / "deck.pptx"
    PPTGenerator().generate_ppt(render(_deck()), str(output))

    analyzer = PPTAnalyzer()
    assert analyzer.load(str(output))
    summary = analyzer.summarize()

    assert summary["slide_count"] == 4
    assert summary["title"] == "Quarterly Review"
    assert any("Revenue +12%" in text for text in summary["slides"][1]["texts"])
    assert summary["slides"][2]["notes"] == "Walk left to right"

    html = analyzer.generate_html_preview()
    assert "<h1>Quarterly Review</h1>" in html
    assert "Slide 4" in html


def test_analyzer_rejects_missing_and_corrupt_input(tmp_path: Path) -> None:
    analyzer = PPTAnalyzer()

    assert not analyzer.load(str(tmp_path / "missing.pptx"))
    assert not analyzer.load(b"not a zip file")
    assert analyzer.summarize() == {}


def test_text_boxes_shrink_on_overflow() -> None:
    prs = PptxPresentation(io.BytesIO(PPTGenerator().to_bytes(render(_deck()))))

    text_frames = [shape.text_frame for shape in prs.slides[1].shapes
                   if shape.has_text_frame and shape.text_frame.text]
    assert text_frames
    for text_frame in text_frames:
        assert text_frame.auto_size == MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE
        norm_autofit = text_frame._bodyPr.find(qn("a:normAutofit"))
        assert norm_autofit.get("fontScale") == "70000"
        assert norm_autofit.get("lnSpcReduction") == "20000"
