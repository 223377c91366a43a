import io
import os
import html
import logging
from typing import Any, Dict, List, Union

from pptx import Presentation

logger = logging.getLogger(__name__)


class PPTAnalyzer:
    """Reads a generated deck back: slide size, texts and speaker notes"""

    def __init__(self):
        self.source = None
        self.presentation = None

    def load(self, source: Union[str, bytes]) -> bool:
        """Load a deck from a path or from serialized bytes"""
        try:
            if isinstance(source, (bytes, bytearray)):
                self.presentation = Presentation(io.BytesIO(source))
                self.source = "<bytes>"
            else:
                if not os.path.exists(source):
                    logger.error(f"Deck file not found: {source}")
                    return False
                self.presentation = Presentation(source)
                self.source = source

            logger.info(f"✅ Deck loaded: {self.source} ({len(self.presentation.slides)} slides)")
            return True

        except Exception as e:
            logger.error(f"❌ Error loading deck: {str(e)}")
            self.presentation = None
            return False

    def _slide_texts(self, slide) -> List[str]:
        texts = []
        for shape in slide.shapes:
            if shape.has_text_frame and shape.text_frame.text.strip():
                texts.append(shape.text_frame.text)
        return texts

    def _slide_notes(self, slide) -> str:
        if not slide.has_notes_slide:
            return ""
        return slide.notes_slide.notes_text_frame.text

    def summarize(self) -> Dict[str, Any]:
        """Per-slide texts and notes plus deck-level properties"""
        if self.presentation is None:
            return {}

        prs = self.presentation
        slides = []
        for idx, slide in enumerate(prs.slides, 1):
            slides.append({
                "number": idx,
                "texts": self._slide_texts(slide),
                "notes": self._slide_notes(slide),
                "shape_count": len(slide.shapes),
            })

        return {
            "title": prs.core_properties.title,
            "author": prs.core_properties.author,
            "slide_width": prs.slide_width,
            "slide_height": prs.slide_height,
            "slide_count": len(slides),
            "slides": slides,
        }

    def generate_html_preview(self) -> str:
        summary = self.summarize()
        parts = ['<html><head><style>body{font-family:sans-serif;padding:2rem;} '
                 '.slide{border:1px solid #ccc; padding:1rem; margin-bottom:1rem; border-radius:5px;} '
                 '.notes{color:#666; font-style:italic;}</style></head><body>']
        parts.append(f"<h1>{html.escape(summary.get('title') or 'Presentation')}</h1>")
        for slide in summary.get("slides", []):
            parts.append(f'<div class="slide"><h2>Slide {slide["number"]}</h2>')
            for text in slide["texts"]:
                parts.append(f"<p>{html.escape(text)}</p>")
            if slide["notes"]:
                parts.append(f'<p class="notes">{html.escape(slide["notes"])}</p>')
            parts.append('</div>')
        parts.append('</body></html>')
        return "".join(parts)
