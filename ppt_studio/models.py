"""
PPT Studio - Data Model
Semantic slide content shared by the normalizer, the renderer and the app
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ppt_studio.errors import PresentationDataError


class SlideLayout(str, Enum):
    """Closed set of layout variants a slide can ask for"""

    TITLE = "title"
    CONTENT = "content"
    SECTION = "section"
    TWO_COLUMN = "two-column"
    BIG_NUMBER = "big-number"
    QUOTE = "quote"
    CONCLUSION = "conclusion"
    TITLE_SLIDE = "title_slide"
    CONTENT_SLIDE = "content_slide"
    DATA_VISUALIZATION = "data_visualization"
    COMPARISON_MATRIX = "comparison_matrix"
    TIMELINE_FLOW = "timeline_flow"
    EXECUTIVE_SUMMARY = "executive_summary"
    MARKET_ANALYSIS = "market_analysis"
    COMPETITIVE_LANDSCAPE = "competitive_landscape"
    FINANCIAL_PROJECTION = "financial_projection"
    CONCLUSION_CALL_TO_ACTION = "conclusion_call_to_action"

    @classmethod
    def resolve(cls, tag: Any) -> "SlideLayout":
        """Return the layout for a tag, or CONTENT_SLIDE for anything unknown"""
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag.strip().lower())
            except ValueError:
                pass
        return cls.CONTENT_SLIDE


class Theme(str, Enum):
    PROFESSIONAL = "professional"
    MODERN = "modern"
    CREATIVE = "creative"
    MINIMAL = "minimal"


def theme_name(theme: Any) -> str:
    """Plain theme string for a Theme member or a raw name; "" for None"""
    if isinstance(theme, Enum):
        theme = theme.value
    if theme is None:
        return ""
    return str(theme).strip()


@dataclass(frozen=True)
class SlideSpec:
    """One slide's semantic content"""

    title: str
    content: Tuple[str, ...] = ()
    notes: Optional[str] = None
    layout: str = SlideLayout.CONTENT_SLIDE.value

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "content": list(self.content),
            "layout": self.layout,
        }
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass(frozen=True)
class Presentation:
    """Full generation result: deck-level text, theme and ordered slides"""

    title: str
    subtitle: str = ""
    theme: str = Theme.PROFESSIONAL.value
    slides: Tuple[SlideSpec, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "theme": self.theme,
            "slides": [slide.to_dict() for slide in self.slides],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Presentation":
        """
        Load a Presentation persisted with to_dict()

        Args:
            data: Decoded JSON object

        Returns:
            Presentation with coerced slides

        Raises:
            PresentationDataError: If the payload is not presentation-shaped
        """
        if not isinstance(data, dict):
            raise PresentationDataError(["presentation must be an object"])

        issues: List[str] = []
        slides_in = data.get("slides")
        if not isinstance(slides_in, list):
            issues.append("presentation.slides is required and must be a list")
        else:
            for idx, slide in enumerate(slides_in):
                if not isinstance(slide, dict):
                    issues.append(f"presentation.slides[{idx}] must be an object")
        if issues:
            raise PresentationDataError(issues)

        slides = tuple(coerce_slide(slide, idx) for idx, slide in enumerate(slides_in))
        return cls(
            title=_text(data.get("title")) or "Untitled",
            subtitle=_text(data.get("subtitle")),
            theme=theme_name(data.get("theme")) or Theme.PROFESSIONAL.value,
            slides=slides,
        )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_content(value: Any) -> Tuple[str, ...]:
    """Coerce model-provided bullet content into a tuple of non-blank strings"""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    items = (_text(item) for item in value if item is not None)
    return tuple(item for item in items if item)


def coerce_slide(raw: Dict[str, Any], index: int) -> SlideSpec:
    """Build a SlideSpec from a loosely-shaped dict; layout is canonicalized"""
    notes = raw.get("notes")
    return SlideSpec(
        title=_text(raw.get("title")) or f"Slide {index + 1}",
        content=coerce_content(raw.get("content")),
        notes=notes.strip() if isinstance(notes, str) and notes.strip() else None,
        layout=SlideLayout.resolve(raw.get("layout")).value,
    )
