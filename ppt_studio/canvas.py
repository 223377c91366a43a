"""
PPT Studio - Draw Primitives
Library-independent description of a rendered deck on a 10 x 7.5 canvas
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

CANVAS_WIDTH = 10.0
CANVAS_HEIGHT = 7.5


class ShapeKind(str, Enum):
    RECTANGLE = "rectangle"
    ROUNDED_RECTANGLE = "rounded_rectangle"
    ELLIPSE = "ellipse"
    TRIANGLE = "triangle"


@dataclass(frozen=True)
class Box:
    """Position and size in canvas units"""

    x: float
    y: float
    w: float
    h: float

    @property
    def spans_width(self) -> bool:
        return self.x <= 0 and self.x + self.w >= CANVAS_WIDTH


@dataclass(frozen=True)
class Fill:
    color: str
    transparency: int = 0


@dataclass(frozen=True)
class Border:
    color: str
    width: float
    transparency: int = 0


@dataclass(frozen=True)
class Shadow:
    blur: float
    opacity: float
    offset: float
    angle: float


@dataclass(frozen=True)
class ShapeFill:
    kind: ShapeKind
    box: Box
    fill: Fill
    border: Optional[Border] = None
    shadow: Optional[Shadow] = None


@dataclass(frozen=True)
class TextRun:
    text: str
    font_size: int
    color: str
    bold: bool = False
    transparency: int = 0


@dataclass(frozen=True)
class TextBlock:
    runs: Tuple[TextRun, ...]
    box: Box
    align: str = "left"
    valign: str = "top"

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class SpeakerNote:
    text: str


Primitive = Union[ShapeFill, TextBlock, SpeakerNote]


@dataclass
class SlideCanvas:
    """Append-only list of primitives for one slide"""

    index: int
    layout: str
    background: str
    primitives: List[Primitive] = field(default_factory=list)

    def add(self, primitive: Primitive) -> Primitive:
        self.primitives.append(primitive)
        return primitive

    def shapes(self) -> List[ShapeFill]:
        return [p for p in self.primitives if isinstance(p, ShapeFill)]

    def text_blocks(self) -> List[TextBlock]:
        return [p for p in self.primitives if isinstance(p, TextBlock)]

    def notes(self) -> List[SpeakerNote]:
        return [p for p in self.primitives if isinstance(p, SpeakerNote)]


@dataclass
class RenderedDocument:
    title: str
    subtitle: str
    theme: str
    slides: List[SlideCanvas] = field(default_factory=list)

    def iter_primitives(self) -> Iterator[Primitive]:
        for slide in self.slides:
            yield from slide.primitives
