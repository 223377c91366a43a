"""
PPT Studio - Presentation Generation Module

Turns a topic into a downloadable PowerPoint deck:
- SlideGenerator: asks an LLM for slide content
- ContentNormalizer: parses model output or falls back to a pitch-deck catalogue,
  then pads/truncates to the requested slide count
- LayoutRenderer: renders each slide's layout variant into draw primitives
- PPTAnalyzer: reads a generated deck back for previews

Usage:
    from ppt_studio import LayoutRenderer, normalize

    presentation = normalize("Solar Energy", 5, "modern", raw_model_output)
    document = LayoutRenderer().render(presentation)
"""

from ppt_studio.errors import PresentationDataError
from ppt_studio.models import Presentation, SlideLayout, SlideSpec, Theme
from ppt_studio.themes import THEME_CONFIGS, ThemeConfig, resolve_theme
from ppt_studio.slide_generator import ContentNormalizer, SlideGenerator, extract_json_object, normalize
from ppt_studio.layout_manager import LAYOUT_ROUTINES, LayoutRenderer, render
from ppt_studio.ppt_analyzer import PPTAnalyzer

__all__ = [
    'ContentNormalizer',
    'LAYOUT_ROUTINES',
    'LayoutRenderer',
    'PPTAnalyzer',
    'Presentation',
    'PresentationDataError',
    'SlideGenerator',
    'SlideLayout',
    'SlideSpec',
    'THEME_CONFIGS',
    'Theme',
    'ThemeConfig',
    'extract_json_object',
    'normalize',
    'render',
    'resolve_theme',
]

__version__ = '1.0.0'
__project__ = 'PPT Studio'
