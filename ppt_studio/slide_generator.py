"""
PPT Studio - Slide Generator
Turns a topic into a normalized Presentation with exactly the requested slide count
"""

import os
import re
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from dotenv import load_dotenv

from ppt_studio.catalogue import (
    CLOSING_SLIDE,
    DEFAULT_BRANDING,
    DEFAULT_SUBTITLE,
    FILLER_SLIDE,
    PITCH_SECTIONS,
    SectionTemplate,
)
from ppt_studio.models import Presentation, SlideLayout, SlideSpec, Theme, coerce_slide, theme_name

load_dotenv('.env.ppt')

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
PROMPT_LAYOUTS = (
    "title_slide, content_slide, data_visualization, executive_summary, "
    "competitive_landscape, market_analysis, conclusion"
)


# ============================================================================
# JSON EXTRACTION
# ============================================================================

def extract_json_object(raw_output: Any) -> Optional[Dict[str, Any]]:
    """
    Pull the outermost {...} span out of free text and decode it

    The match is greedy from the first '{' to the last '}', so prose around
    a single JSON object is tolerated but two objects are not.

    Args:
        raw_output: Raw model text

    Returns:
        Decoded object, or None if nothing usable was found
    """
    if not isinstance(raw_output, str) or not raw_output:
        return None

    match = re.search(r'\{.*\}', raw_output, re.DOTALL)
    if not match:
        return None

    try:
        data = json.loads(match.group(0))
    except ValueError as e:
        logger.warning(f"⚠️ Model output is not valid JSON: {e}")
        return None

    return data if isinstance(data, dict) else None


# ============================================================================
# NORMALIZER
# ============================================================================

class ContentNormalizer:
    """Parses model output into slides, falls back to the pitch catalogue, fixes the slide count"""

    def __init__(
        self,
        catalogue: Sequence[SectionTemplate] = PITCH_SECTIONS,
        closing: SectionTemplate = CLOSING_SLIDE,
        filler: SectionTemplate = FILLER_SLIDE,
        subtitle: str = DEFAULT_SUBTITLE,
        branding: Optional[str] = None,
    ):
        self.catalogue = tuple(catalogue)
        self.closing = closing
        self.filler = filler
        self.subtitle = subtitle
        self.branding = branding or os.getenv("PPT_BRANDING", DEFAULT_BRANDING)

    def normalize(self, topic: str, requested_count: int, theme: str, raw_output: Any = "") -> Presentation:
        """
        Build a Presentation of exactly requested_count slides

        Args:
            topic: Presentation topic
            requested_count: Number of slides wanted (values below 1 become 1)
            theme: Theme name; always wins over whatever the model claimed
            raw_output: Raw model text, may be empty or garbage

        Returns:
            Presentation with len(slides) == requested_count
        """
        topic = str(topic or "").strip() or "Untitled Presentation"
        count = self._clamp_count(requested_count)
        theme = theme_name(theme) or Theme.PROFESSIONAL.value

        try:
            presentation = None
            data = extract_json_object(raw_output)
            if data is not None:
                presentation = self.parse_presentation(data, topic, theme)

            if presentation is None:
                logger.info(f"   Using fallback slides for: {topic}")
                presentation = self.fallback_presentation(topic, count, theme)

            slides = self.repair_slide_count(list(presentation.slides), count)
        except Exception as e:
            logger.error(f"❌ Normalization failed, using fallback: {str(e)}")
            presentation = self.fallback_presentation(topic, count, theme)
            slides = self.repair_slide_count(list(presentation.slides), count)

        logger.info(f"✅ Normalized {len(slides)} slides (requested: {count})")
        return Presentation(
            title=presentation.title,
            subtitle=presentation.subtitle,
            theme=theme,
            slides=tuple(slides),
        )

    def _clamp_count(self, requested_count: Any) -> int:
        try:
            count = int(requested_count)
        except (TypeError, ValueError):
            count = 1
        if count < 1:
            logger.warning(f"⚠️ Slide count {requested_count!r} is below 1, using 1")
            count = 1
        return count

    def parse_presentation(self, data: Dict[str, Any], topic: str, theme: str) -> Optional[Presentation]:
        """Coerce a decoded model object; None if it has no slide list"""
        slides_in = data.get("slides")
        if not isinstance(slides_in, list):
            logger.warning("⚠️ Model output has no 'slides' list")
            return None

        slides = [
            coerce_slide(raw, idx)
            for idx, raw in enumerate(item for item in slides_in if isinstance(item, dict))
        ]
        title = data.get("title")
        subtitle = data.get("subtitle")
        return Presentation(
            title=str(title).strip() if title else topic,
            subtitle=str(subtitle).strip() if subtitle else "",
            theme=theme,
            slides=tuple(slides),
        )

    def fallback_presentation(self, topic: str, requested_count: int, theme: str) -> Presentation:
        """Title slide, catalogue sections cycled as needed, then the closing slide"""
        slides: List[SlideSpec] = [
            SlideSpec(
                title=topic,
                content=(self.subtitle, self.branding),
                notes=f"Professional presentation about {topic}",
                layout=SlideLayout.TITLE.value,
            )
        ]

        content_needed = max(requested_count - 2, 0)
        if self.catalogue:
            for i in range(content_needed):
                section = self.catalogue[i % len(self.catalogue)]
                slides.append(SlideSpec(
                    title=section.title,
                    content=tuple(section.content),
                    notes=f"Detailed explanation of {section.title} for {topic}",
                    layout=SlideLayout.resolve(section.layout).value,
                ))

        slides.append(self._from_template(self.closing, self.closing.title))

        logger.info(f"   Generated {len(slides)} fallback slides (requested: {requested_count})")
        return Presentation(title=topic, subtitle=self.subtitle, theme=theme, slides=tuple(slides))

    def repair_slide_count(self, slides: List[SlideSpec], requested_count: int) -> List[SlideSpec]:
        """
        Pad or truncate to the requested count

        Fillers go in just before the last slide so a closing slide stays last.
        Truncation is positional and may drop the closing slide.
        """
        slides = list(slides)
        if len(slides) > requested_count:
            logger.info(f"   Truncating {len(slides)} slides to {requested_count}")
            return slides[:requested_count]

        while len(slides) < requested_count:
            filler = self._from_template(self.filler, f"{self.filler.title} {len(slides)}")
            slides.insert(max(len(slides) - 1, 0), filler)
        return slides

    def _from_template(self, template: SectionTemplate, title: str) -> SlideSpec:
        return SlideSpec(
            title=title,
            content=tuple(template.content),
            notes=template.notes or None,
            layout=SlideLayout.resolve(template.layout).value,
        )


_default_normalizer = ContentNormalizer()


def normalize(topic: str, requested_count: int, theme: str, raw_output: Any = "") -> Presentation:
    """Normalize with the default catalogue"""
    return _default_normalizer.normalize(topic, requested_count, theme, raw_output)


# ============================================================================
# LLM CLIENT
# ============================================================================

class SlideGenerator:
    """Asks an LLM for slide content and normalizes whatever comes back"""

    def __init__(self, normalizer: Optional[ContentNormalizer] = None):
        self.normalizer = normalizer or ContentNormalizer()
        self.api_client = None
        self.api_type = None
        self._initialize_api()

    def _initialize_api(self):
        """Pick an LLM provider from .env.ppt"""
        try:
            ppt_api_type = os.getenv("PPT_API_TYPE", "").lower()

            if ppt_api_type in ("", "groq"):
                api_key = os.getenv("PPT_GROQ_API_KEY") or os.getenv("GROQ_API_KEY")
                if api_key:
                    from groq import Groq
                    self.api_client = Groq(api_key=api_key)
                    self.api_type = "groq"
                    logger.info("   Using Groq API")
                    return

            if ppt_api_type in ("", "openrouter") and os.getenv("OPENROUTER_API_KEY"):
                self.api_type = "openrouter"
                logger.info("   Using OpenRouter API")
                return

            logger.warning("⚠️ No LLM provider configured, slides will use the fallback catalogue")

        except Exception as e:
            logger.error(f"Error initializing API: {str(e)}")

    def build_prompt(self, topic: str, slide_count: int, theme: str) -> str:
        """Prompt asking for the JSON shape the normalizer understands"""
        return f"""Create a presentation about "{topic}" with exactly {slide_count} slides.
Use the {theme} theme and write for an executive audience.

For each slide provide:
1. Title: impactful headline (max 8 words)
2. Content: 3-6 bullet points with metrics, insights or key takeaways
3. Notes: 3-4 sentences of speaker notes
4. Layout: one of {PROMPT_LAYOUTS}

The first slide should use title_slide and the last slide a conclusion.

Return ONLY valid JSON in this format:
{{
  "title": "Presentation Title",
  "subtitle": "Presentation Subtitle",
  "theme": "{theme}",
  "slides": [
    {{
      "title": "Slide Title",
      "content": ["Point one", "Point two", "Point three"],
      "notes": "Speaker notes for this slide.",
      "layout": "title_slide"
    }}
  ]
}}"""

    async def generate_presentation(
        self,
        topic: str,
        slide_count: int,
        theme: str = Theme.PROFESSIONAL.value,
        include_images: bool = False,
    ) -> Presentation:
        """
        Generate and normalize slide content for a topic

        Args:
            topic: Presentation topic
            slide_count: Exact number of slides wanted
            theme: Theme name
            include_images: Accepted for API compatibility; no images are generated

        Returns:
            Normalized Presentation
        """
        theme = theme_name(theme) or Theme.PROFESSIONAL.value
        logger.info(f"   Generating {slide_count} slides for: {topic[:60]} (theme: {theme})")
        if include_images:
            logger.info("   Image generation is not supported, continuing without images")

        try:
            raw_output = self._call_llm(self.build_prompt(topic, slide_count, theme), 4000)
        except Exception as e:
            logger.error(f"❌ Content generation failed: {str(e)}")
            raw_output = ""

        return self.normalizer.normalize(topic, slide_count, theme, raw_output)

    def _call_llm(self, prompt: str, max_tokens: int = 500) -> str:
        """Call LLM API"""
        try:
            if self.api_type == "groq":
                response = self.api_client.chat.completions.create(
                    messages=[{"role": "user", "content": prompt}],
                    model=os.getenv("PPT_GROQ_MODEL", "llama-3.3-70b-versatile"),
                    max_tokens=max_tokens,
                    temperature=0.7
                )
                return response.choices[0].message.content or ""

            elif self.api_type == "openrouter":
                response = requests.post(
                    OPENROUTER_URL,
                    headers={"Authorization": f"Bearer {os.getenv('OPENROUTER_API_KEY')}"},
                    json={
                        "model": os.getenv("PPT_OPENROUTER_MODEL", "moonshotai/kimi-k2"),
                        "messages": [{"role": "user", "content": prompt}],
                        "max_tokens": max_tokens,
                        "temperature": 0.7,
                    },
                    timeout=float(os.getenv("PPT_LLM_TIMEOUT", "60")),
                )
                response.raise_for_status()
                choices = response.json().get("choices", [])
                if choices:
                    return choices[0].get("message", {}).get("content") or ""
                return ""

            return ""
        except Exception as e:
            logger.error(f"LLM call failed: {str(e)}")
            return ""
