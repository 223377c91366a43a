"""
PPT Studio - Fallback Slide Catalogue
Pitch-deck sections used when the model output cannot be parsed
"""

from dataclasses import dataclass
from typing import Tuple

DEFAULT_BRANDING = "Powered by PPT Studio"
DEFAULT_SUBTITLE = "Investor Pitch Deck"


@dataclass(frozen=True)
class SectionTemplate:
    title: str
    content: Tuple[str, ...]
    layout: str = "content"
    notes: str = ""


PITCH_SECTIONS: Tuple[SectionTemplate, ...] = (
    SectionTemplate("The Problem", (
        "Market pain points", "Current solutions falling short", "Gap in the market", "Customer struggles",
    )),
    SectionTemplate("Our Solution", (
        "Innovative approach", "Key differentiators", "Technology advantage", "Customer benefits",
    )),
    SectionTemplate("Market Opportunity", (
        "Total addressable market (TAM)", "Target customer segments", "Market growth trends",
        "Competitive positioning",
    ), layout="big-number"),
    SectionTemplate("Business Model", (
        "Revenue streams", "Pricing strategy", "Customer acquisition", "Unit economics",
    )),
    SectionTemplate("Product Overview", (
        "Core features", "User experience", "Technical innovation", "Roadmap highlights",
    )),
    SectionTemplate("Traction & Metrics", (
        "Customer growth", "Revenue milestones", "Key partnerships", "Market validation",
    ), layout="big-number"),
    SectionTemplate("Go-to-Market Strategy", (
        "Distribution channels", "Marketing approach", "Sales process", "Growth tactics",
    )),
    SectionTemplate("Competitive Landscape", (
        "Main competitors", "Our advantages", "Barriers to entry", "Market positioning",
    ), layout="two-column"),
    SectionTemplate("The Team", (
        "Founders & expertise", "Advisory board", "Key hires", "Company culture",
    )),
    SectionTemplate("Financial Projections", (
        "Revenue forecast", "Cost structure", "Profitability timeline", "Key assumptions",
    ), layout="big-number"),
    SectionTemplate("Funding Ask", (
        "Investment needed", "Use of funds", "Milestones to achieve", "Expected outcomes",
    ), layout="section"),
    SectionTemplate("Investment Highlights", (
        "Strong value proposition", "Proven market demand", "Experienced team", "Clear path to scale",
    )),
    SectionTemplate("Risk Mitigation", (
        "Identified risks", "Mitigation strategies", "Contingency plans", "Market resilience",
    )),
)

CLOSING_SLIDE = SectionTemplate(
    "Thank You",
    ("Questions?", "Contact: info@company.com", "Let's discuss next steps"),
    layout="conclusion",
    notes="Closing remarks and call to action",
)

FILLER_SLIDE = SectionTemplate(
    "Key Point",
    ("Strategic insight", "Implementation detail", "Success metric", "Action item"),
    layout="content",
    notes="Additional speaker notes",
)
