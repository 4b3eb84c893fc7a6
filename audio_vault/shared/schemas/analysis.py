"""
AI Analysis Schemas

Typed shapes of everything the AI gateway produces. Model output is parsed
into these classes before it reaches a handler, so a malformed completion
fails in one place (AnalysisService) instead of leaking half-filled dicts.

Pipelines:
==========
    Wild find scan (two steps)
        POST /items/wild-find-initial-scan       → InitialScanResponse
        POST /items/wild-find-detailed-analysis  → DetailedAnalysisResponse

    One-shot wild find
        POST /items/analyze-wild-find            → AnalyzeWildFindResponse

    Sale listing
        POST /items/analyze-ad-listing           → AnalyzeAdListingResponse

    Owned item evaluation
        PATCH /items/{id}/ai-evaluation          → ValueInsight + GearSuggestions
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field

from audio_vault.shared.schemas.common import BaseSchema
from audio_vault.shared.schemas.wild_find import WildFindAnalysis


UNIDENTIFIED_MAKES = frozenset({"unidentified make", "unknown", "unspecified make", "error processing text"})
UNIDENTIFIED_MODELS = frozenset(
    {"model not clearly identifiable", "unknown", "unspecified model", "error processing text"}
)


def is_generic_make(make: Optional[str]) -> bool:
    return not make or make.strip().lower() in UNIDENTIFIED_MAKES


def is_generic_model(model: Optional[str]) -> bool:
    return not model or model.strip().lower() in UNIDENTIFIED_MODELS


def is_generic_identification(make: Optional[str], model: Optional[str]) -> bool:
    """True when make or model is a placeholder the model emits for unknown gear."""
    return is_generic_make(make) or is_generic_model(model)


class LenientSchema(BaseSchema):
    """Base for model output: unknown keys are kept, not rejected."""

    model_config = ConfigDict(extra="allow")


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTIFICATION
# ═══════════════════════════════════════════════════════════════════════════════


class CandidateItem(LenientSchema):
    """One piece of equipment spotted in a photo."""

    make: str = ""
    model: str = ""
    condition_description: str = ""


class InitialScanResponse(BaseSchema):
    message: str
    scanned_items: list[CandidateItem]


class DetailedAnalysisRequest(BaseSchema):
    """Candidates after the user reviewed and possibly corrected them."""

    items: list[CandidateItem] = Field(min_length=1)


# ═══════════════════════════════════════════════════════════════════════════════
# FEATURES & VALUATION
# ═══════════════════════════════════════════════════════════════════════════════


class Specification(LenientSchema):
    name: str
    value: str


class FactualFeatures(LenientSchema):
    key_features: list[str] = Field(default_factory=list)
    specifications: list[Specification] = Field(default_factory=list)
    message: Optional[str] = None


class Valuation(LenientSchema):
    value_range: str = "N/A"
    reasoning: str = ""
    disclaimer: str = ""


class DetailedItemAnalysis(BaseSchema):
    """Factual features and valuation of one reviewed candidate."""

    make: str
    model: str
    condition_description: str
    key_features: list[str] = Field(default_factory=list)
    specifications: list[Specification] = Field(default_factory=list)
    message: Optional[str] = None
    value_range: str
    reasoning: str
    disclaimer: str


class DetailedAnalysisResponse(BaseSchema):
    message: str
    analyses: list[DetailedItemAnalysis]


# ═══════════════════════════════════════════════════════════════════════════════
# ITEM ANALYSIS (one-shot wild find)
# ═══════════════════════════════════════════════════════════════════════════════


class ItemAnalysis(LenientSchema):
    """
    Condition and value assessment of one identified item.

    `summary`, `issues` and `tips` map onto the saved Wild Find fields
    detailedAnalysis, potentialIssues and restorationTips.
    """

    identified_item: str
    visual_condition: str = ""
    estimated_value: str = "Unable to determine"
    summary: str = ""
    confidence: str = "low"
    issues: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    disclaimer: Optional[str] = None

    def to_wild_find_analysis(self) -> WildFindAnalysis:
        return WildFindAnalysis(
            identified_item=self.identified_item,
            visual_condition=self.visual_condition or "Not assessed",
            estimated_value=self.estimated_value,
            detailed_analysis=self.summary,
            potential_issues=self.issues,
            restoration_tips=self.tips,
            disclaimer=self.disclaimer,
            confidence=self.confidence,
        )


class AnalyzeWildFindResponse(BaseSchema):
    """Stored image plus an analysis ready to be saved as a Wild Find."""

    image_url: str
    analysis: WildFindAnalysis


# ═══════════════════════════════════════════════════════════════════════════════
# AD LISTING
# ═══════════════════════════════════════════════════════════════════════════════


class SellerTextSummary(LenientSchema):
    extracted_make: str = "Unspecified Make"
    extracted_model: str = "Unspecified Model"
    claimed_condition: str = ""
    key_claims: list[str] = Field(default_factory=list)
    original_description_for_context: str = ""


class PriceComparison(LenientSchema):
    insight: str = "Price comparison could not be performed."
    verdict: Optional[str] = None


class OriginalAdInfo(BaseSchema):
    ad_url: Optional[str] = None
    ad_title: str
    ad_asking_price: float


class AdAnalysis(BaseSchema):
    """Consolidated analysis of a third-party sale listing."""

    identified_make: str
    identified_model: str
    visual_condition_description: str
    seller_text_summary: SellerTextSummary
    factual_features: FactualFeatures
    valuation: Valuation
    price_comparison: PriceComparison
    original_ad_info: OriginalAdInfo


class AnalyzeAdListingResponse(BaseSchema):
    message: str = "Ad analysis complete."
    image_url: str
    analysis: AdAnalysis


# ═══════════════════════════════════════════════════════════════════════════════
# OWNED ITEM EVALUATION
# ═══════════════════════════════════════════════════════════════════════════════


class ValueInsight(LenientSchema):
    description: str = ""
    production_dates: str = "N/A"
    market_desirability: str = "N/A"
    estimated_value_usd: str = Field(default="Unable to determine market value range.", alias="estimatedValueUSD")
    disclaimer: str = ""


class GearSuggestion(LenientSchema):
    make: str
    model: str
    reason: str = ""


class GearSuggestions(LenientSchema):
    suggestions: list[GearSuggestion] = Field(default_factory=list)


def as_document(schema: BaseSchema) -> dict[str, Any]:
    """Serialize a schema for a JSON column using the wire (camelCase) keys."""
    return schema.model_dump(mode="json", by_alias=True)
