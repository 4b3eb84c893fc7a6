"""
Analysis Service

The AI analysis gateway. Wraps the OpenAI adapter with the prompts the
application needs and parses every answer into a typed schema.

Gateway Contract:
=================
    identify(image)             → list[CandidateItem]
    analyze(candidate, images)  → ItemAnalysis
                                  (summary, estimatedValue, confidence,
                                   issues, tips, ...)

Composite Pipelines:
====================
    detailed_analysis(candidates)
        for each specific candidate:
            factual_features → synthesized_valuation

    analyze_ad_listing(image, title, description, price, url)
        identify (image) ──┐
        analyze_ad_text ───┴─▶ consolidated make/model
            → factual_features (skipped for generic make/model)
            → synthesized_valuation
            → price_comparison

    evaluate_item(item)
        value_insight + gear_suggestions

Failure Mapping:
================
    openai.RateLimitError                → RateLimitError (429)
    other openai.APIError, timeouts      → AnalysisUnavailableError (502)
    non-JSON / wrongly shaped output     → AnalysisUnavailableError (502)

Calls are awaited on the event loop, so a slow completion only holds up the
request that asked for it. No retries are attempted.
"""

from typing import Any, Optional, Sequence, Type, TypeVar

import openai
from pydantic import ValidationError as SchemaValidationError

from audio_vault.shared.adapters.openai_adapter import ImageInput, OpenAIAdapter
from audio_vault.shared.adapters.storage_adapter import UploadedFile
from audio_vault.shared.core.exceptions import (
    AnalysisUnavailableError,
    RateLimitError,
    ValidationError,
)
from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.schemas.analysis import (
    AdAnalysis,
    CandidateItem,
    DetailedItemAnalysis,
    FactualFeatures,
    GearSuggestions,
    ItemAnalysis,
    OriginalAdInfo,
    PriceComparison,
    SellerTextSummary,
    Valuation,
    ValueInsight,
    is_generic_identification,
    is_generic_make,
    is_generic_model,
)
from audio_vault.shared.schemas.common import BaseSchema

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseSchema)

ESTIMATE_DISCLAIMER = (
    "This is an automated estimate for informational purposes only and not a formal appraisal. "
    "Market values fluctuate."
)
GENERIC_FEATURES_MESSAGE = (
    "Factual features could not be retrieved due to non-specific or error in make/model identification."
)
VALUE_INSIGHT_PHOTOS = 5
SUGGESTION_PHOTOS = 3


# ═══════════════════════════════════════════════════════════════════════════════
# PROMPTS
# ═══════════════════════════════════════════════════════════════════════════════

SYSTEM_APPRAISER = (
    "You are an expert in vintage audio equipment: identification, condition grading, "
    "restoration and the second-hand market. Always answer with a single JSON object."
)

IDENTIFY_PROMPT = """Identify every distinct piece of vintage audio equipment in the image.
For each piece give:
- "make": the manufacturer, as specific as possible; "Unidentified Make" if it cannot be determined
- "model": the model name or number; "Model Not Clearly Identifiable" if it cannot be determined
- "conditionDescription": a detailed description of its visible condition
Respond as {"items": [...]}. Use an empty list when no equipment is visible."""

ANALYZE_PROMPT = """Assess this piece of equipment from the photo(s).
Item: {make} {model}
Observed condition: {condition}
Respond with:
- "identifiedItem": "<make> <model>" as you would list it
- "visualCondition": condition summary
- "estimatedValue": market value range in USD, e.g. "$250 - $350"
- "summary": a short paragraph on the item, its era and its desirability
- "confidence": "high", "medium" or "low" for the identification
- "issues": list of likely problems to check
- "tips": list of restoration or cleaning tips
- "disclaimer": one sentence stating this is not a formal appraisal"""

FEATURES_PROMPT = """Act as a vintage audio archivist. List the key features and the common technical
specifications of the {make} {model}, preferring facts from manuals and reputable reviews.
Respond with:
- "keyFeatures": list of strings
- "specifications": list of {{"name": ..., "value": ...}}
- "message": optional note, e.g. when the model is too generic to describe
Leave both lists empty for a non-specific model."""

VALUATION_PROMPT = """Act as a vintage audio appraiser and estimate a market value.
Make: {make}
Model: {model}
Key features: {features}
Observed condition: {condition}
{note}
Respond with:
- "valueRange": USD range, or a statement that the value is difficult to determine
- "reasoning": how the features and the observed condition drive the estimate
- "disclaimer": a standard disclaimer about automated estimates"""

AD_TEXT_PROMPT = """Read this second-hand listing and extract what the seller claims.
Title: {title}
Description: {description}
Respond with:
- "extractedMake": manufacturer named by the seller, or "Unspecified Make"
- "extractedModel": model named by the seller, or "Unspecified Model"
- "claimedCondition": the condition the seller describes
- "keyClaims": list of notable claims (recent service, included accessories, faults)"""

PRICE_COMPARISON_PROMPT = """Compare a listing's asking price with an estimated market value.
Item: {make} {model}
Asking price: ${asking_price}
Estimated market value: {value_range}
Observed condition: {condition}
Seller's condition claim: {claimed_condition}
Seller's claims: {claims}
Respond with:
- "insight": two or three sentences on whether the price is fair and what to check before buying
- "verdict": one of Great Deal, Fair Price, Overpriced, Unclear"""

VALUE_INSIGHT_PROMPT = """Provide a market valuation for an item in a collector's catalog.
Item: {make} {model}, Condition: {condition}.
{photo_note}
Respond with:
- "description": brief description and the features relevant to its value
- "productionDates": when it was manufactured, e.g. "1970-1975"
- "marketDesirability": how sought after it is (rarity, sound, build, aesthetics, repairability)
- "estimatedValueUSD": value range in USD, or "Unable to determine" without data
- "disclaimer": standard disclaimer about automated estimates"""

SUGGESTIONS_PROMPT = """Suggest 3-5 complementary vintage components for a {make} {model} (type: {item_type}).
Complete the system rather than duplicating it: no second receiver or amplifier for a receiver,
no second turntable for a turntable, no other speakers for speakers.
Prefer components of the same era and look, especially {make} gear from the same product line.
{photo_note}
Respond as {{"suggestions": [{{"make": ..., "model": ..., "reason": ...}}]}}."""


def _image_input(image: UploadedFile | ImageInput) -> ImageInput:
    if isinstance(image, ImageInput):
        return image
    return ImageInput(data=image.data, content_type=image.content_type or "image/jpeg")


class AnalysisService:
    """
    Service wrapping the hosted model.

    Attributes:
        adapter: OpenAIAdapter used for every call
    """

    def __init__(self, adapter: OpenAIAdapter) -> None:
        self.adapter = adapter

    # ═══════════════════════════════════════════════════════════════════════════
    # GATEWAY CORE
    # ═══════════════════════════════════════════════════════════════════════════

    async def identify(self, image: UploadedFile | ImageInput) -> list[CandidateItem]:
        """Every piece of equipment visible in `image`, possibly none."""
        payload = await self._ask_json(IDENTIFY_PROMPT, images=[_image_input(image)], step="identify")
        raw_items = payload.get("items") or []
        if not isinstance(raw_items, list):
            raise AnalysisUnavailableError(details={"step": "identify"})
        return [self._parse(CandidateItem, raw, step="identify") for raw in raw_items]

    async def analyze(
        self,
        candidate: CandidateItem,
        images: Sequence[UploadedFile | ImageInput] = (),
    ) -> ItemAnalysis:
        """Condition and value assessment of one identified item."""
        prompt = ANALYZE_PROMPT.format(
            make=candidate.make,
            model=candidate.model,
            condition=candidate.condition_description or "Not described",
        )
        payload = await self._ask_json(prompt, images=[_image_input(i) for i in images], step="analyze")
        payload.setdefault("identifiedItem", f"{candidate.make} {candidate.model}".strip())
        payload.setdefault("visualCondition", candidate.condition_description)
        analysis = self._parse(ItemAnalysis, payload, step="analyze")
        if not analysis.disclaimer:
            analysis.disclaimer = ESTIMATE_DISCLAIMER
        return analysis

    # ═══════════════════════════════════════════════════════════════════════════
    # FEATURES & VALUATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def factual_features(self, make: str, model: str) -> FactualFeatures:
        payload = await self._ask_json(FEATURES_PROMPT.format(make=make, model=model), step="features")
        return self._parse(FactualFeatures, payload, step="features")

    async def synthesized_valuation(self, candidate: CandidateItem, features: FactualFeatures) -> Valuation:
        prompt = VALUATION_PROMPT.format(
            make=candidate.make,
            model=candidate.model,
            features=", ".join(features.key_features) or "Not available or not specific.",
            condition=candidate.condition_description or "Not described",
            note=f"Note from feature analysis: {features.message}" if features.message else "",
        )
        payload = await self._ask_json(prompt, step="valuation")
        return self._parse(Valuation, payload, step="valuation")

    async def detailed_analysis(self, candidates: Sequence[CandidateItem]) -> list[DetailedItemAnalysis]:
        """
        Features and valuation for each reviewed candidate.

        Candidates without a make, model or condition description, and those
        still carrying placeholder names, are skipped.

        Raises:
            ValidationError: Nothing left to analyze
        """
        analyses = []
        for candidate in candidates:
            if not candidate.condition_description or is_generic_identification(candidate.make, candidate.model):
                logger.info("Skipping candidate", make=candidate.make, model=candidate.model)
                continue

            features = await self.factual_features(candidate.make, candidate.model)
            valuation = await self.synthesized_valuation(candidate, features)
            analyses.append(
                DetailedItemAnalysis(
                    make=candidate.make,
                    model=candidate.model,
                    condition_description=candidate.condition_description,
                    key_features=features.key_features,
                    specifications=features.specifications,
                    message=features.message,
                    value_range=valuation.value_range,
                    reasoning=valuation.reasoning,
                    disclaimer=valuation.disclaimer or ESTIMATE_DISCLAIMER,
                )
            )

        if not analyses:
            raise ValidationError(
                "Could not perform detailed analysis on any of the provided items. "
                "Please ensure make and model are specific and not generic placeholders."
            )
        return analyses

    # ═══════════════════════════════════════════════════════════════════════════
    # AD LISTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def analyze_ad_text(self, title: str, description: str) -> SellerTextSummary:
        prompt = AD_TEXT_PROMPT.format(title=title, description=description)
        payload = await self._ask_json(prompt, step="ad_text")
        summary = self._parse(SellerTextSummary, payload, step="ad_text")
        summary.original_description_for_context = description
        return summary

    async def price_comparison(
        self,
        valuation: Valuation,
        asking_price: float,
        make: str,
        model: str,
        condition: str,
        seller: SellerTextSummary,
    ) -> PriceComparison:
        prompt = PRICE_COMPARISON_PROMPT.format(
            make=make,
            model=model,
            asking_price=f"{asking_price:.2f}",
            value_range=valuation.value_range,
            condition=condition,
            claimed_condition=seller.claimed_condition or "Not stated",
            claims="; ".join(seller.key_claims) or "None",
        )
        payload = await self._ask_json(prompt, step="price_comparison")
        return self._parse(PriceComparison, payload, step="price_comparison")

    async def analyze_ad_listing(
        self,
        image: UploadedFile | ImageInput,
        title: str,
        description: str,
        asking_price: float,
        ad_url: Optional[str] = None,
    ) -> AdAnalysis:
        """
        Full evaluation of a third-party listing.

        The seller's text overrides the visual identification when it names a
        specific make or model.
        """
        make, model = "Unknown", "Unknown"
        condition = "Could not be determined from image."

        candidates = await self.identify(image)
        if candidates:
            primary = candidates[0]
            make = primary.make or make
            model = primary.model or model
            condition = primary.condition_description or condition

        seller = await self.analyze_ad_text(title, description)
        if not is_generic_make(seller.extracted_make):
            make = seller.extracted_make
        if not is_generic_model(seller.extracted_model):
            model = seller.extracted_model

        if is_generic_identification(make, model):
            logger.info("Skipping factual features for generic identification", make=make, model=model)
            features = FactualFeatures(message=GENERIC_FEATURES_MESSAGE)
        else:
            features = await self.factual_features(make, model)

        identified = CandidateItem(make=make, model=model, condition_description=condition)
        valuation = await self.synthesized_valuation(identified, features)
        comparison = await self.price_comparison(valuation, asking_price, make, model, condition, seller)

        return AdAnalysis(
            identified_make=make,
            identified_model=model,
            visual_condition_description=condition,
            seller_text_summary=seller,
            factual_features=features,
            valuation=valuation,
            price_comparison=comparison,
            original_ad_info=OriginalAdInfo(ad_url=ad_url, ad_title=title, ad_asking_price=asking_price),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # OWNED ITEMS
    # ═══════════════════════════════════════════════════════════════════════════

    async def value_insight(self, item: AudioItem) -> ValueInsight:
        photos = [ImageInput(url=url) for url in item.photo_urls[:VALUE_INSIGHT_PHOTOS]]
        prompt = VALUE_INSIGHT_PROMPT.format(
            make=item.make,
            model=item.model,
            condition=item.condition.value,
            photo_note="Use the attached photos to judge condition and exact model." if photos else "No photos provided.",
        )
        payload = await self._ask_json(prompt, images=photos, step="value_insight")
        insight = self._parse(ValueInsight, payload, step="value_insight")
        insight.disclaimer = ESTIMATE_DISCLAIMER
        return insight

    async def gear_suggestions(self, item: AudioItem) -> GearSuggestions:
        photos = [ImageInput(url=url) for url in item.photo_urls[:SUGGESTION_PHOTOS]]
        prompt = SUGGESTIONS_PROMPT.format(
            make=item.make,
            model=item.model,
            item_type=item.item_type.value,
            photo_note="Use the attached photos to match the look of the system." if photos else "",
        )
        payload = await self._ask_json(prompt, images=photos, step="suggestions", temperature=0.7)
        return self._parse(GearSuggestions, payload, step="suggestions")

    async def evaluate_item(self, item: AudioItem) -> tuple[ValueInsight, GearSuggestions]:
        """Value insight and complementary gear for an owned item."""
        insight = await self.value_insight(item)
        suggestions = await self.gear_suggestions(item)
        return insight, suggestions

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _ask_json(
        self,
        prompt: str,
        images: Sequence[ImageInput] = (),
        step: str = "analysis",
        temperature: float = 0.2,
    ) -> dict[str, Any]:
        try:
            return await self.adapter.complete_json(
                system_prompt=SYSTEM_APPRAISER,
                user_prompt=prompt,
                images=images,
                temperature=temperature,
            )
        except openai.RateLimitError as e:
            logger.warning("AI provider throttled the request", step=step)
            raise RateLimitError("The AI service is busy. Please try again shortly.") from e
        except openai.APIError as e:
            logger.error("AI provider call failed", step=step, error=str(e))
            raise AnalysisUnavailableError(details={"step": step}) from e
        except ValueError as e:
            logger.error("AI response unusable", step=step, error=str(e))
            raise AnalysisUnavailableError(details={"step": step}) from e

    @staticmethod
    def _parse(schema: Type[SchemaT], payload: Any, step: str) -> SchemaT:
        try:
            return schema.model_validate(payload)
        except SchemaValidationError as e:
            logger.error("AI response did not match the expected shape", step=step, errors=e.error_count())
            raise AnalysisUnavailableError(details={"step": step}) from e
