"""
AI analysis gateway: parsing, composite pipelines and failure mapping.
"""

from uuid import uuid4

import httpx
import openai
import pytest

from audio_vault.shared.adapters.storage_adapter import UploadedFile
from audio_vault.shared.core.exceptions import AnalysisUnavailableError, RateLimitError, ValidationError
from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.enums import ItemCondition, ItemType
from audio_vault.shared.schemas.analysis import CandidateItem
from audio_vault.shared.services.analysis_service import (
    ESTIMATE_DISCLAIMER,
    GENERIC_FEATURES_MESSAGE,
    AnalysisService,
)

from tests.helpers import PNG_BYTES, FakeOpenAI


OPENAI_URL = "https://api.openai.com/v1/chat/completions"
IMAGE = UploadedFile(filename="shelf.png", content_type="image/png", data=PNG_BYTES)


@pytest.fixture
def ai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def service(ai) -> AnalysisService:
    return AnalysisService(ai)


def _rate_limited() -> openai.RateLimitError:
    response = httpx.Response(429, request=httpx.Request("POST", OPENAI_URL))
    return openai.RateLimitError("Rate limit reached", response=response, body=None)


def _connection_failed() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))


# ═══════════════════════════════════════════════════════════════════════════════
# GATEWAY CORE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_identify_parses_candidates(ai, service):
    ai.queue({"items": [
        {"make": "Pioneer", "model": "SX-780", "conditionDescription": "Light scratches on the faceplate"},
        {"make": "Technics", "model": "SL-1500", "conditionDescription": "Dust cover cracked"},
    ]})

    candidates = await service.identify(IMAGE)

    assert [(c.make, c.model) for c in candidates] == [("Pioneer", "SX-780"), ("Technics", "SL-1500")]
    assert candidates[0].condition_description == "Light scratches on the faceplate"
    assert ai.calls[0]["images"][0].as_url().startswith("data:image/png;base64,")
    assert ai.calls[0]["json_mode"] is True


async def test_identify_with_nothing_visible(ai, service):
    ai.queue({"items": []})

    assert await service.identify(IMAGE) == []


async def test_identify_tolerates_code_fences(ai, service):
    ai.queue('```json\n{"items": [{"make": "Dual", "model": "1219"}]}\n```')

    candidates = await service.identify(IMAGE)

    assert candidates[0].model == "1219"


async def test_analyze_fills_identification_and_disclaimer(ai, service):
    ai.queue({"estimatedValue": "$400 - $600", "summary": "A late-70s silver-face receiver.", "confidence": "high"})

    analysis = await service.analyze(CandidateItem(make="Pioneer", model="SX-780", condition_description="Clean"))

    assert analysis.identified_item == "Pioneer SX-780"
    assert analysis.visual_condition == "Clean"
    assert analysis.estimated_value == "$400 - $600"
    assert analysis.disclaimer == ESTIMATE_DISCLAIMER


# ═══════════════════════════════════════════════════════════════════════════════
# FAILURE MAPPING
# ═══════════════════════════════════════════════════════════════════════════════


async def test_rate_limit_maps_to_429(ai, service):
    ai.queue(_rate_limited())

    with pytest.raises(RateLimitError) as exc_info:
        await service.identify(IMAGE)

    assert exc_info.value.status_code == 429


async def test_provider_failure_maps_to_analysis_unavailable(ai, service):
    ai.queue(_connection_failed())

    with pytest.raises(AnalysisUnavailableError) as exc_info:
        await service.identify(IMAGE)

    assert exc_info.value.status_code == 502
    assert exc_info.value.error_code == "ANALYSIS_UNAVAILABLE"
    assert exc_info.value.details == {"step": "identify"}


@pytest.mark.parametrize(
    "raw",
    [
        "I think this is a Marantz.",
        "[1, 2, 3]",
        {"items": "Marantz 2270"},
        {"items": [{"make": ["not", "a", "string"]}]},
    ],
)
async def test_unusable_output_maps_to_analysis_unavailable(ai, service, raw):
    ai.queue(raw)

    with pytest.raises(AnalysisUnavailableError):
        await service.identify(IMAGE)


# ═══════════════════════════════════════════════════════════════════════════════
# DETAILED ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_detailed_analysis_skips_generic_candidates(ai, service):
    ai.queue(
        {"keyFeatures": ["45 W per channel", "Quartz-locked tuner"], "specifications": [{"name": "Power", "value": "45 W"}]},
        {"valueRange": "$350 - $500", "reasoning": "Popular model in working order."},
    )
    candidates = [
        CandidateItem(make="Unidentified Make", model="Model Not Clearly Identifiable", condition_description="Rusty"),
        CandidateItem(make="Pioneer", model="SX-780", condition_description="Working, minor wear"),
        CandidateItem(make="Sony", model="unknown", condition_description="Missing knobs"),
    ]

    analyses = await service.detailed_analysis(candidates)

    assert len(analyses) == 1
    assert analyses[0].make == "Pioneer"
    assert analyses[0].key_features == ["45 W per channel", "Quartz-locked tuner"]
    assert analyses[0].value_range == "$350 - $500"
    assert analyses[0].disclaimer == ESTIMATE_DISCLAIMER
    assert len(ai.calls) == 2


async def test_detailed_analysis_with_nothing_specific_is_400(ai, service):
    candidates = [CandidateItem(make="Unknown", model="Unknown", condition_description="Dusty")]

    with pytest.raises(ValidationError):
        await service.detailed_analysis(candidates)

    assert ai.calls == []


# ═══════════════════════════════════════════════════════════════════════════════
# AD LISTING
# ═══════════════════════════════════════════════════════════════════════════════


async def test_ad_listing_prefers_seller_identification(ai, service):
    ai.queue(
        {"items": [{"make": "Marantz", "model": "Model Not Clearly Identifiable", "conditionDescription": "Clean"}]},
        {"extractedMake": "Marantz", "extractedModel": "2270", "claimedCondition": "Serviced", "keyClaims": ["New lamps"]},
        {"keyFeatures": ["70 W per channel"], "specifications": []},
        {"valueRange": "$1,200 - $1,600", "reasoning": "Recently serviced."},
        {"insight": "Priced below recent sales.", "verdict": "Great Deal"},
    )

    analysis = await service.analyze_ad_listing(IMAGE, "Marantz 2270 receiver", "Serviced last year", 950.0, None)

    assert analysis.identified_make == "Marantz"
    assert analysis.identified_model == "2270"
    assert analysis.visual_condition_description == "Clean"
    assert analysis.seller_text_summary.key_claims == ["New lamps"]
    assert analysis.factual_features.key_features == ["70 W per channel"]
    assert analysis.price_comparison.verdict == "Great Deal"
    assert analysis.original_ad_info.ad_asking_price == 950.0
    assert "$950.00" in ai.calls[-1]["prompt"]


async def test_ad_listing_skips_features_for_generic_identification(ai, service):
    ai.queue(
        {"items": []},
        {"extractedMake": "Unspecified Make", "extractedModel": "Unspecified Model"},
        {"valueRange": "Difficult to determine", "reasoning": "No model information."},
        {"insight": "Ask the seller for the model number.", "verdict": "Unclear"},
    )

    analysis = await service.analyze_ad_listing(IMAGE, "Old stereo", "Works", 40.0, "https://ads.test/1")

    assert analysis.identified_make == "Unknown"
    assert analysis.factual_features.message == GENERIC_FEATURES_MESSAGE
    assert analysis.original_ad_info.ad_url == "https://ads.test/1"
    assert len(ai.calls) == 4


# ═══════════════════════════════════════════════════════════════════════════════
# OWNED ITEM EVALUATION
# ═══════════════════════════════════════════════════════════════════════════════


async def test_evaluate_item_uses_stored_photos(ai, service):
    item = AudioItem(
        id=uuid4(),
        user_id=uuid4(),
        make="Sansui",
        model="AU-717",
        item_type=ItemType.INTEGRATED_AMPLIFIER,
        condition=ItemCondition.VERY_GOOD,
        photo_urls=["https://photos.test/audio-items/1-amp.png"],
    )
    ai.queue(
        {
            "description": "DC integrated amplifier.",
            "productionDates": "1977-1979",
            "marketDesirability": "High",
            "estimatedValueUSD": "$700 - $900",
            "disclaimer": "whatever the model says",
        },
        {"suggestions": [{"make": "Sansui", "model": "TU-717", "reason": "Matching tuner"}]},
    )

    insight, suggestions = await service.evaluate_item(item)

    assert insight.estimated_value_usd == "$700 - $900"
    assert insight.disclaimer == ESTIMATE_DISCLAIMER
    assert suggestions.suggestions[0].model == "TU-717"
    assert ai.calls[0]["images"][0].as_url() == "https://photos.test/audio-items/1-amp.png"
