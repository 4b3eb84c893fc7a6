"""
Wild Find Schemas

Request/response models for /api/wild-finds.

Two payload kinds share one endpoint:

    {"imageUrl": "...", "analysis": {"identifiedItem": ..., ...}}
        → Wild Find (default findType)

    {"findType": "Ad Analysis", "imageUrl": "...", "adAnalysis": {...},
     "sourceUrl": "...", "askingPrice": 120}
        → Ad Analysis
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, model_validator

from audio_vault.shared.models.enums import FindType
from audio_vault.shared.schemas.common import BaseSchema


class WildFindAnalysis(BaseSchema):
    """
    Saved result of a photo scan.

    Extra keys produced by the model are preserved.
    """

    model_config = ConfigDict(extra="allow")

    identified_item: str = Field(min_length=1)
    visual_condition: str = Field(min_length=1)
    estimated_value: str = Field(min_length=1)
    detailed_analysis: Optional[str] = None
    potential_issues: list[str] = Field(default_factory=list)
    restoration_tips: list[str] = Field(default_factory=list)
    disclaimer: Optional[str] = None


class WildFindCreate(BaseSchema):
    """Payload to save a Wild Find or an Ad Analysis."""

    find_type: FindType = FindType.WILD_FIND
    image_url: str = Field(min_length=1)
    analysis: Optional[WildFindAnalysis] = None
    ad_analysis: Optional[dict[str, Any]] = None
    source_url: Optional[str] = None
    asking_price: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def payload_matches_type(self) -> "WildFindCreate":
        if self.find_type == FindType.WILD_FIND and self.analysis is None:
            raise ValueError("Missing analysis data for a Wild Find.")
        if self.find_type == FindType.AD_ANALYSIS and not self.ad_analysis:
            raise ValueError("Missing adAnalysis data for an Ad Analysis.")
        return self


class WildFindResponse(BaseSchema):
    """Saved find as returned by the API."""

    id: UUID
    user_id: UUID
    find_type: FindType
    image_url: str
    source_url: Optional[str] = None
    asking_price: Optional[float] = None
    analysis: Optional[dict[str, Any]] = None
    ad_analysis: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class WildFindSavedResponse(BaseSchema):
    """Response of POST /api/wild-finds."""

    message: str = "Find saved successfully!"
    find: WildFindResponse
