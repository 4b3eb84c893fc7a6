"""
Pydantic Schemas

Request validation and response serialization models.

Schema Organization:
====================
- common.py: BaseSchema (camelCase wire format), pagination, errors, health
- user.py: Registration, login, profile, follow
- item.py: Audio item create/update/response
- wild_find.py: Saved finds
- feed.py: Feed entries
- analysis.py: AI gateway results

Usage:
======
    from audio_vault.shared.schemas import AudioItemCreate, AudioItemResponse

    @router.post("", response_model=AudioItemResponse, status_code=201)
    async def create_item(...): ...
"""

from audio_vault.shared.schemas.common import (
    BaseSchema,
    HealthCheckResponse,
    HealthResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)
from audio_vault.shared.schemas.item import (
    AudioItemCreate,
    AudioItemResponse,
    AudioItemUpdate,
    DiscoverItemResponse,
    ItemOwner,
)
from audio_vault.shared.schemas.user import (
    AuthResponse,
    FollowResponse,
    MeResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from audio_vault.shared.schemas.wild_find import (
    WildFindAnalysis,
    WildFindCreate,
    WildFindResponse,
    WildFindSavedResponse,
)
from audio_vault.shared.schemas.feed import FeedEntry, FeedUser
from audio_vault.shared.schemas.analysis import (
    AdAnalysis,
    AnalyzeAdListingResponse,
    AnalyzeWildFindResponse,
    CandidateItem,
    DetailedAnalysisRequest,
    DetailedAnalysisResponse,
    DetailedItemAnalysis,
    FactualFeatures,
    GearSuggestions,
    InitialScanResponse,
    ItemAnalysis,
    PriceComparison,
    SellerTextSummary,
    Valuation,
    ValueInsight,
)

__all__ = [
    # Common
    "BaseSchema",
    "HealthCheckResponse",
    "HealthResponse",
    "MessageResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    # Items
    "AudioItemCreate",
    "AudioItemResponse",
    "AudioItemUpdate",
    "DiscoverItemResponse",
    "ItemOwner",
    # Users
    "AuthResponse",
    "FollowResponse",
    "MeResponse",
    "ProfileResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    # Wild finds
    "WildFindAnalysis",
    "WildFindCreate",
    "WildFindResponse",
    "WildFindSavedResponse",
    # Feed
    "FeedEntry",
    "FeedUser",
    # Analysis
    "AdAnalysis",
    "AnalyzeAdListingResponse",
    "AnalyzeWildFindResponse",
    "CandidateItem",
    "DetailedAnalysisRequest",
    "DetailedAnalysisResponse",
    "DetailedItemAnalysis",
    "FactualFeatures",
    "GearSuggestions",
    "InitialScanResponse",
    "ItemAnalysis",
    "PriceComparison",
    "SellerTextSummary",
    "Valuation",
    "ValueInsight",
]
