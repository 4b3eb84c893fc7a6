"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Adapters (OpenAI, S3)

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Raise application exceptions, never build HTTP responses
- Leave commit/rollback to the request-scoped session

Available Services:
===================
- AuthService: Registration, login, token issuing
- FollowService: Follow graph mutations
- FeedService: Social feed aggregation
- UserService: Account, dashboard and profile views
- ItemService: Audio item CRUD, photos, AI evaluation
- WildFindService: Saved analyses and analysis pipelines
- AnalysisService: AI analysis gateway

Usage:
======
    from audio_vault.shared.services import FeedService

    entries = await FeedService(db).get_feed(user.id, page=1, page_size=20)
"""

from audio_vault.shared.services.auth_service import AuthService
from audio_vault.shared.services.follow_service import FollowResult, FollowService
from audio_vault.shared.services.feed_service import FeedService
from audio_vault.shared.services.user_service import UserService
from audio_vault.shared.services.item_service import ItemService
from audio_vault.shared.services.wild_find_service import WildFindService
from audio_vault.shared.services.analysis_service import AnalysisService

__all__ = [
    "AuthService",
    "FollowResult",
    "FollowService",
    "FeedService",
    "UserService",
    "ItemService",
    "WildFindService",
    "AnalysisService",
]
