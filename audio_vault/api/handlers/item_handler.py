"""
Audio Item Handler

Catalog CRUD, the public discover listing, and the AI analysis endpoints.

Endpoints:
==========
    GET    /items                              Own items
    POST   /items                              Create (multipart or JSON)
    GET    /items/discover                     Public items of all users (no auth)
    POST   /items/wild-find-initial-scan       Identify candidates in a photo
    POST   /items/wild-find-detailed-analysis  Features + valuation per candidate
    POST   /items/analyze-wild-find            One-shot wild find analysis
    POST   /items/analyze-ad-listing           Evaluate a third-party sale listing
    GET    /items/{item_id}                    Owner, or anyone if public
    PUT    /items/{item_id}                    Update (owner)
    DELETE /items/{item_id}                    Delete (owner)
    PATCH  /items/{item_id}/ai-evaluation      Value insight + gear suggestions (owner)

Static paths are declared before /{item_id} so they are never read as ids.

Request Encodings:
==================
Create and update accept either:

    multipart/form-data   fields as form values, photos under "photos"
                          (or a single "photo")
    application/json      fields only, no photos

The body is read by hand and validated against AudioItemCreate /
AudioItemUpdate, so both encodings share one schema. Pydantic errors raised
here are rendered as 400 by the global handler.
"""

import json
from typing import Annotated, Any, Optional, Tuple, Type, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

from audio_vault.api.dependencies.auth import CurrentUser
from audio_vault.api.dependencies.pagination import Pagination
from audio_vault.api.dependencies.services import (
    get_analysis_service,
    get_item_service,
    get_wild_find_service,
)
from audio_vault.shared.adapters.storage_adapter import UploadedFile
from audio_vault.shared.core.exceptions import NothingIdentifiedError, ValidationError
from audio_vault.shared.schemas.analysis import (
    AnalyzeAdListingResponse,
    AnalyzeWildFindResponse,
    DetailedAnalysisRequest,
    DetailedAnalysisResponse,
    InitialScanResponse,
)
from audio_vault.shared.schemas.common import BaseSchema, MessageResponse, PaginatedResponse, PaginationMeta
from audio_vault.shared.schemas.item import (
    AudioItemCreate,
    AudioItemResponse,
    AudioItemUpdate,
    DiscoverItemResponse,
)
from audio_vault.shared.services.analysis_service import AnalysisService
from audio_vault.shared.services.item_service import ItemService
from audio_vault.shared.services.wild_find_service import WildFindService


router = APIRouter()

PayloadT = TypeVar("PayloadT", bound=BaseSchema)

PHOTO_FIELDS = ("photos", "photo")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST PARSING
# ═══════════════════════════════════════════════════════════════════════════════


async def _to_uploaded_file(upload: StarletteUploadFile) -> UploadedFile:
    return UploadedFile(
        filename=upload.filename or "upload",
        content_type=upload.content_type,
        data=await upload.read(),
    )


async def _read_image(upload: UploadFile) -> UploadedFile:
    """Read an image that goes to the AI provider without being stored first."""
    image = await _to_uploaded_file(upload)
    if not image.content_type or not image.content_type.startswith("image/"):
        raise ValidationError("Not an image! Please upload an image file.")
    if not image.data:
        raise ValidationError("Uploaded image is empty.")
    return image


async def _read_item_request(request: Request, schema: Type[PayloadT]) -> Tuple[PayloadT, list[UploadedFile]]:
    """
    Parse an item create/update body in either encoding.

    Raises:
        ValidationError: Malformed JSON body
        pydantic.ValidationError: Fields do not match the schema
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: dict[str, Any] = {}
        photos: list[UploadedFile] = []
        for key, value in form.multi_items():
            if isinstance(value, StarletteUploadFile):
                if key in PHOTO_FIELDS and value.filename:
                    photos.append(await _to_uploaded_file(value))
            else:
                fields[key] = value

        # existingPhotoUrls may also arrive as repeated form fields
        repeated = [value for value in form.getlist("existingPhotoUrls") if isinstance(value, str)]
        if len(repeated) > 1:
            fields["existingPhotoUrls"] = repeated

        return schema.model_validate(fields), photos

    raw = await request.body()
    if not raw.strip():
        return schema.model_validate({}), []
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError("Request body is not valid JSON.") from e
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return schema.model_validate(body), []


# ═══════════════════════════════════════════════════════════════════════════════
# COLLECTION
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("", response_model=list[AudioItemResponse])
async def list_items(
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """All items of the caller, newest first."""
    return await item_service.list_own_items(current_user.id)


@router.post("", response_model=AudioItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: Request,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Add an item to the caller's catalog.

    Required fields: make, model, itemType, condition.

    Raises:
        400: Missing/invalid fields, too many photos, non-image upload
    """
    payload, photos = await _read_item_request(request, AudioItemCreate)
    return await item_service.create_item(current_user.id, payload, photos)


@router.get("/discover", response_model=PaginatedResponse[DiscoverItemResponse])
async def discover_items(
    pagination: Pagination,
    item_service: ItemService = Depends(get_item_service),
):
    """Public items of every user, newest first. No authentication."""
    items, total = await item_service.discover(pagination.offset, pagination.limit)
    return PaginatedResponse[DiscoverItemResponse](
        data=[DiscoverItemResponse.model_validate(item) for item in items],
        pagination=PaginationMeta.create(page=pagination.page, limit=pagination.limit, total=total),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# AI ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/wild-find-initial-scan", response_model=InitialScanResponse)
async def wild_find_initial_scan(
    _current_user: CurrentUser,
    image: Annotated[UploadFile, File()],
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Step one of the two-step scan: list the equipment visible in a photo.

    The user reviews (and may correct) the candidates before step two.

    Raises:
        404: Nothing identifiable in the photo
    """
    candidates = await analysis.identify(await _read_image(image))
    if not candidates:
        raise NothingIdentifiedError()

    return InitialScanResponse(
        message="Initial scan complete. Please review and confirm the items.",
        scanned_items=candidates,
    )


@router.post("/wild-find-detailed-analysis", response_model=DetailedAnalysisResponse)
async def wild_find_detailed_analysis(
    body: DetailedAnalysisRequest,
    _current_user: CurrentUser,
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Step two: factual features and a valuation for each reviewed candidate.

    Raises:
        400: Every candidate was generic or incomplete
    """
    analyses = await analysis.detailed_analysis(body.items)
    return DetailedAnalysisResponse(message="Detailed analysis complete.", analyses=analyses)


@router.post("/analyze-wild-find", response_model=AnalyzeWildFindResponse)
async def analyze_wild_find(
    current_user: CurrentUser,
    image: Annotated[UploadFile, File()],
    wild_find_service: WildFindService = Depends(get_wild_find_service),
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Store the photo, identify the main item and assess it.

    The response can be posted to /wild-finds as is.
    """
    upload = await _to_uploaded_file(image)
    return await wild_find_service.analyze_wild_find(current_user.id, upload, analysis)


@router.post("/analyze-ad-listing", response_model=AnalyzeAdListingResponse)
async def analyze_ad_listing(
    current_user: CurrentUser,
    ad_image: Annotated[UploadFile, File(alias="adImage")],
    ad_title: Annotated[str, Form(alias="adTitle", min_length=1)],
    ad_description: Annotated[str, Form(alias="adDescription", min_length=1)],
    ad_asking_price: Annotated[float, Form(alias="adAskingPrice", ge=0)],
    ad_url: Annotated[Optional[str], Form(alias="adUrl")] = None,
    wild_find_service: WildFindService = Depends(get_wild_find_service),
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Evaluate a third-party sale listing against its asking price.

    Raises:
        400: Image, title, description or asking price missing
    """
    upload = await _to_uploaded_file(ad_image)
    return await wild_find_service.analyze_ad_listing(
        current_user.id,
        upload,
        title=ad_title.strip(),
        description=ad_description.strip(),
        asking_price=ad_asking_price,
        ad_url=ad_url or None,
        analysis=analysis,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE ITEM
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{item_id}", response_model=AudioItemResponse)
async def get_item(
    item_id: UUID,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Raises:
        403: Private item of another user
        404: No such item
    """
    return await item_service.get_item(item_id, current_user.id)


@router.put("/{item_id}", response_model=AudioItemResponse)
async def update_item(
    item_id: UUID,
    request: Request,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Update whitelisted fields; `existingPhotoUrls` selects the photos to keep.

    Raises:
        403: Not the owner (the item is left unchanged)
        404: No such item
    """
    payload, photos = await _read_item_request(request, AudioItemUpdate)
    return await item_service.update_item(item_id, current_user.id, payload, photos)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: UUID,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
):
    """
    Raises:
        403: Not the owner
        404: No such item
    """
    await item_service.delete_item(item_id, current_user.id)
    return MessageResponse(message="Item deleted successfully.")


@router.patch("/{item_id}/ai-evaluation", response_model=AudioItemResponse)
async def evaluate_item(
    item_id: UUID,
    current_user: CurrentUser,
    item_service: ItemService = Depends(get_item_service),
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Refresh the stored AI value insight and gear suggestions.

    Raises:
        403: Not the owner
        404: No such item
        429/502: AI provider throttled or failed
    """
    return await item_service.evaluate_item(item_id, current_user.id, analysis)
