"""
Wild Find endpoints and the AI analysis routes under /api/items.
"""

import httpx
import openai
import pytest

from tests.helpers import PNG_BYTES, PUBLIC_BASE_URL, create_item, register


ANALYSIS = {
    "identifiedItem": "Marantz 2270",
    "visualCondition": "Good, light dust",
    "estimatedValue": "$900 - $1,200",
    "detailedAnalysis": "Classic silver-face receiver.",
    "potentialIssues": ["Dial lamps"],
    "restorationTips": ["Replace lamps with LEDs"],
}

AD_ANALYSIS = {
    "identifiedMake": "Technics",
    "identifiedModel": "SL-1200",
    "priceComparison": {"insight": "Fair price.", "verdict": "Fair Price"},
}


def _image(name: str = "find.png", content_type: str = "image/png"):
    return (name, PNG_BYTES, content_type)


def _analysis_url(user: dict, name: str = "find.png") -> str:
    return f"{PUBLIC_BASE_URL}/wild-finds/{user['id']}/{name}"


@pytest.fixture
async def alice(client):
    return await register(client, "alice@example.com", username="alice")


@pytest.fixture
async def bob(client):
    return await register(client, "bob@example.com", username="bob")


# ═══════════════════════════════════════════════════════════════════════════════
# SAVED FINDS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_save_wild_find(client, alice):
    response = await client.post(
        "/api/wild-finds",
        json={"imageUrl": _analysis_url(alice), "analysis": ANALYSIS},
        headers=alice["headers"],
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Find saved successfully!"
    assert body["find"]["findType"] == "Wild Find"
    assert body["find"]["userId"] == alice["id"]
    assert body["find"]["analysis"]["identifiedItem"] == "Marantz 2270"
    assert body["find"]["analysis"]["potentialIssues"] == ["Dial lamps"]


async def test_save_ad_analysis(client, alice):
    response = await client.post(
        "/api/wild-finds",
        json={
            "findType": "Ad Analysis",
            "imageUrl": _analysis_url(alice, "ad.png"),
            "adAnalysis": AD_ANALYSIS,
            "sourceUrl": "https://ads.test/42",
            "askingPrice": 450,
        },
        headers=alice["headers"],
    )

    assert response.status_code == 201
    find = response.json()["find"]
    assert find["findType"] == "Ad Analysis"
    assert find["adAnalysis"]["identifiedModel"] == "SL-1200"
    assert find["sourceUrl"] == "https://ads.test/42"
    assert find["askingPrice"] == 450
    assert find["analysis"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"imageUrl": f"{PUBLIC_BASE_URL}/wild-finds/1.png"},
        {"analysis": ANALYSIS},
        {"imageUrl": f"{PUBLIC_BASE_URL}/wild-finds/1.png", "analysis": {"identifiedItem": "Dual 1219"}},
        {"findType": "Ad Analysis", "imageUrl": f"{PUBLIC_BASE_URL}/wild-finds/1.png"},
    ],
)
async def test_save_rejects_incomplete_payload(client, alice, payload):
    response = await client.post("/api/wild-finds", json=payload, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_returns_only_own_finds(client, alice, bob):
    for user in (alice, alice, bob):
        await client.post(
            "/api/wild-finds",
            json={"imageUrl": _analysis_url(user), "analysis": ANALYSIS},
            headers=user["headers"],
        )

    response = await client.get("/api/wild-finds", headers=alice["headers"])

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert {find["userId"] for find in response.json()} == {alice["id"]}


async def test_any_user_can_open_a_find_but_only_owner_deletes(client, storage, alice, bob):
    image_url = _analysis_url(alice)
    key = f"wild-finds/{alice['id']}/find.png"
    storage.objects[key] = PNG_BYTES
    saved = await client.post(
        "/api/wild-finds",
        json={"imageUrl": image_url, "analysis": ANALYSIS},
        headers=alice["headers"],
    )
    find_id = saved.json()["find"]["id"]

    opened = await client.get(f"/api/wild-finds/{find_id}", headers=bob["headers"])
    assert opened.status_code == 200
    assert opened.json()["imageUrl"] == image_url

    forbidden = await client.delete(f"/api/wild-finds/{find_id}", headers=bob["headers"])
    assert forbidden.status_code == 403
    assert storage.deleted == []

    deleted = await client.delete(f"/api/wild-finds/{find_id}", headers=alice["headers"])
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Find deleted successfully."}
    assert storage.deleted == [key]

    gone = await client.get(f"/api/wild-finds/{find_id}", headers=alice["headers"])
    assert gone.status_code == 404


@pytest.mark.parametrize(
    "image_url",
    [
        f"{PUBLIC_BASE_URL}/audio-items/1-receiver.png",
        f"{PUBLIC_BASE_URL}/wild-finds/find.png",
        "https://elsewhere.test/wild-finds/find.png",
    ],
)
async def test_save_rejects_image_outside_own_analysis_prefix(client, alice, image_url):
    response = await client.post(
        "/api/wild-finds",
        json={"imageUrl": image_url, "analysis": ANALYSIS},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_find_cannot_claim_another_users_photo(client, storage, alice, bob):
    created = await client.post(
        "/api/items",
        data={"make": "Marantz", "model": "2270", "itemType": "Receiver", "condition": "Good"},
        files=[("photos", _image("receiver.png"))],
        headers=alice["headers"],
    )
    photo_url = created.json()["photoUrls"][0]

    response = await client.post(
        "/api/wild-finds",
        json={"imageUrl": photo_url, "analysis": ANALYSIS},
        headers=bob["headers"],
    )
    assert response.status_code == 400

    borrowed = await client.post(
        "/api/wild-finds",
        json={"imageUrl": _analysis_url(alice), "analysis": ANALYSIS},
        headers=bob["headers"],
    )
    assert borrowed.status_code == 400
    assert storage.deleted == []
    assert len(storage.objects) == 1


async def test_finds_require_authentication(client):
    response = await client.get("/api/wild-finds")

    assert response.status_code == 401


# ═══════════════════════════════════════════════════════════════════════════════
# ANALYSIS ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_analyze_wild_find_then_save(client, ai, storage, alice):
    ai.queue(
        {"items": [{"make": "Marantz", "model": "2270", "conditionDescription": "Light dust"}]},
        {
            "estimatedValue": "$900 - $1,200",
            "summary": "Classic silver-face receiver.",
            "issues": ["Dial lamps"],
            "tips": ["Replace lamps with LEDs"],
            "confidence": "high",
        },
    )

    response = await client.post(
        "/api/items/analyze-wild-find",
        files={"image": _image()},
        headers=alice["headers"],
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["imageUrl"].startswith(_analysis_url(alice, ""))
    assert len(storage.objects) == 1
    assert body["analysis"]["identifiedItem"] == "Marantz 2270"
    assert body["analysis"]["detailedAnalysis"] == "Classic silver-face receiver."
    assert body["analysis"]["restorationTips"] == ["Replace lamps with LEDs"]

    saved = await client.post("/api/wild-finds", json=body, headers=alice["headers"])
    assert saved.status_code == 201
    assert saved.json()["find"]["analysis"]["estimatedValue"] == "$900 - $1,200"


async def test_analyze_wild_find_with_nothing_identified(client, ai, alice):
    ai.queue({"items": []})

    response = await client.post(
        "/api/items/analyze-wild-find",
        files={"image": _image()},
        headers=alice["headers"],
    )

    assert response.status_code == 404
    assert "could not identify" in response.json()["error"]["message"]


async def test_failed_wild_find_analysis_removes_stored_image(client, ai, storage, alice):
    ai.queue({"items": []}, "not json at all")

    for expected in (404, 502):
        response = await client.post(
            "/api/items/analyze-wild-find",
            files={"image": _image()},
            headers=alice["headers"],
        )
        assert response.status_code == expected

    assert storage.objects == {}
    assert len(storage.deleted) == 2
    assert all(key.startswith(f"wild-finds/{alice['id']}/") for key in storage.deleted)


async def test_failed_ad_listing_analysis_removes_stored_image(client, ai, storage, alice):
    ai.queue("not json at all")

    response = await client.post(
        "/api/items/analyze-ad-listing",
        files={"adImage": _image("ad.png")},
        data={"adTitle": "Receiver", "adDescription": "Works", "adAskingPrice": "100"},
        headers=alice["headers"],
    )

    assert response.status_code == 502
    assert storage.objects == {}
    assert len(storage.deleted) == 1


async def test_analysis_rejects_non_image_upload(client, ai, alice):
    response = await client.post(
        "/api/items/wild-find-initial-scan",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Not an image! Please upload an image file."
    assert ai.calls == []


async def test_two_step_scan(client, ai, alice):
    ai.queue({"items": [
        {"make": "Pioneer", "model": "SX-780", "conditionDescription": "Scratched faceplate"},
        {"make": "Unknown", "model": "Unknown", "conditionDescription": "Speaker in the corner"},
    ]})

    scan = await client.post(
        "/api/items/wild-find-initial-scan",
        files={"image": _image()},
        headers=alice["headers"],
    )

    assert scan.status_code == 200
    assert scan.json()["message"] == "Initial scan complete. Please review and confirm the items."
    scanned = scan.json()["scannedItems"]
    assert [item["make"] for item in scanned] == ["Pioneer", "Unknown"]

    ai.queue(
        {"keyFeatures": ["45 W per channel"], "specifications": [{"name": "Power", "value": "45 W"}]},
        {"valueRange": "$350 - $500", "reasoning": "Common but sought after."},
    )
    detailed = await client.post(
        "/api/items/wild-find-detailed-analysis",
        json={"items": scanned},
        headers=alice["headers"],
    )

    assert detailed.status_code == 200
    body = detailed.json()
    assert body["message"] == "Detailed analysis complete."
    assert len(body["analyses"]) == 1
    assert body["analyses"][0]["valueRange"] == "$350 - $500"
    assert body["analyses"][0]["specifications"] == [{"name": "Power", "value": "45 W"}]


async def test_detailed_analysis_requires_items(client, alice):
    response = await client.post(
        "/api/items/wild-find-detailed-analysis",
        json={"items": []},
        headers=alice["headers"],
    )

    assert response.status_code == 400


async def test_ai_outage_is_reported_as_502(client, ai, alice):
    ai.queue("not json at all")

    response = await client.post(
        "/api/items/wild-find-initial-scan",
        files={"image": _image()},
        headers=alice["headers"],
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "ANALYSIS_UNAVAILABLE"


async def test_analyze_ad_listing(client, ai, storage, alice):
    ai.queue(
        {"items": [{"make": "Technics", "model": "SL-1200", "conditionDescription": "Clean platter"}]},
        {"extractedMake": "Technics", "extractedModel": "SL-1200MK2", "claimedCondition": "Excellent"},
        {"keyFeatures": ["Direct drive"], "specifications": []},
        {"valueRange": "$500 - $700", "reasoning": "Strong demand."},
        {"insight": "Below market.", "verdict": "Good Deal"},
    )

    response = await client.post(
        "/api/items/analyze-ad-listing",
        files={"adImage": _image("ad.png")},
        data={
            "adTitle": "Technics turntable",
            "adDescription": "MK2, works great",
            "adAskingPrice": "450",
            "adUrl": "https://ads.test/42",
        },
        headers=alice["headers"],
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Ad analysis complete."
    assert body["imageUrl"].startswith(f"{PUBLIC_BASE_URL}/wild-finds/")
    analysis = body["analysis"]
    assert analysis["identifiedModel"] == "SL-1200MK2"
    assert analysis["priceComparison"]["verdict"] == "Good Deal"
    assert analysis["originalAdInfo"] == {
        "adUrl": "https://ads.test/42",
        "adTitle": "Technics turntable",
        "adAskingPrice": 450.0,
    }
    assert len(storage.objects) == 1


@pytest.mark.parametrize("missing", ["adTitle", "adDescription", "adAskingPrice"])
async def test_analyze_ad_listing_requires_fields(client, ai, alice, missing):
    data = {"adTitle": "Receiver", "adDescription": "Works", "adAskingPrice": "100"}
    data.pop(missing)

    response = await client.post(
        "/api/items/analyze-ad-listing",
        files={"adImage": _image("ad.png")},
        data=data,
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert ai.calls == []


# ═══════════════════════════════════════════════════════════════════════════════
# OWNED ITEM EVALUATION
# ═══════════════════════════════════════════════════════════════════════════════


async def test_ai_evaluation_is_stored_on_the_item(client, ai, alice):
    item = await create_item(client, alice["headers"])
    ai.queue(
        {
            "description": "Mid-power receiver.",
            "productionDates": "1978-1980",
            "marketDesirability": "Medium",
            "estimatedValueUSD": "$300 - $450",
        },
        {"suggestions": [{"make": "Pioneer", "model": "PL-518", "reason": "Matching turntable"}]},
    )

    response = await client.patch(f"/api/items/{item['id']}/ai-evaluation", headers=alice["headers"])

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["aiValueInsight"]["estimatedValueUSD"] == "$300 - $450"
    assert body["aiValueInsight"]["disclaimer"].startswith("This is an automated estimate")
    assert body["aiSuggestions"]["suggestions"][0]["model"] == "PL-518"
    assert body["aiLastEvaluated"] is not None

    reread = await client.get(f"/api/items/{item['id']}", headers=alice["headers"])
    assert reread.json()["aiValueInsight"]["productionDates"] == "1978-1980"


async def test_ai_evaluation_by_non_owner_is_forbidden(client, ai, alice, bob):
    item = await create_item(client, alice["headers"])

    response = await client.patch(f"/api/items/{item['id']}/ai-evaluation", headers=bob["headers"])

    assert response.status_code == 403
    assert ai.calls == []


async def test_ai_rate_limit_is_429(client, ai, alice):
    item = await create_item(client, alice["headers"])
    throttled = httpx.Response(429, request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    ai.queue(openai.RateLimitError("Rate limit reached", response=throttled, body=None))

    response = await client.patch(f"/api/items/{item['id']}/ai-evaluation", headers=alice["headers"])

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
