"""Shipment Routes — HTTP contract for lifecycle operations and queries.

Tests cover:
    - POST /shipments → 201 with record + initial log sequence
    - domain errors mapped to 400 / 403 / 404 / 409 envelopes
    - missing X-Principal → 400 validation envelope
    - GET /shipments/{id} → {"shipment": null} for unknown ids
"""

OWNER_HEADERS = {"X-Principal": "registry-owner"}
SHIPPER_HEADERS = {"X-Principal": "shipper"}
RECEIVER_HEADERS = {"X-Principal": "pharmacy"}
CARRIER_HEADERS = {"X-Principal": "carrier"}

VACCINES = {
    "shipment_id": "S1",
    "destination": "pharmacy",
    "product_type": "Vaccines",
    "min_temp": 2,
    "max_temp": 8,
    "initial_temp": 5,
}


async def _create(client, **overrides):
    return await client.post(
        "/api/v1/shipments", json={**VACCINES, **overrides}, headers=SHIPPER_HEADERS,
    )


async def test_create_shipment_returns_201(client):
    res = await _create(client)
    assert res.status_code == 201
    body = res.json()
    assert body["shipment"]["status"] == "created"
    assert body["shipment"]["quality_score"] == 100
    assert body["shipment"]["origin"] == "shipper"
    assert body["initial_log_sequence"] == 1


async def test_create_uses_supplied_logical_timestamp(client):
    res = await client.post(
        "/api/v1/shipments", json=VACCINES,
        headers={**SHIPPER_HEADERS, "X-Logical-Timestamp": "4242"},
    )
    assert res.json()["shipment"]["created_at"] == 4242


async def test_create_requires_principal(client):
    res = await client.post("/api/v1/shipments", json=VACCINES)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_rejects_oversized_identifier(client):
    res = await _create(client, shipment_id="X" * 65)
    assert res.status_code == 400


async def test_create_duplicate_returns_409(client):
    await _create(client)
    res = await _create(client)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_EXISTS"


async def test_create_invalid_range_returns_400(client):
    res = await _create(client, min_temp=9)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_RANGE"


async def test_create_invalid_initial_temperature_returns_400(client):
    res = await _create(client, initial_temp=-1)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TEMPERATURE"


async def test_get_unknown_shipment_returns_null(client):
    res = await client.get("/api/v1/shipments/ghost")
    assert res.status_code == 200
    assert res.json() == {"shipment": None}


async def test_status_of_unknown_shipment_returns_404(client):
    res = await client.get("/api/v1/shipments/ghost/status")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_transfer_and_status(client):
    await _create(client)
    res = await client.post(
        "/api/v1/shipments/S1/transfer",
        json={"new_handler": "carrier"}, headers=SHIPPER_HEADERS,
    )
    assert res.status_code == 200
    assert res.json()["status"] == "in-transit"

    status_res = await client.get("/api/v1/shipments/S1/status")
    assert status_res.json()["current_handler"] == "carrier"


async def test_transfer_by_non_handler_returns_403(client):
    await _create(client)
    res = await client.post(
        "/api/v1/shipments/S1/transfer",
        json={"new_handler": "carrier"}, headers=CARRIER_HEADERS,
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "NOT_AUTHORIZED"


async def test_complete_by_non_destination_returns_403_and_keeps_state(client):
    await _create(client)
    res = await client.post("/api/v1/shipments/S1/complete", headers=CARRIER_HEADERS)
    assert res.status_code == 403
    shipment = (await client.get("/api/v1/shipments/S1")).json()["shipment"]
    assert shipment["status"] == "created"


async def test_complete_returns_final_quality(client):
    await _create(client)
    res = await client.post("/api/v1/shipments/S1/complete", headers=RECEIVER_HEADERS)
    assert res.status_code == 200
    assert res.json() == {"shipment_id": "S1", "final_quality_score": 100}

    again = await client.post("/api/v1/shipments/S1/complete", headers=RECEIVER_HEADERS)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_COMPLETED"


async def test_report_emergency_and_history(client):
    await _create(client)
    res = await client.post(
        "/api/v1/shipments/S1/emergency",
        json={"emergency_type": "power_failure", "description": "Reefer down"},
        headers=SHIPPER_HEADERS,
    )
    assert res.status_code == 201
    assert res.json()["status"] == "emergency"

    history = (await client.get("/api/v1/shipments/S1/emergencies")).json()
    assert len(history) == 1
    assert history[0]["reporter"] == "shipper"
    assert history[0]["previous_status"] == "created"


async def test_quality_and_compliance_queries(client):
    await _create(client)
    quality = (await client.get("/api/v1/shipments/S1/quality")).json()
    assert quality == {
        "shipment_id": "S1",
        "quality_score": 100,
        "breach_count": 0,
        "status": "created",
        "assessment": "excellent",
    }
    compliance = (await client.get("/api/v1/shipments/S1/compliance")).json()
    assert compliance["compliant"] is True


async def test_post_delivery_emergency_does_not_reopen_shipment(client):
    await _create(client)
    await client.post("/api/v1/shipments/S1/complete", headers=RECEIVER_HEADERS)
    res = await client.post(
        "/api/v1/shipments/S1/emergency",
        json={"emergency_type": "recall", "description": "Batch failed potency test"},
        headers=SHIPPER_HEADERS,
    )
    assert res.status_code == 201

    transfer = await client.post(
        "/api/v1/shipments/S1/transfer",
        json={"new_handler": "thief"}, headers=SHIPPER_HEADERS,
    )
    assert transfer.status_code == 409
    assert transfer.json()["error"]["code"] == "ALREADY_COMPLETED"

    again = await client.post("/api/v1/shipments/S1/complete", headers=RECEIVER_HEADERS)
    assert again.status_code == 409

    shipment = (await client.get("/api/v1/shipments/S1")).json()["shipment"]
    assert shipment["status"] == "emergency"
    assert shipment["current_handler"] == "shipper"
    assert shipment["completed_at"] is not None


async def test_blank_principal_rejected(client):
    res = await client.post(
        "/api/v1/shipments", json=VACCINES, headers={"X-Principal": "   "},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_principal_header_is_stripped(client):
    res = await client.post(
        "/api/v1/shipments", json=VACCINES, headers={"X-Principal": " shipper "},
    )
    assert res.status_code == 201
    assert res.json()["shipment"]["origin"] == "shipper"


async def test_blank_emergency_type_rejected(client):
    await _create(client)
    res = await client.post(
        "/api/v1/shipments/S1/emergency",
        json={"emergency_type": "  ", "description": "Reefer down"},
        headers=SHIPPER_HEADERS,
    )
    assert res.status_code == 400
    status = (await client.get("/api/v1/shipments/S1/status")).json()
    assert status["status"] == "created"
