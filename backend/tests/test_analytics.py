from factoryops.models.enums import MachineStatus


async def test_status_distribution(client, make_machine):
    await make_machine(machine_id="M1", code="A-1", status=MachineStatus.NORMAL)
    await make_machine(machine_id="M2", code="A-2", status=MachineStatus.NORMAL)
    await make_machine(machine_id="M3", code="A-3", status=MachineStatus.FAILURE)
    await make_machine(machine_id="M4", code="A-4", status=MachineStatus.WARNING)

    resp = await client.get("/analytics/status-distribution")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 4
    by_status = {s["status"]: s for s in body["statuses"]}
    assert by_status["NORMAL"] == {"status": "NORMAL", "count": 2, "percentage": 50.0}
    assert by_status["FAILURE"]["count"] == 1
    assert by_status["MAINTENANCE"] == {"status": "MAINTENANCE", "count": 0, "percentage": 0.0}


async def test_status_distribution_empty(client):
    body = (await client.get("/analytics/status-distribution")).json()
    assert body["total"] == 0
    assert all(s["percentage"] == 0.0 for s in body["statuses"])


async def test_downtime_summary(client, make_machine, user):
    await make_machine(machine_id="M1", code="A-1")
    await make_machine(machine_id="M2", code="A-2")
    for machine_id, start, end in (
        ("M1", "2024-01-01T08:00:00Z", "2024-01-01T09:00:00Z"),
        ("M1", "2024-01-02T08:00:00Z", "2024-01-02T08:30:00Z"),
        ("M1", "2024-01-03T08:00:00Z", None),
        ("M2", "2024-01-01T10:00:00Z", "2024-01-01T10:10:00Z"),
    ):
        payload = {"machineId": machine_id, "reason": "Jam", "startTime": start, "userId": "U1"}
        if end:
            payload["endTime"] = end
        assert (await client.post("/downtimes", json=payload)).status_code == 201

    body = (await client.get("/analytics/downtime-summary")).json()
    assert body["downtimeCount"] == 4
    assert body["totalMinutes"] == 100
    first = body["machines"][0]
    assert first["machineId"] == "M1"
    assert first["closedCount"] == 2
    assert first["openCount"] == 1
    assert first["totalMinutes"] == 90
    assert first["mttrMinutes"] == 45.0

    only_m2 = (await client.get("/analytics/downtime-summary", params={"machineId": "M2"})).json()
    assert only_m2["machineId"] == "M2"
    assert [m["machineId"] for m in only_m2["machines"]] == ["M2"]
    assert only_m2["totalMinutes"] == 10
