async def test_list_lines_with_machines(client, make_machine):
    await make_machine(machine_id="M1", code="B-2", name="Beta", line_id="L1")
    await make_machine(machine_id="M2", code="A-1", name="Alpha", line_id="L1")
    await make_machine(machine_id="M3", code="C-1", name="Gamma", line_id="L2")

    resp = await client.get("/production-lines")
    assert resp.status_code == 200
    lines = resp.json()
    assert [line["id"] for line in lines] == ["L1", "L2"]
    assert [m["name"] for m in lines[0]["machines"]] == ["Alpha", "Beta"]
    assert lines[0]["isActive"] is True


async def test_line_detail_includes_annotations(client, machine, user):
    await client.post("/annotations", json={
        "type": "ARROW", "content": {"points": [0, 0, 10, 10]}, "machineId": "M1", "userId": "U1",
    })

    resp = await client.get("/production-lines/L1")
    assert resp.status_code == 200
    machines = resp.json()["machines"]
    assert machines[0]["annotations"][0]["type"] == "ARROW"


async def test_unknown_line(client):
    resp = await client.get("/production-lines/nope")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Production line nope not found"}
