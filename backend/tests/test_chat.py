from datetime import timedelta
from factoryops.database import async_session, utcnow
from factoryops.models import ChatMessage
from factoryops.models.enums import EventType
from factoryops.realtime import chat as chat_socket
from conftest import fetch_events


async def add_messages(count: int, machine_id: str = "M1", user_id: str = "U1"):
    base = utcnow() - timedelta(hours=1)
    async with async_session() as db:
        for i in range(count):
            db.add(ChatMessage(
                content=f"message {i}",
                machine_id=machine_id,
                user_id=user_id,
                created_at=base + timedelta(minutes=i),
            ))
        await db.commit()


async def test_send_message_broadcasts_to_chat_room(machine, user, socket_io):
    ack = await chat_socket.send_message("sid-a", {"content": "Oil pressure low", "machineId": "M1", "userId": "U1"})

    assert ack["content"] == "Oil pressure low"
    assert ack["user"]["name"] == "Joao Silva"

    socket_io.emit.assert_awaited_once()
    args, kwargs = socket_io.emit.call_args
    assert args[0] == "newMessage"
    assert args[1]["id"] == ack["id"]
    assert kwargs["room"] == "chat:M1"
    assert kwargs["namespace"] == "/chat"

    events = await fetch_events(EventType.MESSAGE_SENT)
    assert len(events) == 1
    assert events[0].machine_id == "M1"
    assert events[0].user_id == "U1"


async def test_send_empty_message_is_rejected(machine, user, socket_io):
    ack = await chat_socket.send_message("sid-a", {"content": "", "machineId": "M1", "userId": "U1"})
    assert "error" in ack
    socket_io.emit.assert_not_awaited()


async def test_join_chat_sends_history_to_joiner_only(machine, user, socket_io):
    await add_messages(3)

    ack = await chat_socket.join_machine_chat("sid-a", {"machineId": "M1", "userId": "U1"})
    assert ack == {"joined": "M1"}

    socket_io.enter_room.assert_awaited_once_with("sid-a", "chat:M1", namespace="/chat")
    args, kwargs = socket_io.emit.call_args
    assert args[0] == "chatHistory"
    assert [m["content"] for m in args[1]] == ["message 0", "message 1", "message 2"]
    assert kwargs["to"] == "sid-a"
    assert "room" not in kwargs

    connected = await fetch_events(EventType.USER_CONNECTED)
    assert len(connected) == 1
    assert connected[0].user_id == "U1"
    assert socket_io.sessions[("sid-a", "/chat")] == {"userId": "U1", "machineIds": ["M1"]}


async def test_history_is_capped(machine, user, socket_io, settings, monkeypatch):
    monkeypatch.setattr(settings, "chat_history_limit", 2)
    await add_messages(5)

    await chat_socket.join_machine_chat("sid-a", {"machineId": "M1"})

    history = socket_io.emit.call_args.args[1]
    assert [m["content"] for m in history] == ["message 3", "message 4"]
    # No user, no connection event
    assert await fetch_events(EventType.USER_CONNECTED) == []


async def test_disconnect_writes_event_per_joined_chat(make_machine, user, socket_io):
    await make_machine(machine_id="M1", code="PH-001")
    await make_machine(machine_id="M2", code="PH-002")
    await chat_socket.join_machine_chat("sid-a", {"machineId": "M1", "userId": "U1"})
    await chat_socket.join_machine_chat("sid-a", {"machineId": "M2", "userId": "U1"})

    await chat_socket.disconnect("sid-a")

    events = await fetch_events(EventType.USER_DISCONNECTED)
    assert sorted(e.machine_id for e in events) == ["M1", "M2"]


async def test_disconnect_without_user_is_quiet(socket_io):
    await chat_socket.disconnect("sid-z")
    assert await fetch_events() == []


async def test_typing_is_relayed_to_the_room(socket_io):
    await chat_socket.user_typing("sid-a", {"machineId": "M1", "userName": "Joao Silva"})

    socket_io.emit.assert_awaited_once_with(
        "userTyping",
        {"machineId": "M1", "userName": "Joao Silva"},
        room="chat:M1",
        namespace="/chat",
    )


async def test_leave_chat(socket_io):
    assert await chat_socket.leave_machine_chat("sid-a", "M1") == {"left": "M1"}
    socket_io.leave_room.assert_awaited_once_with("sid-a", "chat:M1", namespace="/chat")


async def test_rest_history_latest_messages_in_order(client, machine, user):
    await add_messages(4)

    resp = await client.get("/chat/machine/M1", params={"limit": 2})
    assert resp.status_code == 200
    assert [m["content"] for m in resp.json()] == ["message 2", "message 3"]
    assert resp.json()[-1]["user"]["username"] == "op.silva"


async def test_leave_then_disconnect_audits_once(machine, user, socket_io):
    await chat_socket.join_machine_chat("sid-a", {"machineId": "M1", "userId": "U1"})

    await chat_socket.leave_machine_chat("sid-a", "M1")
    assert len(await fetch_events(EventType.USER_DISCONNECTED)) == 1
    assert socket_io.sessions[("sid-a", "/chat")]["machineIds"] == []

    await chat_socket.disconnect("sid-a")
    assert len(await fetch_events(EventType.USER_DISCONNECTED)) == 1


async def test_disconnect_skips_deleted_machine(client, make_machine, user, socket_io):
    await make_machine(machine_id="M1", code="PH-001")
    await make_machine(machine_id="M2", code="PH-002")
    await chat_socket.join_machine_chat("sid-a", {"machineId": "M1", "userId": "U1"})
    await chat_socket.join_machine_chat("sid-a", {"machineId": "M2", "userId": "U1"})
    assert (await client.delete("/machines/M2")).status_code == 200

    await chat_socket.disconnect("sid-a")

    events = await fetch_events(EventType.USER_DISCONNECTED)
    assert [e.machine_id for e in events] == ["M1"]
