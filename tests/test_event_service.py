"""Unit tests for EventBoardService."""

import unittest

from mission_control.models import EventUpdate, Viewer
from mission_control.models.event import EPOCH
from mission_control.services import ChatStore, EventBoardService, RecordNotFound, StoreError, ValidationFailed
from mission_control.services.events import MISSING_FIELDS_MESSAGE
from mission_control.services.references import AGENT_UNKNOWN, ARSENAL_UNKNOWN
from tests.fakes import FakeFirestore, FakeRealtimeDatabase

ADMIN = Viewer(id="boss", role="admin")
ANA = Viewer(id="a1", role="agent")


class TestEventBoardService(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.store = FakeFirestore()
        self.realtime = FakeRealtimeDatabase()
        self.service = EventBoardService(self.store, ChatStore(self.realtime.reference), tz_name="UTC")
        self.today = self.service.today()

        self.ana = self.store.seed("agents", "a1", {"firstName": "Ana", "lastName": "Cruz", "role": "agent"})
        self.ben = self.store.seed("agents", "a2", {"firstName": "Ben", "lastName": "Lim", "role": "agent"})
        self.camera = self.store.seed("arsenal", "c1", {"name": "Canon R6", "type": "camera"})

        self.store.seed("events", "ev-ana", {
            "eventName": "Wedding", "eventDate": self.today, "isArchive": False,
            "agents": [self.ana, self.ben], "arsenal": [self.camera],
        })
        self.store.seed("events", "ev-ben", {
            "eventName": "Debut", "eventDate": self.today, "isArchive": False,
            "agents": [self.ben], "arsenal": [],
        })
        self.store.seed("events", "ev-archived", {
            "eventName": "Old Party", "eventDate": self.today, "isArchive": True, "agents": [self.ana],
        })
        self.store.seed("events", "ev-later", {
            "eventName": "Birthday", "eventDate": "2999-01-01", "isArchive": False, "agents": [self.ana],
        })

    async def test_admin_sees_all_active_events_today(self) -> None:
        events = await self.service.fetch(ADMIN)

        self.assertEqual({event.id for event in events}, {"ev-ana", "ev-ben"})

    async def test_agent_sees_only_assigned_events(self) -> None:
        events = await self.service.fetch(ANA)

        self.assertEqual([event.id for event in events], ["ev-ana"])
        for event in events:
            self.assertIn("a1", event.agent_ids)

    async def test_agent_with_no_assignments_sees_nothing(self) -> None:
        self.assertEqual(await self.service.fetch(Viewer(id="a9", role="agent")), [])

    async def test_fetch_for_explicit_day(self) -> None:
        events = await self.service.fetch(ADMIN, on="2999-01-01")

        self.assertEqual([event.event_name for event in events], ["Birthday"])

    async def test_references_resolved_to_names(self) -> None:
        (event,) = await self.service.fetch(ANA)

        self.assertEqual(event.agent_names, ["Ana Cruz", "Ben Lim"])
        self.assertEqual(event.arsenal_names, ["Canon R6"])
        self.assertEqual(event.arsenal_ids, ["c1"])

    async def test_dangling_references_use_sentinels(self) -> None:
        self.store.seed("events", "ev-dangling", {
            "eventName": "Gala", "eventDate": self.today, "isArchive": False,
            "agents": [self.store.ref("agents", "gone")], "arsenal": [self.store.ref("arsenal", "gone")],
        })

        events = {event.id: event for event in await self.service.fetch(ADMIN)}

        self.assertEqual(events["ev-dangling"].agent_names, [AGENT_UNKNOWN])
        self.assertEqual(events["ev-dangling"].arsenal_names, [ARSENAL_UNKNOWN])

    async def test_missing_fields_get_defaults(self) -> None:
        self.store.seed("events", "ev-sparse", {"eventDate": self.today, "isArchive": False})

        events = {event.id: event for event in await self.service.fetch(ADMIN)}
        sparse = events["ev-sparse"]

        self.assertEqual(sparse.event_name, "Unnamed Event")
        self.assertEqual(sparse.location, "")
        self.assertEqual(sparse.sd_card_count, 0)
        self.assertEqual(sparse.agent_names, [])
        self.assertEqual(sparse.date_added, EPOCH)
        self.assertFalse(sparse.is_archive)

    async def test_fetch_failure_raises_store_error(self) -> None:
        self.store.fail_queries = True

        with self.assertRaises(StoreError):
            await self.service.fetch(ADMIN)

    async def test_create_requires_name_and_date(self) -> None:
        before = set(self.store.ids_in("events"))

        for name, day in (("", self.today), ("Wedding", ""), ("", "")):
            with self.assertRaises(ValidationFailed) as ctx:
                await self.service.create(name, day)
            self.assertEqual(ctx.exception.message, MISSING_FIELDS_MESSAGE)

        self.assertEqual(self.store.ids_in("events"), before)
        self.assertEqual(self.realtime.data, {})

    async def test_create_rejects_malformed_date(self) -> None:
        with self.assertRaises(ValidationFailed):
            await self.service.create("Wedding", "next friday")

    async def test_create_writes_event_and_chat_root(self) -> None:
        before = set(self.store.ids_in("events"))

        event_id = await self.service.create("Christmas Party", self.today)

        self.assertEqual(self.store.ids_in("events") - before, {event_id})
        stored = self.store.docs[f"events/{event_id}"]
        self.assertEqual(stored["eventName"], "Christmas Party")
        self.assertEqual(stored["eventDate"], self.today)
        self.assertEqual(stored["agents"], [])
        self.assertEqual(stored["sdCardCount"], 0)
        self.assertFalse(stored["isArchive"])

        self.assertEqual(list(self.realtime.data), [f"/chats/{event_id}"])
        chat = self.realtime.data[f"/chats/{event_id}"]
        self.assertEqual(chat["info"]["name"], "Christmas Party")
        self.assertIsInstance(chat["info"]["createdAt"], int)
        self.assertEqual(chat["messages"], {})

    async def test_created_event_shows_on_board(self) -> None:
        event_id = await self.service.create("Christmas Party", self.today)

        self.assertIn(event_id, {event.id for event in await self.service.fetch(ADMIN)})

    async def test_chat_failure_surfaces_as_store_error(self) -> None:
        self.realtime.fail = True

        with self.assertRaises(StoreError):
            await self.service.create("Christmas Party", self.today)

    async def test_get(self) -> None:
        event = await self.service.get("ev-ana")

        self.assertEqual(event.event_name, "Wedding")
        self.assertIsNone(await self.service.get("missing"))

    async def test_get_hides_unassigned_events_from_agents(self) -> None:
        self.assertIsNone(await self.service.get("ev-ben", ANA))
        self.assertEqual((await self.service.get("ev-ana", ANA)).id, "ev-ana")
        self.assertEqual((await self.service.get("ev-ben", ADMIN)).id, "ev-ben")

    async def test_agent_cannot_update_unassigned_event(self) -> None:
        with self.assertRaises(RecordNotFound):
            await self.service.update("ev-ben", EventUpdate(location="Somewhere"), ANA)

        self.assertNotIn("location", self.store.docs["events/ev-ben"])

    async def test_agent_updates_assigned_event(self) -> None:
        event = await self.service.update("ev-ana", EventUpdate(notes="Bring tripod"), ANA)

        self.assertEqual(event.notes, "Bring tripod")

    async def test_off_type_fields_do_not_break_the_board(self) -> None:
        self.store.seed("events", "ev-messy", {
            "eventName": 2024, "eventDate": self.today, "isArchive": False,
            "contactNumber": 9171234567, "sdCardCount": "lots", "batteryCount": "4",
            "notes": None, "agents": [self.ana],
        })

        events = {event.id: event for event in await self.service.fetch(ADMIN)}
        messy = events["ev-messy"]

        self.assertEqual(messy.event_name, "2024")
        self.assertEqual(messy.contact_number, "9171234567")
        self.assertEqual(messy.sd_card_count, 0)
        self.assertEqual(messy.battery_count, 4)
        self.assertEqual(messy.notes, "")
        self.assertIn("ev-ana", events)

    async def test_update_changes_only_given_fields(self) -> None:
        event = await self.service.update(
            "ev-ben", EventUpdate(location="Manila Hotel", sd_card_count=4)
        )

        self.assertEqual(event.location, "Manila Hotel")
        self.assertEqual(event.sd_card_count, 4)
        self.assertEqual(event.event_name, "Debut")

    async def test_update_rejects_blank_name(self) -> None:
        with self.assertRaises(ValidationFailed):
            await self.service.update("ev-ben", EventUpdate(event_name=" "))

    async def test_update_missing_event(self) -> None:
        with self.assertRaises(RecordNotFound):
            await self.service.update("missing", EventUpdate(location="x"))

    async def test_archive_hides_event_from_board(self) -> None:
        await self.service.archive("ev-ben")

        self.assertTrue(self.store.docs["events/ev-ben"]["isArchive"])
        self.assertEqual([event.id for event in await self.service.fetch(ADMIN)], ["ev-ana"])

    async def test_delete(self) -> None:
        await self.service.delete("ev-ben")

        self.assertNotIn("ev-ben", self.store.ids_in("events"))


if __name__ == "__main__":
    unittest.main()
