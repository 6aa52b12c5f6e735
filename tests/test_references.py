"""Unit tests for reference resolution."""

import asyncio
import unittest

from mission_control.services.references import (
    AGENT_UNKNOWN,
    ARSENAL_UNKNOWN,
    ARSENAL_UNNAMED,
    EVENT_LOAD_ERROR,
    EVENT_NOT_FOUND,
    EVENT_UNNAMED,
    resolve_agent_names,
    resolve_arsenal_names,
    resolve_event_names,
)
from tests.fakes import FakeFirestore


class _GatedReference:
    """Reference whose lookup only completes once every sibling has started."""

    def __init__(self, path: str, started: list, gate: asyncio.Event, expected: int) -> None:
        self.path = path
        self.started = started
        self.gate = gate
        self.expected = expected

    async def get(self):
        self.started.append(self.path)
        if len(self.started) == self.expected:
            self.gate.set()
        await asyncio.wait_for(self.gate.wait(), timeout=1.0)
        return _NamedSnapshot(self.path)


class _NamedSnapshot:
    exists = True

    def __init__(self, name: str) -> None:
        self.name = name

    def to_dict(self):
        return {"eventName": self.name}


class TestResolveReferences(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.store = FakeFirestore()
        self.wedding = self.store.seed("events", "e1", {"eventName": "Wedding"})
        self.debut = self.store.seed("events", "e2", {"eventName": "Debut"})

    async def test_labels_keep_input_order_and_length(self) -> None:
        missing = self.store.ref("events", "gone")
        labels = await resolve_event_names([self.debut, missing, self.wedding, self.debut])

        self.assertEqual(labels, ["Debut", EVENT_NOT_FOUND, "Wedding", "Debut"])

    async def test_repeated_references_are_fetched_each_time(self) -> None:
        await resolve_event_names([self.wedding, self.wedding])

        self.assertEqual(self.store.lookups.count("events/e1"), 2)

    async def test_failed_lookup_does_not_abort_siblings(self) -> None:
        self.store.failing_paths.add("events/e1")

        labels = await resolve_event_names([self.wedding, self.debut])

        self.assertEqual(labels, [EVENT_LOAD_ERROR, "Debut"])

    async def test_event_without_name(self) -> None:
        unnamed = self.store.seed("events", "e3", {"location": "Hall"})

        self.assertEqual(await resolve_event_names([unnamed]), [EVENT_UNNAMED])

    async def test_non_reference_entry_counts_as_failed(self) -> None:
        labels = await resolve_event_names(["events/e1", self.wedding])

        self.assertEqual(labels, [EVENT_LOAD_ERROR, "Wedding"])

    async def test_empty_list(self) -> None:
        self.assertEqual(await resolve_event_names([]), [])

    async def test_agent_labels(self) -> None:
        ana = self.store.seed("agents", "a1", {"firstName": "Ana", "lastName": "Cruz", "role": "agent"})
        nameless = self.store.seed("agents", "a2", {"role": "agent"})
        broken = self.store.seed("agents", "a3", {"firstName": "Ben", "lastName": "Lim"})
        self.store.failing_paths.add(broken.path)

        labels = await resolve_agent_names([ana, self.store.ref("agents", "x"), nameless, broken])

        self.assertEqual(labels, ["Ana Cruz", AGENT_UNKNOWN, AGENT_UNKNOWN, AGENT_UNKNOWN])

    async def test_numeric_names_become_text(self) -> None:
        numbered = self.store.seed("events", "e4", {"eventName": 50})
        agent = self.store.seed("agents", "a4", {"firstName": "Ana", "lastName": 2})

        self.assertEqual(await resolve_event_names([numbered]), ["50"])
        self.assertEqual(await resolve_agent_names([agent]), ["Ana 2"])

    async def test_arsenal_labels(self) -> None:
        camera = self.store.seed("arsenal", "c1", {"name": "Canon R6", "type": "camera"})
        unnamed = self.store.seed("arsenal", "c2", {"type": "camera"})

        labels = await resolve_arsenal_names([camera, unnamed, self.store.ref("arsenal", "gone")])

        self.assertEqual(labels, ["Canon R6", ARSENAL_UNNAMED, ARSENAL_UNKNOWN])

    async def test_lookups_run_concurrently(self) -> None:
        """Each lookup waits for the others to start; a sequential resolver would time out."""
        started: list = []
        gate = asyncio.Event()
        refs = [_GatedReference(f"events/g{i}", started, gate, expected=3) for i in range(3)]

        labels = await resolve_event_names(refs)

        self.assertEqual(labels, ["events/g0", "events/g1", "events/g2"])


if __name__ == "__main__":
    unittest.main()
