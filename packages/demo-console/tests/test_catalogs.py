"""Tests that every bundled catalog runs through the Dispatcher."""

import pytest

from demo_console.catalogs import CATALOGS, build_catalog
from demo_console.catalogs import threads
from demo_console.dispatcher import Dispatcher, header_line
from demo_console.sink import LogSink

# Demos that fail on purpose to show the failure diagnostic.
EXPECTED_FAILURES = {("sugar", "late_init")}


def _run_all(catalog_name: str) -> tuple[list[str], list[str]]:
    catalog = build_catalog(catalog_name)
    sink = LogSink()
    dispatcher = Dispatcher(catalog.registry, sink)
    ids = [entry.id for entry in catalog.registry.entries()]
    try:
        for demo_id in ids:
            dispatcher.run(demo_id)
    finally:
        catalog.close()
    return ids, sink.current_snapshot().contents


class TestCatalogRegistry:
    """Tests for the catalog table."""

    def test_known_catalogs(self):
        assert set(CATALOGS) == {"references", "threads", "sugar"}

    def test_unknown_catalog_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown catalog"):
            build_catalog("nope")

    @pytest.mark.parametrize("name", sorted(CATALOGS))
    def test_catalog_registries_are_frozen(self, name):
        catalog = build_catalog(name)
        try:
            assert catalog.name == name
            assert catalog.registry.frozen
            assert len(catalog.registry) > 0
            assert catalog.greeting
        finally:
            catalog.close()


class TestCatalogDemos:
    """Every demo writes its header and output; only expected demos fail."""

    @pytest.mark.parametrize("name", sorted(CATALOGS))
    def test_all_demos_run(self, name):
        ids, contents = _run_all(name)

        for demo_id in ids:
            assert header_line(demo_id) in contents
        failures = {
            (name, demo_id)
            for demo_id in ids
            if f"demo '{demo_id}' failed" in "\n".join(contents)
        }
        assert failures == {f for f in EXPECTED_FAILURES if f[0] == name}

    def test_late_init_keeps_output_before_failure(self):
        _, contents = _run_all("sugar")

        start = contents.index(header_line("late_init"))
        tail = contents[start:]
        assert "message: Hello, late init!" in tail
        assert tail[-1].startswith("demo 'late_init' failed:")
        assert "message" in tail[-1]

    def test_print_output_is_captured(self):
        """The delegation demo prints through a wrapped logger."""
        _, contents = _run_all("sugar")

        assert "hello from the wrapped logger" in contents

    def test_lazy_property_computes_once(self):
        _, contents = _run_all("sugar")

        assert contents.count("computing (once only)") == 1


class TestThreadScenarios:
    """Worker output from the thread catalog."""

    def _run(self, demo_id: str) -> list[str]:
        catalog = threads.build_catalog(work_seconds=0.01)
        sink = LogSink()
        Dispatcher(catalog.registry, sink).run(demo_id)
        catalog.close()
        return sink.current_snapshot().contents

    def test_close_waits_for_workers(self):
        """After close() every submitted task has reported."""
        contents = self._run("fixed_pool")

        done = [line for line in contents if "done on" in line]
        assert len(done) == 4

    def test_manual_threads_are_joined(self):
        contents = self._run("manual_threads")

        done = [line for line in contents if "done on manual-thread-" in line]
        assert len(done) == 3

    def test_single_thread_executor_keeps_order(self):
        contents = self._run("single_thread")

        done = [line.strip() for line in contents if "done on" in line]
        assert [line.split(" done")[0] for line in done] == ["write 1", "write 2", "write 3"]
        assert len({line.split(" on ")[1] for line in done}) == 1

    def test_header_is_first_line(self):
        """Worker lines only ever follow the scenario header."""
        contents = self._run("cached_pool")

        assert contents[0] == header_line("cached_pool")

    def test_close_is_idempotent(self):
        catalog = threads.build_catalog(work_seconds=0)
        catalog.close()
        catalog.close()
