"""Tests for the context store and layered option lookup."""

import pytest

from cmdkit.core import (
    ContextStore,
    RequestTimer,
    clear_context,
    context,
    get_context,
    get_option,
    get_option_list,
    set_context,
    set_option,
    set_options,
    unset_option,
)


class TestContextStore:
    def test_get_missing_key_stores_default(self):
        store = ContextStore()
        items = store.get("ITEMS", [])
        items.append("a")

        assert store.get("ITEMS") == ["a"]

    def test_last_write_wins(self):
        store = ContextStore()
        store.set("KEY", 1)
        store.set("KEY", 2)

        assert store.get("KEY") == 2

    def test_clear_removes_only_one_key(self):
        store = ContextStore()
        store.set("A", 1)
        store.set("B", 2)
        store.clear("A")

        assert not store.has("A")
        assert store.get("B") == 2

    def test_clear_missing_key_is_noop(self):
        store = ContextStore()
        store.clear("NOPE")
        assert store.snapshot() == {}

    def test_append_creates_list(self):
        store = ContextStore()
        store.append("LOG", 1)
        store.append("LOG", 2)

        assert store.get("LOG") == [1, 2]

    def test_snapshot_is_a_copy(self):
        store = ContextStore()
        store.set("A", 1)
        snap = store.snapshot()
        snap["A"] = 99

        assert store.get("A") == 1


class TestModuleHelpers:
    def test_set_and_get(self):
        assert set_context("MODE", "fast") == "fast"
        assert get_context("MODE") == "fast"

    def test_get_default(self):
        assert get_context("MISSING", 7) == 7

    def test_clear(self):
        set_context("MODE", "fast")
        clear_context("MODE")
        assert get_context("MODE") is None


class TestOptions:
    def test_default_when_unset(self):
        assert get_option("root", "/srv") == "/srv"

    def test_context_precedence(self):
        set_option("root", "/from/site", "site")
        set_option("root", "/from/cli", "cli")

        assert get_option("root") == "/from/cli"

        set_option("root", "/from/process")
        assert get_option("root") == "/from/process"

    def test_lookup_in_single_context(self):
        set_option("uri", "http://a", "cli")
        set_option("uri", "http://b", "user")

        assert get_option("uri", context_name="user") == "http://b"
        assert get_option("uri", "none", context_name="site") == "none"

    def test_false_value_is_found(self):
        set_option("strict", False, "cli")
        set_option("strict", True, "default")

        assert get_option("strict") is False

    def test_unset_in_one_context(self):
        set_option("user", "alice", "cli")
        set_option("user", "bob", "system")
        unset_option("user", "cli")

        assert get_option("user") == "bob"

    def test_unset_everywhere(self):
        set_option("user", "alice", "cli")
        set_option("user", "bob", "system")
        unset_option("user")

        assert get_option("user") is None

    def test_unknown_context_raises(self):
        with pytest.raises(ValueError):
            set_option("root", "/x", "nowhere")
        with pytest.raises(ValueError):
            get_option("root", context_name="nowhere")

    def test_option_list_splits_commas(self):
        set_option("include", "/a, /b,,/c")
        assert get_option_list("include") == ["/a", "/b", "/c"]

    def test_option_list_from_list_value(self):
        set_option("include", ["/a", " /b "])
        assert get_option_list("include") == ["/a", "/b"]

    def test_option_list_default(self):
        assert get_option_list("include", ["/x"]) == ["/x"]
        assert get_option_list("include") == []

    def test_set_options(self):
        set_options({"root": "/r", "uri": "http://u"}, "alias")
        assert get_option("root") == "/r"
        assert get_option("uri") == "http://u"

    def test_options_stored_in_context(self):
        set_option("root", "/r", "cli")
        assert context.get("OPTIONS")["cli"] == {"root": "/r"}


class TestRequestTimer:
    def test_elapsed_since_start(self):
        start = RequestTimer.start()
        assert RequestTimer.elapsed(start + 2.5) == pytest.approx(2.5)

    def test_started_lazily(self):
        assert not context.has("REQUEST_TIME")
        RequestTimer.started_at()
        assert context.has("REQUEST_TIME")
