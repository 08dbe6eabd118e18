"""
Unit tests for InMemoryFileRegistry.

Covers code allocation, lookups, quota accounting and concurrent access.
"""

import re
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from codedrop.domain.errors import FileNotFoundError, RegistryFullError
from codedrop.infrastructure.in_memory_file_registry import InMemoryFileRegistry
from tests.fixtures import make_record

CODE_PATTERN = re.compile(r"^[2-9A-HJ-NP-Z]{6}$")


def scripted_codes(*codes):
    """Code generator replaying the given codes, then repeating the last one."""
    remaining = list(codes)

    def generate():
        return remaining.pop(0) if len(remaining) > 1 else remaining[0]

    return generate


class TestCreate:
    def test_create_returns_valid_code(self, registry):
        code = registry.create(make_record())

        assert CODE_PATTERN.match(code)
        assert registry.lookup(code).code == code

    def test_create_stores_zero_count(self, registry):
        code = registry.create(make_record())
        assert registry.lookup(code).download_count == 0

    def test_create_retries_on_collision(self):
        registry = InMemoryFileRegistry(code_generator=scripted_codes("AAAAAA", "AAAAAA", "BBBBBB"))

        first = registry.create(make_record())
        second = registry.create(make_record(storage_path="blob-2.txt"))

        assert first == "AAAAAA"
        assert second == "BBBBBB"
        assert len(registry) == 2

    def test_create_gives_up_after_max_attempts(self):
        registry = InMemoryFileRegistry(code_generator=lambda: "AAAAAA", max_attempts=5)
        registry.create(make_record())

        with pytest.raises(RegistryFullError):
            registry.create(make_record(storage_path="blob-2.txt"))
        assert len(registry) == 1

    def test_many_creates_yield_distinct_codes(self, registry):
        codes = {registry.create(make_record(storage_path=f"b{i}")) for i in range(500)}
        assert len(codes) == 500


class TestLookup:
    def test_lookup_is_case_insensitive(self, registry):
        code = registry.create(make_record())
        assert registry.lookup(code.lower()).code == code

    def test_unknown_code_raises(self, registry):
        with pytest.raises(FileNotFoundError):
            registry.lookup("ABCDEF")

    @pytest.mark.parametrize("code", ["", "abc", "0OOOOO", "TOOLONG7"])
    def test_malformed_code_is_not_found(self, registry, code):
        with pytest.raises(FileNotFoundError):
            registry.lookup(code)

    def test_lookup_does_not_change_count(self, registry):
        code = registry.create(make_record())
        registry.lookup(code)
        registry.lookup(code)
        assert registry.lookup(code).download_count == 0


class TestRecordDownload:
    def test_unlimited_record_counts_up(self, registry):
        code = registry.create(make_record())

        first = registry.record_download(code)
        second = registry.record_download(code)

        assert first.record.download_count == 1
        assert second.record.download_count == 2
        assert not second.should_delete
        assert registry.lookup(code).download_count == 2

    def test_one_time_record_is_removed_on_first_download(self, registry):
        code = registry.create(make_record(max_downloads=1))

        ticket = registry.record_download(code)

        assert ticket.should_delete
        assert ticket.record.download_count == 1
        assert code not in registry
        with pytest.raises(FileNotFoundError):
            registry.lookup(code)

    def test_quota_of_three_removes_on_third(self, registry):
        code = registry.create(make_record(max_downloads=3))

        results = [registry.record_download(code).should_delete for _ in range(3)]

        assert results == [False, False, True]
        with pytest.raises(FileNotFoundError):
            registry.record_download(code)

    def test_unknown_code_raises(self, registry):
        with pytest.raises(FileNotFoundError):
            registry.record_download("ABCDEF")


class TestDelete:
    def test_delete_removes_record(self, registry):
        code = registry.create(make_record())

        assert registry.delete(code) is True
        assert code not in registry

    def test_delete_is_idempotent(self, registry):
        code = registry.create(make_record())
        registry.delete(code)

        assert registry.delete(code) is False
        assert registry.delete("ABCDEF") is False

    def test_delete_malformed_code_returns_false(self, registry):
        assert registry.delete("nope") is False


class TestSnapshot:
    def test_snapshot_is_a_copy(self, registry):
        code = registry.create(make_record())
        snapshot = registry.snapshot()
        registry.delete(code)

        assert len(snapshot) == 1
        assert registry.snapshot() == []

    def test_contains_rejects_non_strings(self, registry):
        assert 123 not in registry


class TestConcurrency:
    def test_one_time_file_is_served_exactly_once(self, registry):
        code = registry.create(make_record(max_downloads=1))
        barrier = threading.Barrier(16)

        def attempt():
            barrier.wait()
            try:
                return registry.record_download(code)
            except FileNotFoundError:
                return None

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: attempt(), range(16)))

        winners = [r for r in results if r is not None]
        assert len(winners) == 1
        assert winners[0].should_delete
        assert len(registry) == 0

    def test_concurrent_downloads_never_exceed_quota(self, registry):
        code = registry.create(make_record(max_downloads=5))

        def attempt(_):
            try:
                return registry.record_download(code)
            except FileNotFoundError:
                return None

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(40)))

        winners = [r for r in results if r is not None]
        assert len(winners) == 5
        assert sorted(r.record.download_count for r in winners) == [1, 2, 3, 4, 5]
        assert sum(1 for r in winners if r.should_delete) == 1

    def test_concurrent_creates_never_share_a_code(self, registry):
        with ThreadPoolExecutor(max_workers=8) as pool:
            codes = list(pool.map(
                lambda i: registry.create(make_record(storage_path=f"b{i}")), range(200)
            ))

        assert len(set(codes)) == 200
        assert len(registry) == 200
