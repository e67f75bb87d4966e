"""캐시 서비스 유닛 테스트 (Fake 시계 사용)"""
import pytest

from catalog_proxy.engine.params import normalize_params
from catalog_proxy.services import CacheEntry, CacheService, make_cache_key
from tests.fakes import FakeClock


@pytest.fixture
def cache(clock: FakeClock) -> CacheService:
    return CacheService(ttl_seconds=300, max_entries=100, clock=clock)


class TestCacheService:
    """캐시 서비스 테스트"""

    def test_get_miss(self, cache):
        """캐시 미스"""
        assert cache.get("unknown") is None

    def test_put_then_get(self, cache, clock):
        """저장 후 조회"""
        payload = {"data": [{"id": 1}], "nextPageCursor": None}
        cache.put("k", payload)

        entry = cache.get("k")
        assert isinstance(entry, CacheEntry)
        assert entry.payload is payload
        assert entry.created_at == clock.now

    def test_fresh_until_ttl(self, cache, clock):
        """TTL 직전까지 유효, TTL 시점부터 만료"""
        cache.put("k", {"v": 1})

        clock.advance(299)
        assert cache.get("k") is not None

        clock.advance(1)
        assert cache.get("k") is None

    def test_stale_entry_not_evicted_by_get(self, cache, clock):
        """만료 항목은 조회되지 않지만 삭제되지도 않음"""
        cache.put("k", {"v": 1})
        clock.advance(301)

        assert cache.get("k") is None
        assert cache.size == 1

    def test_put_overwrites_and_restamps(self, cache, clock):
        """같은 키 저장 시 덮어쓰기 + 시각 갱신"""
        cache.put("k", {"v": 1})
        clock.advance(200)
        cache.put("k", {"v": 2})
        clock.advance(200)

        entry = cache.get("k")
        assert entry is not None
        assert entry.payload == {"v": 2}
        assert cache.size == 1

    def test_entries_are_immutable(self, cache):
        entry = cache.put("k", {"v": 1})
        with pytest.raises(AttributeError):
            entry.payload = {"v": 2}

    def test_fifo_eviction_after_101_inserts(self, cache):
        """101번째 삽입 시 가장 먼저 삽입된 키 제거"""
        for i in range(101):
            cache.put(f"key-{i}", {"i": i})

        assert cache.size == 100
        assert cache.get("key-0") is None
        assert cache.get("key-1") is not None
        assert cache.get("key-100") is not None

    def test_eviction_ignores_freshness(self, cache, clock):
        """가장 오래 삽입된 항목이 제거됨 (신선도/조회 여부와 무관)"""
        cache.put("first", {"v": 0})
        clock.advance(10)
        for i in range(99):
            cache.put(f"key-{i}", {"i": i})
        # 조회해도 LRU처럼 순서가 바뀌지 않음
        assert cache.get("first") is not None

        cache.put("overflow", {"v": 1})

        assert cache.get("first") is None
        assert cache.get("key-0") is not None

    def test_overwrite_keeps_insertion_position(self, clock):
        """덮어쓴 키는 원래 삽입 위치를 유지"""
        cache = CacheService(ttl_seconds=300, max_entries=2, clock=clock)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("a", 3)
        cache.put("c", 4)

        assert cache.get("a") is None
        assert cache.get("b").payload == 2
        assert cache.get("c").payload == 4

    def test_clear(self, cache):
        """전체 삭제"""
        cache.put("a", 1)
        cache.put("b", 2)

        assert cache.clear() == 2
        assert cache.size == 0
        assert cache.get("a") is None

    def test_len_counts_stale_entries(self, cache, clock):
        cache.put("a", 1)
        clock.advance(400)
        assert len(cache) == 1
        assert cache.get("a") is None

    @pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"max_entries": 0}])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            CacheService(**kwargs)


class TestCacheKey:
    def test_key_is_compact_json(self):
        key = make_cache_key({"category": "11", "limit": "30"})
        assert key == '{"category":"11","limit":"30"}'

    def test_aggregate_mode_has_distinct_key(self):
        params = normalize_params({})
        assert make_cache_key(params) != make_cache_key(params, aggregate=True)

    def test_equivalent_queries_share_key(self):
        a = normalize_params({"limit": "45", "Category": "11"})
        b = normalize_params({"category": "11", "limit": "30"})
        assert make_cache_key(a) == make_cache_key(b)

    def test_extra_key_order_matters(self):
        """인식되지 않는 키의 순서가 다르면 다른 키 (알려진 제약)"""
        a = normalize_params({"keyword": "hat", "creator": "x"})
        b = normalize_params({"creator": "x", "keyword": "hat"})
        assert make_cache_key(a) != make_cache_key(b)

    def test_aggregate_key_ignores_cursor(self):
        """집계는 항상 첫 페이지부터 시작하므로 cursor가 달라도 같은 키"""
        a = normalize_params({"keyword": "hat", "cursor": "abc"})
        b = normalize_params({"keyword": "hat"})
        assert make_cache_key(a, aggregate=True) == make_cache_key(b, aggregate=True)
        assert '"cursor"' not in make_cache_key(a, aggregate=True)

    def test_single_page_key_keeps_cursor(self):
        a = normalize_params({"cursor": "abc"})
        b = normalize_params({})
        assert make_cache_key(a) != make_cache_key(b)
