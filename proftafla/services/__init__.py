from .cache_controller import CacheController
from .stats_aggregator import StatsAggregator, compute_stats
from .tests_fetcher import TestsFetcher
