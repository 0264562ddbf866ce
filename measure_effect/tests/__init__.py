'''
Measure Effect Backend Test Suite

Test Modules:
-------------
- test_rate_calculator.py: rate formula, zero-call policies, formatting
- test_daily_aggregator.py: per-day buckets, sentinels, chart datasets
- test_revision_classifier.py: all field combinations
- test_comparator.py: windows, targets, pre/post diff
- test_monthly_summary.py: fixed windows, sorting, failure isolation
- test_client_detail.py: drill-down payload, aggregates, fatal failures
- test_data_source.py / test_sql_queries.py: PostgreSQL read contracts
- test_webhook_proxy.py: n8n forwarding
- test_config.py / test_database.py: settings and pool lifecycle
- test_api.py: HTTP contracts of all endpoints

Running Tests:
--------------
    pip install -e ".[test]"
    pytest measure_effect/tests -v

See conftest.py for shared fixtures and the in-memory data source.
'''

__all__ = []
