from __future__ import annotations

from hempaction.models import CampaignStats
from hempaction.stats import StatsAggregator


def test_refresh_reads_campaign_stats_view(db, user_row):
    db.insert("email_actions", {"user_id": user_row["id"], "lawmaker_id": "lm", "email_subject": "s", "email_body": "b"})
    aggregator = StatsAggregator(db)
    assert aggregator.loading

    stats = aggregator.refresh()

    assert stats == CampaignStats(total_users=1, total_emails=1)
    assert not aggregator.loading
    assert aggregator.error is None
    assert aggregator.has_data


def test_failed_refresh_keeps_previous_counts(db, user_row):
    aggregator = StatsAggregator(db)
    aggregator.refresh()

    db.fail("campaign_stats", "select")
    stats = aggregator.refresh()

    assert stats.total_users == 1
    assert aggregator.stats.total_users == 1
    assert aggregator.error
    assert aggregator.has_data


def test_recovery_clears_error(db, user_row):
    aggregator = StatsAggregator(db)
    db.fail("campaign_stats", "select", times=1)

    aggregator.refresh()
    assert aggregator.error and not aggregator.has_data

    stats = aggregator.refresh()
    assert aggregator.error is None
    assert stats.total_users == 1


def test_progress_percent_is_capped():
    assert CampaignStats(total_users=100, total_emails=400).progress_percent(1000) == 50.0
    assert CampaignStats(total_users=40000, total_emails=40000).progress_percent() == 100.0
    assert CampaignStats().total_actions == 0


def test_sessions_keep_independent_snapshots(db, user_row):
    first = StatsAggregator(db)
    second = StatsAggregator(db)
    first.refresh()
    second.refresh()

    db.fail("campaign_stats", "select", times=1)
    first.refresh()
    second.refresh()

    assert first.error and first.stats.total_users == 1
    assert second.error is None
    assert second.stats.total_users == 1
