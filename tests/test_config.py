"""Tests for Settings validation and settings-driven wiring."""

import pytest
from pydantic import ValidationError

from condo_metrics.config import Settings
from condo_metrics.core.stay import PairedStay, PlaceholderStay
from condo_metrics.main import build_aggregator, build_stay_estimator


class TestSettings:
    def test_defaults(self) -> None:
        cfg = Settings(_env_file=None)
        assert cfg.week_days == 7
        assert cfg.month_days == 30
        assert cfg.top_visitors_limit == 5

    def test_unknown_timezone_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(timezone="Mars/Olympus_Mons")

    def test_non_positive_window_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(week_days=0)

    def test_stay_strategy_case_insensitive(self) -> None:
        assert Settings(stay_strategy="PAIRED").stay_strategy == "paired"

    def test_unknown_stay_strategy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(stay_strategy="guess")

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONDO_TIMEZONE", "America/Bogota")
        assert Settings().timezone == "America/Bogota"


class TestWiring:
    def test_placeholder_estimator(self) -> None:
        est = build_stay_estimator(Settings(stay_placeholder_minutes=30))
        assert isinstance(est, PlaceholderStay)
        assert est.estimate([]) == 30

    def test_paired_estimator(self) -> None:
        est = build_stay_estimator(Settings(stay_strategy="paired"))
        assert isinstance(est, PairedStay)

    def test_aggregator_uses_configured_timezone(self) -> None:
        agg = build_aggregator(Settings(timezone="America/Bogota"))
        assert agg.timezone.key == "America/Bogota"
