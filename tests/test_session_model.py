from __future__ import annotations

import pytest

from breathwork.session.model import (
    GET_READY_SEC,
    Phase,
    PhaseName,
    SessionConfig,
    build_cycle,
    format_round,
    format_seconds,
)


def test_build_cycle_fixed_order_and_verbatim_durations() -> None:
    config = SessionConfig(inhale_sec=6, hold1_sec=5, exhale_sec=8, hold2_sec=4, rounds=10)

    cycle = build_cycle(config)

    assert [phase.name for phase in cycle] == [
        PhaseName.INHALE,
        PhaseName.HOLD,
        PhaseName.EXHALE,
        PhaseName.HOLD,
    ]
    assert [phase.duration_sec for phase in cycle] == [6, 5, 8, 4]


def test_zero_duration_phases_are_skipped() -> None:
    cycle = build_cycle(SessionConfig(1, 0, 1, 0, rounds=2))

    assert [phase.skipped for phase in cycle] == [False, True, False, True]


def test_all_zero_durations_are_accepted() -> None:
    config = SessionConfig(0, 0, 0, 0, rounds=3)

    assert all(phase.skipped for phase in build_cycle(config))
    assert config.total_duration_sec == GET_READY_SEC


def test_session_config_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        SessionConfig(-1, 0, 1, 0, rounds=1)
    with pytest.raises(ValueError):
        SessionConfig(1, 0, 1, 0, rounds=0)
    with pytest.raises(ValueError):
        Phase(PhaseName.INHALE, -2)


def test_display_formats() -> None:
    assert format_round(2, 5) == "Round 2 of 5"
    assert format_seconds(7) == "7s"
    assert format_seconds(0) == "0s"
