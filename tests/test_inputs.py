"""
Tests for synthetic patterns and the presentation schedule.
"""

from collections import Counter

import numpy as np

from inputs import build_schedule, frame, make_patterns


class TestPatterns:

    def test_shape_and_labels(self):
        patterns = make_patterns(5, 20, 0.25, np.random.default_rng(0))
        assert list(patterns) == ["0", "1", "2", "3", "4"]
        for vec in patterns.values():
            assert vec.shape == (20,)
            assert vec.sum() == 5
            assert set(np.unique(vec)) <= {0.0, 1.0}

    def test_overlap_limit(self):
        patterns = list(make_patterns(3, 40, 0.1, np.random.default_rng(1), max_overlap=0).values())
        for i in range(3):
            for j in range(i + 1, 3):
                assert float(patterns[i] @ patterns[j]) == 0.0

    def test_at_least_one_channel_on(self):
        patterns = make_patterns(2, 4, 0.01, np.random.default_rng(0))
        assert all(vec.sum() == 1 for vec in patterns.values())

    def test_frame_is_clipped(self):
        pattern = np.array([1.0, 0.0, 1.0, 0.0])
        out = frame(pattern, 0.2, np.random.default_rng(3))
        assert np.all(out[[0, 2]] == 1.0)
        assert np.all((out[[1, 3]] >= 0.0) & (out[[1, 3]] < 0.2))


class TestSchedule:

    def test_rest_between_patterns(self):
        segments = build_schedule(["a", "b", "c"], 4, 2, 2, np.random.default_rng(0))
        assert len(segments) == 13
        assert segments[0]["kind"] == "rest"
        assert segments[-1]["kind"] == "rest"
        shown = Counter(s["label"] for s in segments if s["kind"] == "pattern")
        assert shown == {"a": 2, "b": 2, "c": 2}
        assert all(s["cycles"] == 4 for s in segments if s["kind"] == "pattern")

    def test_no_rest(self):
        segments = build_schedule(["a", "b"], 3, 0, 1, np.random.default_rng(0))
        assert [s["kind"] for s in segments] == ["pattern", "pattern"]
