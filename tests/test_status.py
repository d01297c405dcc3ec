#!/usr/bin/env python3
"""Tests for Status enum and classifier."""

import pytest

from motocare import Status, classify, presentation_hint


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.CRITICAL.value < Status.WARNING.value
        assert Status.WARNING.value < Status.GOOD.value

    def test_labels(self):
        assert Status.CRITICAL.label == "Critical"
        assert Status.WARNING.label == "Warning"
        assert Status.GOOD.label == "Good"


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize("percentage", [0, -5])
    def test_critical_at_or_below_zero(self, percentage):
        assert classify(percentage) == Status.CRITICAL

    @pytest.mark.parametrize("percentage", [0.01, 10, 25])
    def test_warning_up_to_and_including_25(self, percentage):
        assert classify(percentage) == Status.WARNING

    @pytest.mark.parametrize("percentage", [25.01, 50, 100])
    def test_good_above_25(self, percentage):
        assert classify(percentage) == Status.GOOD


class TestPresentationHint:
    """Tests for presentation_hint."""

    def test_hints(self):
        assert presentation_hint(Status.CRITICAL) == "red"
        assert presentation_hint(Status.WARNING) == "amber"
        assert presentation_hint(Status.GOOD) == "emerald"
