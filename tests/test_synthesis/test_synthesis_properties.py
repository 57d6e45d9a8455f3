"""Tests for PNProperties, SynthesisOptions and synthesis events."""

from __future__ import annotations

import logging

import pytest

from petrisynth.synthesis.events import EventSink, SynthesisEvent, SynthesisEventKind
from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties


class TestPNProperties:
    """Tests for PNProperties."""

    def test_defaults(self):
        properties = PNProperties()
        assert properties.is_empty
        assert not properties.is_k_bounded
        assert not properties.is_safe
        assert str(properties) == "[]"

    def test_k_bounded(self):
        properties = PNProperties(k_bounded=1)
        assert properties.is_k_bounded
        assert properties.is_safe
        assert not properties.is_empty

    def test_positive_bound(self):
        with pytest.raises(ValueError):
            PNProperties(k_bounded=0)

    def test_copies(self):
        properties = PNProperties().with_k_bounded(3).with_pure().with_plain()
        assert properties == PNProperties(pure=True, plain=True, k_bounded=3)

    def test_str(self):
        properties = PNProperties(k_bounded=1, pure=True, conflict_free=True)
        assert str(properties) == "[safe, pure, conflict-free]"
        assert str(PNProperties(k_bounded=4, t_net=True)) == "[4-bounded, tnet]"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", PNProperties()),
            ("none", PNProperties()),
            ("safe", PNProperties(k_bounded=1)),
            ("3-bounded", PNProperties(k_bounded=3)),
            ("pure, plain", PNProperties(pure=True, plain=True)),
            ("Safe PURE", PNProperties(k_bounded=1, pure=True)),
            ("t-net", PNProperties(t_net=True)),
            ("on,cf", PNProperties(output_nonbranching=True, conflict_free=True)),
            (
                "output-nonbranching conflict-free",
                PNProperties(output_nonbranching=True, conflict_free=True),
            ),
        ],
    )
    def test_parse(self, text, expected):
        assert PNProperties.parse(text) == expected

    def test_parse_round_trip(self):
        properties = PNProperties(k_bounded=2, plain=True, t_net=True)
        assert PNProperties.parse(str(properties).strip("[]")) == properties

    @pytest.mark.parametrize("text", ["shiny", "0-bounded", "bounded"])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            PNProperties.parse(text)


class TestSynthesisOptions:
    """Tests for SynthesisOptions validation."""

    def test_defaults(self):
        options = SynthesisOptions()
        assert not options.quick_fail
        assert options.verify
        assert options.max_separation_problems is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_weight": 0},
            {"max_plain_events": -1},
            {"max_separation_problems": -1},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SynthesisOptions(**kwargs)


class TestEventSink:
    """Tests for EventSink."""

    def test_forwards_to_observer(self):
        received: list[SynthesisEvent] = []
        sink = EventSink(received.append)
        sink.emit(SynthesisEventKind.FAILURE, "cannot separate", states=("s0", "s1"))
        assert received == [
            SynthesisEvent(
                kind=SynthesisEventKind.FAILURE,
                message="cannot separate",
                data={"states": ("s0", "s1")},
            )
        ]

    def test_without_observer(self, caplog):
        sink = EventSink()
        with caplog.at_level(logging.DEBUG, logger="petrisynth.synthesis.events"):
            sink.emit(SynthesisEventKind.PHASE, "Entering phase essp")
        assert "Entering phase essp" in caplog.text

    def test_observer_errors_logged(self, caplog):
        def observer(event: SynthesisEvent) -> None:
            raise TypeError("bad observer")

        sink = EventSink(observer)
        with caplog.at_level(logging.ERROR, logger="petrisynth.synthesis.events"):
            sink.emit(SynthesisEventKind.BASIS, "basis")
        assert "bad observer" in caplog.text
