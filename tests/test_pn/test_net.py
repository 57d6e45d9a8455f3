"""Tests for Petri nets and their firing rule."""

from __future__ import annotations

import pytest

from petrisynth.pn.net import PetriNet


@pytest.fixture
def producer_consumer() -> PetriNet:
    """produce puts a token into buffer, consume takes two."""
    pn = PetriNet(name="producer-consumer")
    pn.add_place("buffer")
    pn.add_place("ready", initial_tokens=1)
    pn.add_transition("produce")
    pn.add_transition("consume")
    pn.add_flow("ready", "produce")
    pn.add_flow("produce", "ready")
    pn.add_flow("produce", "buffer")
    pn.add_flow("buffer", "consume", weight=2)
    return pn


class TestPetriNetStructure:
    """Tests for building a PetriNet."""

    def test_generated_place_ids(self):
        pn = PetriNet()
        assert pn.add_place().id == "p0"
        assert pn.add_place().id == "p1"

    def test_transition_label_defaults_to_id(self):
        pn = PetriNet()
        assert pn.add_transition("t").label == "t"
        assert pn.add_transition("u", label="a").label == "a"

    def test_duplicate_node(self):
        pn = PetriNet()
        pn.add_place("x")
        with pytest.raises(ValueError):
            pn.add_transition("x")

    def test_flow_needs_existing_nodes(self):
        pn = PetriNet()
        pn.add_place("p")
        with pytest.raises(KeyError):
            pn.add_flow("p", "t")

    def test_flow_between_places_rejected(self):
        pn = PetriNet()
        pn.add_place("p")
        pn.add_place("q")
        with pytest.raises(ValueError):
            pn.add_flow("p", "q")

    def test_flow_weight_positive(self):
        pn = PetriNet()
        pn.add_place("p")
        pn.add_transition("t")
        with pytest.raises(ValueError):
            pn.add_flow("p", "t", weight=0)

    def test_duplicate_flow(self):
        pn = PetriNet()
        pn.add_place("p")
        pn.add_transition("t")
        pn.add_flow("p", "t")
        with pytest.raises(ValueError):
            pn.add_flow("p", "t", weight=2)

    def test_presets_and_postsets(self, producer_consumer):
        pn = producer_consumer
        assert pn.preset("produce") == {"ready"}
        assert pn.postset("produce") == {"ready", "buffer"}
        assert pn.postset("buffer") == {"consume"}
        assert pn.get_flow_weight("buffer", "consume") == 2
        assert pn.get_flow_weight("consume", "buffer") == 0

    def test_lookup(self, producer_consumer):
        assert producer_consumer.get_place("ready").initial_tokens == 1
        assert producer_consumer.get_transition("consume").label == "consume"

    def test_initial_marking_in_place_order(self, producer_consumer):
        assert producer_consumer.initial_marking == (0, 1)


class TestFiring:
    """Tests for the firing rule."""

    def test_enabled(self, producer_consumer):
        pn = producer_consumer
        assert pn.enabled_transitions(pn.initial_marking) == ["produce"]

    def test_fire(self, producer_consumer):
        pn = producer_consumer
        marking = pn.fire(pn.initial_marking, "produce")
        assert marking == (1, 1)
        marking = pn.fire(marking, "produce")
        assert pn.is_enabled(marking, "consume")
        assert pn.fire(marking, "consume") == (0, 1)

    def test_fire_disabled(self, producer_consumer):
        pn = producer_consumer
        with pytest.raises(ValueError):
            pn.fire(pn.initial_marking, "consume")
