"""Tests for synthesis phase monitoring."""

from __future__ import annotations

from petrisynth.verification.monitor import SYNTHESIS_TRANSITIONS, PhaseMonitor, SynthesisPhase


class TestPhaseMonitor:
    """Tests for PhaseMonitor."""

    def test_initial_phase(self):
        monitor = PhaseMonitor()
        assert monitor.current_phase == SynthesisPhase.INITIALIZED
        assert not monitor.is_finished
        assert monitor.get_history() == []

    def test_full_run(self):
        monitor = PhaseMonitor()
        for phase in (
            SynthesisPhase.ESSP,
            SynthesisPhase.SSP,
            SynthesisPhase.MINIMIZING,
            SynthesisPhase.DONE,
        ):
            assert monitor.transition(phase)
        assert monitor.is_finished
        assert monitor.get_invalid_transitions() == []
        assert [(a, b) for a, b, _ in monitor.get_history()][-1] == (
            SynthesisPhase.MINIMIZING,
            SynthesisPhase.DONE,
        )

    def test_language_equivalence_skips_ssp(self):
        monitor = PhaseMonitor()
        monitor.transition(SynthesisPhase.ESSP)
        assert monitor.transition(SynthesisPhase.MINIMIZING)

    def test_failure_from_any_working_phase(self):
        for phase, successors in SYNTHESIS_TRANSITIONS.items():
            if successors:
                assert SynthesisPhase.FAILED in successors, phase

    def test_invalid_transition_recorded(self, caplog):
        monitor = PhaseMonitor(name="test")
        assert not monitor.transition(SynthesisPhase.DONE)
        assert monitor.current_phase == SynthesisPhase.DONE
        assert monitor.get_invalid_transitions() == [
            (SynthesisPhase.INITIALIZED, SynthesisPhase.DONE)
        ]
        assert "invalid phase transition" in caplog.text

    def test_custom_transitions(self):
        transitions = {
            SynthesisPhase.INITIALIZED: {SynthesisPhase.DONE},
            SynthesisPhase.DONE: set(),
        }
        monitor = PhaseMonitor(valid_transitions=transitions)
        assert monitor.transition(SynthesisPhase.DONE)
        assert monitor.is_finished

    def test_history_timestamps_ordered(self):
        monitor = PhaseMonitor()
        monitor.transition(SynthesisPhase.ESSP)
        monitor.transition(SynthesisPhase.FAILED)
        timestamps = [t for _, _, t in monitor.get_history()]
        assert timestamps == sorted(timestamps)
