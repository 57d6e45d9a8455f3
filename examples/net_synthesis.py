"""Net Synthesis -- Regions of Transition Systems.

Demonstrates SynthesizePN on solvable and unsolvable transition systems and
the search for minimal words that no safe net can generate.
"""

from petrisynth import (
    PNProperties,
    SynthesizePN,
    find_words,
    lts_from_arcs,
    reachability_graph,
    word_to_lts,
)

# =============================================================
# Synthesize a net for two concurrent events
# =============================================================
print("=== Concurrent Events ===")

diamond = lts_from_arcs(
    [
        ("s0", "a", "s1"),
        ("s0", "b", "s2"),
        ("s1", "b", "s3"),
        ("s2", "a", "s3"),
    ],
    name="diamond",
)
synthesis = SynthesizePN(diamond, PNProperties.parse("safe, pure"))
pn = synthesis.synthesize_petri_net()

for place in pn.places:
    region = synthesis.place_regions[place.id]
    print(f"  {place.id} ({place.initial_tokens} tokens): {region}")

graph = reachability_graph(pn)
print(f"Reachability graph: {graph.lts.num_states} markings")

# =============================================================
# A system no net can generate
# =============================================================
print("\n=== Parikh-Equivalent States ===")

# ab and ba reach different states, but every marking only depends on how
# often each event fired
conflict = lts_from_arcs(
    [
        ("s0", "a", "s1"),
        ("s1", "b", "s2"),
        ("s0", "b", "s3"),
        ("s3", "a", "s4"),
    ],
    name="conflict",
)
synthesis = SynthesizePN(conflict)
print(f"Separated: {synthesis.was_successfully_separated()}")
for group in synthesis.failed_state_separation_problems:
    print(f"  Unseparable states: {sorted(group)}")

# The language alone is still solvable
language = SynthesizePN.for_language_equivalence(conflict)
print(f"Language solvable: {language.was_successfully_separated()}")

# =============================================================
# Bounded nets for words
# =============================================================
print("\n=== Words ===")

for properties in ("safe", "2-bounded"):
    synthesis = SynthesizePN(word_to_lts("aa"), PNProperties.parse(properties))
    essp = synthesis.failed_event_state_separation_problems
    print(f"  aa as {properties} net: {synthesis.was_successfully_separated()} {essp or ''}")

result = find_words("safe", "unsolvable", "ab", max_length=4)
print(f"Minimal unsolvable safe words: {result.unsolvable}")
for level in result.levels:
    print(f"  length {level.length}: {level.solvable} solvable, {level.unsolvable} unsolvable")

print("\nNet synthesis complete.")
