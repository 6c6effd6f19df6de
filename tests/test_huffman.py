import itertools
import random

import pytest

from huffstep.engine import PRESET_TEXTS
from huffstep.errors import InvalidInputError
from huffstep.frequency import FrequencyEntry, count_frequencies
from huffstep.huffman import (
    advance_step,
    build_tree,
    current_forest,
    generate_codes,
    is_finished,
    is_prefix_free,
    iter_nodes,
    leaves,
    remaining_steps,
    run_to_completion,
    same_shape,
    start_session,
    tree_depth,
    weighted_path_length,
)


def best_wpl(weights):
    # Mínimo sobre todos los órdenes de fusión posibles
    if len(weights) == 1:
        return 0
    best = None
    for i, j in itertools.combinations(range(len(weights)), 2):
        rest = [w for k, w in enumerate(weights) if k not in (i, j)]
        s = weights[i] + weights[j]
        cost = s + best_wpl(rest + [s])
        if best is None or cost < best:
            best = cost
    return best


def test_scenario_tree_shape():
    root = build_tree(count_frequencies("AAAAABBBCC"))
    assert root.weight == 10
    assert root.left.is_leaf and root.left.symbol == "A"
    inner = root.right
    assert inner.weight == 5
    assert inner.left.symbol == "C"
    assert inner.right.symbol == "B"
    # A (id 2) gana el empate de peso 5 frente al nodo fusionado (id 3)
    assert root.left.node_id == 2 and inner.node_id == 3 and root.node_id == 4


def test_scenario_codes():
    codes = generate_codes(build_tree(count_frequencies("AAAAABBBCC")))
    assert codes == {"A": "0", "C": "10", "B": "11"}


def test_single_symbol():
    root = build_tree([FrequencyEntry("x", 4)])
    assert root.is_leaf and root.weight == 4
    assert generate_codes(root) == {"x": "0"}
    assert tree_depth(root) == 1
    assert weighted_path_length(root) == 0


def test_empty_entries_rejected():
    with pytest.raises(InvalidInputError):
        build_tree([])
    with pytest.raises(InvalidInputError):
        start_session([])


def test_duplicate_entries_rejected():
    with pytest.raises(InvalidInputError):
        build_tree([FrequencyEntry("a", 1), FrequencyEntry("a", 1)])


def test_full_binary_tree():
    root = build_tree(count_frequencies("THE QUICK BROWN FOX"))
    for n in iter_nodes(root):
        if n.is_leaf:
            assert n.right is None
        else:
            assert n.left is not None and n.right is not None
            assert n.weight == n.left.weight + n.right.weight


@pytest.mark.parametrize("seed", range(20))
def test_optimal_against_brute_force(seed):
    rng = random.Random(seed)
    n = rng.randint(2, 5)
    entries = [FrequencyEntry(chr(97 + i), rng.randint(1, 20)) for i in range(n)]
    root = build_tree(entries)
    assert weighted_path_length(root) == best_wpl([e.count for e in entries])


@pytest.mark.parametrize("text", PRESET_TEXTS + ["AAAAABBBCC", "ab", "mississippi"])
def test_prefix_property(text):
    codes = generate_codes(build_tree(count_frequencies(text)))
    assert set(codes) == set(text)
    assert is_prefix_free(codes)
    for a, b in itertools.permutations(codes.values(), 2):
        assert not b.startswith(a)


def test_is_prefix_free_detects_violation():
    assert not is_prefix_free({"a": "0", "b": "01"})
    assert not is_prefix_free({"a": "10", "b": "10"})
    assert is_prefix_free({"a": "0", "b": "10", "c": "11"})


def test_deterministic():
    entries = count_frequencies("ABRACADABRA")
    assert same_shape(build_tree(entries), build_tree(entries))


@pytest.mark.parametrize("text", PRESET_TEXTS + ["AAAAABBBCC", "aabbccdd", "z"])
def test_incremental_matches_eager(text):
    entries = count_frequencies(text)
    eager = build_tree(entries)
    stepped = run_to_completion(start_session(entries))
    assert same_shape(eager, stepped)
    assert [n.node_id for n in iter_nodes(eager)] == [n.node_id for n in iter_nodes(stepped)]


def test_session_steps():
    s0 = start_session(count_frequencies("AAAAABBBCC"))
    assert not is_finished(s0)
    assert remaining_steps(s0) == 2
    assert [n.symbol for n in current_forest(s0)] == ["C", "B", "A"]

    s1 = advance_step(s0)
    # advance_step no modifica la sesión original
    assert len(s0.candidates) == 3 and s0.steps == 0
    assert s1.steps == 1 and s1.finished is None
    assert s1.last_step.left.symbol == "C"
    assert s1.last_step.right.symbol == "B"
    assert s1.last_step.parent.weight == 5
    assert [n.weight for n in current_forest(s1)] == [5, 5]

    s2 = advance_step(s1)
    assert is_finished(s2)
    assert s2.candidates == ()
    assert s2.finished.weight == 10
    assert len(s2.history) == 2
    assert current_forest(s2) == [s2.finished]
    assert advance_step(s2) is s2


def test_session_single_entry_finishes_immediately():
    s = start_session([FrequencyEntry("q", 3)])
    assert is_finished(s)
    assert s.candidates == ()
    assert s.finished.symbol == "q"
    assert remaining_steps(s) == 0


def test_session_invariant_holds_every_step():
    s = start_session(count_frequencies("THE QUICK BROWN FOX"))
    n = len(s.candidates)
    while not is_finished(s):
        assert s.finished is None and len(s.candidates) >= 2
        s = advance_step(s)
    assert s.steps == n - 1
    assert len(leaves(s.finished)) == n


def test_advance_settles_single_candidate_session():
    from huffstep.huffman import BuildSession, HuffNode

    leaf = HuffNode(3, 0, symbol="k")
    s = advance_step(BuildSession(candidates=(leaf,), next_id=1))
    assert s.finished is leaf
    assert s.candidates == ()
    assert s.steps == 0
