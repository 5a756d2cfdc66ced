import pytest
from chomsky.errors import *
from chomsky.grammar import *
from chomsky.derivation import *
from chomsky.history import HistoryStore

# S -> бA, A -> б, A -> ъ
G1 = Grammar(("б",), ("S", "A"),
             ( ProductionRule("S", "бA"),
               ProductionRule("A", "б"),
               ProductionRule("A", "ъ") ))

# S -> AA, A -> бA, A -> в, B -> в   (B is never reachable)
G2 = Grammar(("б", "в"), ("S", "A", "B"),
             ( ProductionRule("S", "AA"),
               ProductionRule("A", "бA"),
               ProductionRule("B", "в"),
               ProductionRule("A", "в") ))

# no rule for S
G3 = Grammar(("б",), ("S", "A"), ( ProductionRule("A", "б"), ))

def engine(grammar):
    return DerivationEngine(grammar, HistoryStore())

def results(e):
    return [ s.result for s in e.steps ]

def test_leftmost_only_rewrite():
    step = applyRule("AA", ProductionRule("A", "бA"), 1)
    assert step.result == "бAA"
    assert step.ruleIndex == 2

def test_epsilon_collapse():
    assert applyRule("бAв", ProductionRule("A", "ъ"), 0).result == "бв"

def test_rule_not_applicable():
    with pytest.raises(RuleNotApplicable):
        applyRule("бв", ProductionRule("A", "б"), 0)

def test_is_completed_depends_only_on_result():
    assert not isCompleted(G1, "S")
    assert not isCompleted(G1, "бA")
    assert isCompleted(G1, "бб")
    assert isCompleted(G1, "")
    # a letter outside the grammar's non-terminals does not block completion
    assert isCompleted(G1, "бQ")

def test_available_rules_ordering():
    choices = availableRules(G2, "бAв")
    assert [ c.index for c in choices ] == [1, 3, 0, 2]
    assert [ c.available for c in choices ] == [True, True, False, False]
    assert choices[0].ordinal == 2
    assert choices[0].label == "2"

def test_available_rules_stuck_grammar():
    assert not any(c.available for c in availableRules(G3, "S"))

def test_end_to_end():
    e = engine(G1)
    assert results(e) == ["S"]
    assert e.steps[0].ruleIndex is None
    e.apply(0)
    assert e.steps[-1] == DerivationStep("бA", 1)
    assert not e.completed()
    e.apply(2)
    assert e.steps[-1] == DerivationStep("б", 3)
    assert e.completed()
    assert len(e.store) == 1
    saved = list(e.store)[0]
    assert saved.finalWord == "б"
    assert [ s.result for s in saved.steps ] == ["S", "бA", "б"]

def test_apply_after_completion_is_rejected():
    e = engine(G1)
    e.apply(0)
    e.apply(1)
    with pytest.raises(RuleNotApplicable):
        e.apply(1)
    assert results(e) == ["S", "бA", "бб"]

def test_apply_unavailable_rule_leaves_history():
    e = engine(G1)
    with pytest.raises(RuleNotApplicable):
        e.apply(1)
    assert results(e) == ["S"]

def test_apply_out_of_range():
    e = engine(G1)
    with pytest.raises(RuleNotApplicable):
        e.apply(3)
    with pytest.raises(RuleNotApplicable):
        e.apply(-1)
    assert results(e) == ["S"]

def test_is_derivation_of():
    e = engine(G1)
    e.apply(0)
    e.apply(2)
    assert isDerivationOf(G1, e.steps)
    assert isDerivationOf(G1, [DerivationStep("S")])
    assert not isDerivationOf(G1, [])
    assert not isDerivationOf(G1, [DerivationStep("бA", 1)])
    assert not isDerivationOf(G1, [DerivationStep("S"), DerivationStep("ZZZ", 42)])
    assert not isDerivationOf(G1, [DerivationStep("S"), DerivationStep("бA", 2)])
    assert not isDerivationOf(G1, [DerivationStep("S"), DerivationStep("бб", 1)])
    assert not isDerivationOf(G1, [DerivationStep("S"), DerivationStep("S")])

def test_undo_inverse():
    e = engine(G2)
    for i in (0, 1, 1, 3):
        e.apply(i)
    before = list(e.steps[:-1])
    e.undo()
    assert e.steps == before
    assert e.choices() == availableRules(G2, before[-1].result)

def test_undo_from_completed():
    e = engine(G1)
    e.apply(0)
    e.apply(2)
    assert e.completed()
    e.undo()
    assert not e.completed()
    assert not e.store.completed
    assert e.current == "бA"

def test_nothing_to_undo():
    e = engine(G1)
    with pytest.raises(NothingToUndo):
        e.undo()
    assert results(e) == ["S"]

def test_reset():
    e = engine(G1)
    e.apply(0)
    e.apply(1)
    e.reset()
    assert results(e) == ["S"]
    assert not e.completed()
    assert len(e.store) == 1

def test_dedup_identical_derivations():
    e = engine(G1)
    for _ in range(2):
        e.reset()
        e.apply(0)
        e.apply(2)
    assert len(e.store) == 1

def test_different_paths_to_same_word_are_kept():
    # S -> бA, S -> бB, A -> ъ, B -> ъ
    g = Grammar(("б",), ("S", "A", "B"),
                ( ProductionRule("S", "бA"), ProductionRule("S", "бB"),
                  ProductionRule("A", "ъ"),  ProductionRule("B", "ъ") ))
    e = engine(g)
    e.apply(0); e.apply(2)
    e.reset()
    e.apply(1); e.apply(3)
    assert [ s.finalWord for s in e.store ] == ["б", "б"]

def test_undo_and_reapply_completes_once():
    e = engine(G1)
    e.apply(0)
    e.apply(1)
    e.undo()
    e.apply(1)
    assert len(e.store) == 1

@pytest.mark.parametrize("n,label", [(1, "1"), (9, "9"), (10, "A"), (35, "Z"), (36, None), (0, None), (99, None)])
def test_ordinal_label(n, label):
    assert ordinalLabel(n) == label

@pytest.mark.parametrize("key,ordinal", [
    ("1", 1), ("9", 9), ("A", 10), ("a", 10), ("z", 35), ("Z", 35),
    ("0", None), ("ı", None), ("Б", None), ("Enter", None), ("", None), (" ", None),
])
def test_key_to_ordinal(key, ordinal):
    assert keyToOrdinal(key) == ordinal

def test_apply_key():
    e = engine(G1)
    assert e.applyKey("2") is None      # A -> б not available yet
    assert e.applyKey("7") is None      # beyond the rule count
    assert e.applyKey("x") is None
    assert results(e) == ["S"]
    assert e.applyKey("1") == DerivationStep("бA", 1)
    assert e.applyKey("3") == DerivationStep("б", 3)
    assert e.applyKey("1") is None

def test_stuck_grammar_is_not_an_error():
    e = engine(G3)
    assert e.applyKey("1") is None
    assert not e.completed()
    assert results(e) == ["S"]

def test_step_rule_index_is_one_based():
    with pytest.raises(ValueError):
        DerivationStep("S", 0)
