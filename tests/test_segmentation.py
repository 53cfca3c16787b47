import io
import os
import unittest

from morfessor_mdl import CostModel, MorfessorIO, Morph, SegmentationTree, \
    SplitNode
from morfessor_mdl.baseline import get_mode_flags
from morfessor_mdl.exception import InvariantViolation, MorphNotFoundError

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')
THRESHOLD = 1e-4


def read_corpus(name):
    return list(MorfessorIO(encoding='utf-8').read_corpus_list_file(os.path.join(DATA_DIR, name)))


def rescore(tree, recompute_letters=False):
    """Score the leaves of a tree with a fresh model of the same mode"""
    if recompute_letters:
        return SegmentationTree.from_corpus(tree.get_morphs(), mode=tree.mode)
    explicit_frequency, explicit_length = get_mode_flags(tree.mode)
    model = CostModel(tree.get_letter_costs(),
                      explicit_frequency=explicit_frequency,
                      explicit_length=explicit_length)
    fresh = SegmentationTree(model)
    for morph in tree.get_morphs():
        fresh.emplace(morph.letters, morph.frequency)
    return fresh


def letter_mass(tree):
    return sum(morph.frequency * morph.length for morph in tree.get_morphs())


class SegmentationTreeTestCase(unittest.TestCase):
    def assertCostsEqual(self, first, second):
        for name, value in first.items():
            self.assertAlmostEqual(value, second[name], delta=THRESHOLD, msg=name)


class NodeStoreTests(SegmentationTreeTestCase):
    def test_emplace_and_lookup(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        self.assertTrue(tree.contains("reopen"))
        self.assertIn("reopen", tree)
        self.assertEqual(tree.size(), 1)
        self.assertEqual(tree.at("reopen"), SplitNode(1))
        self.assertEqual(tree.tokens, 1)
        self.assertEqual(tree.types, 1)

    def test_at_absent_morph(self):
        tree = SegmentationTree()
        with self.assertRaises(MorphNotFoundError) as cm:
            tree.at("reopen")
        self.assertIsInstance(cm.exception, KeyError)
        self.assertEqual(cm.exception.morph, "reopen")

    def test_emplace_rejects_existing_and_empty_morphs(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        with self.assertRaises(InvariantViolation):
            tree.emplace("reopen", 2)
        with self.assertRaises(InvariantViolation):
            tree.emplace("", 2)
        with self.assertRaises(InvariantViolation):
            tree.emplace("redo", 0)
        self.assertEqual(tree.at("reopen").count, 1)

    def test_iteration_is_sorted(self):
        tree = SegmentationTree()
        tree.emplace("trying", 4)
        tree.emplace("reopen", 1)
        self.assertEqual([morph for morph, _ in tree], ["reopen", "trying"])


class SplitTests(SegmentationTreeTestCase):
    def test_split(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        tree.split("reopen", 2)
        self.assertEqual(tree.size(), 3)
        self.assertEqual(tree.at("reopen"), SplitNode(1, "re", "open"))
        self.assertEqual(tree.at("re"), SplitNode(1))
        self.assertEqual(tree.at("open"), SplitNode(1))
        self.assertEqual(tree.get_morphs(), [Morph("open", 1), Morph("re", 1)])
        self.assertEqual(tree.segment("reopen"), ["re", "open"])

    def test_split_merges_shared_parts(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 10)
        tree.emplace("redo", 7)
        tree.split("reopen", 2)
        tree.split("redo", 2)
        self.assertEqual(tree.at("re").count, 17)
        self.assertEqual(tree.tokens, 34)
        self.assertEqual(tree.types, 3)

    def test_split_merges_prefix_of_two_words(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 7)
        tree.emplace("retry", 10)
        tree.split("reopen", 2)
        tree.split("retry", 2)
        self.assertEqual(tree.at("re").count, 17)
        self.assertEqual(tree.at("open").count, 7)
        self.assertEqual(tree.at("try").count, 10)

    def test_split_flows_into_existing_subtree(self):
        tree = SegmentationTree()
        tree.emplace("open", 3)
        tree.split("open", 1)
        tree.emplace("reopen", 2)
        tree.split("reopen", 2)
        self.assertEqual(tree.at("open").count, 5)
        self.assertEqual(tree.at("o").count, 5)
        self.assertEqual(tree.at("pen").count, 5)
        self.assertEqual(tree.segment("reopen"), ["re", "o", "pen"])

    def test_split_preconditions(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        tree.emplace("a", 1)
        for position in (0, 6, 7, -1):
            with self.assertRaises(InvariantViolation):
                tree.split("reopen", position)
        with self.assertRaises(InvariantViolation):
            tree.split("a", 1)
        tree.split("reopen", 2)
        with self.assertRaises(InvariantViolation):
            tree.split("reopen", 3)
        with self.assertRaises(MorphNotFoundError):
            tree.split("redo", 2)

    def test_split_conserves_letter_mass(self):
        tree = SegmentationTree.from_corpus(read_corpus('test1.txt'))
        mass = letter_mass(tree)
        tree.split("redoing", 4)
        tree.split("trying", 3)
        tree.split("redo", 2)
        self.assertEqual(letter_mass(tree), mass)


class RemoveTests(SegmentationTreeTestCase):
    def test_split_and_remove_restores_empty_tree(self):
        tree = SegmentationTree.from_corpus([Morph("reopen", 3)], mode='freqlength')
        tree.split("reopen", 2)
        tree.remove("reopen")
        self.assertEqual(tree.size(), 0)
        self.assertEqual(tree.get_compounds(), [])
        for name, value in tree.get_cost_breakdown().items():
            self.assertAlmostEqual(value, 0.0, delta=THRESHOLD, msg=name)

    def test_deep_shared_removal(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        tree.emplace("redo", 2)
        tree.split("reopen", 2)
        tree.split("redo", 2)
        tree.split("open", 1)
        tree.remove("reopen")
        self.assertEqual(tree.size(), 3)
        self.assertEqual(tree.at("redo"), SplitNode(2, "re", "do"))
        self.assertEqual(tree.at("re").count, 2)
        self.assertEqual(tree.at("do").count, 2)
        for morph in ("reopen", "open", "o", "pen"):
            self.assertFalse(tree.contains(morph), morph)

    def test_remove_prunes_only_unshared_descendants(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        tree.emplace("redoing", 2)
        tree.emplace("trying", 4)
        tree.split("reopen", 2)
        tree.split("redoing", 2)
        tree.split("doing", 2)
        tree.split("trying", 3)
        self.assertEqual(tree.at("re").count, 3)
        self.assertEqual(tree.at("ing").count, 6)
        tree.remove("redoing")
        for morph in ("redoing", "doing", "do"):
            self.assertFalse(tree.contains(morph), morph)
        self.assertEqual(tree.at("re").count, 1)
        self.assertEqual(tree.at("ing").count, 4)
        self.assertEqual(tree.segment("trying"), ["try", "ing"])

    def test_remove_word_that_is_also_a_part(self):
        tree = SegmentationTree()
        tree.emplace("re", 5)
        tree.emplace("redo", 2)
        tree.split("redo", 2)
        self.assertEqual(tree.at("re").count, 7)
        tree.remove("re")
        self.assertEqual(tree.at("re").count, 2)
        self.assertEqual(tree.segment("redo"), ["re", "do"])

    def test_remove_referenced_part_raises(self):
        tree = SegmentationTree()
        tree.emplace("reopen", 1)
        tree.split("reopen", 2)
        with self.assertRaises(InvariantViolation):
            tree.remove("re")
        with self.assertRaises(MorphNotFoundError):
            tree.remove("redo")

    def test_emplace_and_remove_restore_costs(self):
        tree = SegmentationTree.from_corpus(read_corpus('test1.txt'), mode='freq')
        before = tree.get_cost_breakdown()
        tree.emplace("reopened", 3)
        tree.split("reopened", 6)
        tree.remove("reopened")
        self.assertCostsEqual(tree.get_cost_breakdown(), before)


class AdjustMorphCountTests(SegmentationTreeTestCase):
    def test_adjust_morph_count_can_remove_nodes(self):
        tree = SegmentationTree.from_corpus(read_corpus('test1.txt'))
        tree.adjust_morph_count("redoing", -2)
        out = io.StringIO()
        MorfessorIO.format_lexicon(out, tree)
        self.assertEqual(out.getvalue(), "1 reopen\n4 trying\n")

    def test_adjust_creates_leaf(self):
        tree = SegmentationTree()
        tree.adjust_morph_count("re", 3)
        self.assertEqual(tree.at("re"), SplitNode(3))
        self.assertEqual(tree.types, 1)

    def test_negative_count_raises(self):
        tree = SegmentationTree()
        tree.emplace("redo", 2)
        with self.assertRaises(InvariantViolation):
            tree.adjust_morph_count("redo", -3)
        self.assertEqual(tree.at("redo").count, 2)

    def test_aggregates_match_rescan(self):
        tree = SegmentationTree.from_corpus(read_corpus('test2.txt'))
        tree.split("walking", 4)
        tree.split("walked", 4)
        tree.split("replayed", 2)
        tree.split("played", 4)
        tree.adjust_morph_count("jumps", -1)
        leaves = tree.get_morphs()
        self.assertEqual(tree.tokens, sum(morph.frequency for morph in leaves))
        self.assertEqual(tree.types, len(leaves))
        for mode in ('baseline', 'freq', 'length', 'freqlength'):
            tree = SegmentationTree.from_corpus(read_corpus('test2.txt'), mode=mode)
            tree.split("walking", 4)
            tree.split("replayed", 2)
            self.assertCostsEqual(tree.get_cost_breakdown(),
                                  rescore(tree).get_cost_breakdown())

    def test_length_modes_sane_after_splitting(self):
        for mode in ('length', 'freqlength'):
            tree = SegmentationTree.from_corpus(read_corpus('test1.txt'), mode=mode)
            tree.adjust_morph_count("reopen", -1)
            tree.adjust_morph_count("re", 1)
            tree.adjust_morph_count("open", 1)
            self.assertCostsEqual(tree.get_cost_breakdown(),
                                  rescore(tree, recompute_letters=True).get_cost_breakdown())


class LoadDataTests(SegmentationTreeTestCase):
    def test_duplicates_are_merged(self):
        tree = SegmentationTree.from_corpus([Morph("redo", 1), Morph("trying", 2),
                                             Morph("redo", 3)])
        self.assertEqual(tree.get_compounds(), [Morph("redo", 4), Morph("trying", 2)])

    def test_frequency_threshold_and_dampening(self):
        data = read_corpus('test1.txt')
        tree = SegmentationTree.from_corpus(data, freqthreshold=2, count_modifier=lambda x: 1)
        self.assertEqual(tree.get_morphs(), [Morph("redoing", 1), Morph("trying", 1)])

    def test_load_data_adds_through_existing_splits(self):
        tree = SegmentationTree.from_corpus([Morph("redo", 2)])
        tree.split("redo", 2)
        tree.load_data([Morph("redo", 1), Morph("do", 4)])
        self.assertEqual(tree.at("redo").count, 3)
        self.assertEqual(tree.at("do").count, 7)
        self.assertEqual(tree.get_compounds(), [Morph("do", 4), Morph("redo", 3)])


if __name__ == '__main__':
    unittest.main()
