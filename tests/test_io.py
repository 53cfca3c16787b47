import gzip
import os
import random
import tempfile
import unittest

from morfessor_mdl import MorfessorIO, Morph, SegmentationTree
from morfessor_mdl import utils

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


class CorpusReaderTests(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = self._tmpdir.name
        self.io = MorfessorIO(encoding='utf-8')

    def tearDown(self):
        self._tmpdir.cleanup()

    def test_read_corpus_list_file(self):
        corpus = list(self.io.read_corpus_list_file(os.path.join(DATA_DIR, 'test1.txt')))
        self.assertEqual(corpus, [Morph("reopen", 1), Morph("redoing", 2), Morph("trying", 4)])

    def test_comments_blank_lines_and_missing_counts(self):
        file_name = os.path.join(self.root, 'corpus.txt')
        with open(file_name, 'w', encoding='utf-8') as fobj:
            fobj.write("# word list\n\n3 talo\ntalossa\n\n12 kissa\n")
        corpus = list(self.io.read_corpus_list_file(file_name))
        self.assertEqual(corpus, [Morph("talo", 3), Morph("talossa", 1), Morph("kissa", 12)])

    def test_lowercase(self):
        file_name = os.path.join(self.root, 'corpus.txt')
        with open(file_name, 'w', encoding='utf-8') as fobj:
            fobj.write("2 Talo\n")
        io = MorfessorIO(encoding='utf-8', lowercase=True)
        self.assertEqual(list(io.read_corpus_list_file(file_name)), [Morph("talo", 2)])

    def test_gzipped_corpus(self):
        file_name = os.path.join(self.root, 'corpus.txt.gz')
        with gzip.open(file_name, 'wt', encoding='utf-8') as fobj:
            fobj.write("5 äiti\n2 äidit\n")
        io = MorfessorIO()
        self.assertEqual(list(io.read_corpus_list_files([file_name])),
                         [Morph("äiti", 5), Morph("äidit", 2)])
        self.assertEqual(io.encoding, 'utf-8')

    def test_negative_count_is_an_error(self):
        file_name = os.path.join(self.root, 'corpus.txt')
        with open(file_name, 'w', encoding='utf-8') as fobj:
            fobj.write("2 talo\n-3 kissa\n")
        with self.assertRaises(ValueError):
            list(self.io.read_corpus_list_file(file_name))

    def test_missing_file(self):
        with self.assertRaises(OSError):
            list(self.io.read_corpus_list_file(os.path.join(self.root, 'missing.txt')))


class WriterTests(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = self._tmpdir.name
        self.io = MorfessorIO(encoding='utf-8')
        self.tree = SegmentationTree()
        self.tree.emplace("reopen", 1)
        self.tree.emplace("redo", 2)
        self.tree.split("reopen", 2)

    def tearDown(self):
        self._tmpdir.cleanup()

    def _read(self, file_name):
        with open(file_name, encoding='utf-8') as fobj:
            return fobj.read()

    def test_lexicon_file_can_be_read_back(self):
        file_name = os.path.join(self.root, 'lexicon.txt')
        self.io.write_lexicon_file(file_name, self.tree)
        self.assertEqual(self._read(file_name), "1 open\n1 re\n2 redo\n")
        self.assertEqual(list(self.io.read_corpus_list_file(file_name)),
                         self.tree.get_morphs())

    def test_summary_file(self):
        file_name = os.path.join(self.root, 'summary.txt')
        self.io.write_summary_file(file_name, self.tree)
        lines = self._read(file_name).splitlines()
        self.assertEqual(lines[0], "Overall cost: %.5f" % self.tree.get_cost())
        self.assertEqual(lines[1:], ["1 open", "1 re", "2 redo"])

    def test_dot_file(self):
        file_name = os.path.join(self.root, 'tree.dot')
        self.io.write_dot_file(file_name, self.tree)
        self.assertEqual(self._read(file_name).splitlines(), [
            'digraph segmentation_tree {',
            'node [shape=record, fontname="Arial"]',
            '"open" [label="open| 1"]',
            '"re" [label="re| 1"]',
            '"redo" [label="redo| 2"]',
            '"reopen" [label="reopen| 1"]',
            '"reopen" -> "re"',
            '"reopen" -> "open"',
            '}',
        ])

    def test_dot_file_escapes_special_characters(self):
        tree = SegmentationTree()
        tree.emplace('say"hi', 1)
        tree.split('say"hi', 3)
        tree.emplace("x|y", 2)
        file_name = os.path.join(self.root, 'tree.dot')
        self.io.write_dot_file(file_name, tree)
        self.assertEqual(self._read(file_name).splitlines()[2:], [
            r'"\"hi" [label="\"hi| 1"]',
            r'"say" [label="say| 1"]',
            r'"say\"hi" [label="say\"hi| 1"]',
            r'"say\"hi" -> "say"',
            r'"say\"hi" -> "\"hi"',
            r'"x|y" [label="x\|y| 2"]',
            '}',
        ])

    def test_segmentation_file(self):
        file_name = os.path.join(self.root, 'segmentation.txt')
        self.io.write_segmentation_file(file_name, self.tree.get_segmentations())
        lines = self._read(file_name).splitlines()
        self.assertTrue(lines[0].startswith("# Output from Morfessor MDL"))
        self.assertEqual(lines[1:], ["2\tredo\tredo", "1\treopen\tre + open"])

    def test_binary_model_file(self):
        utils.show_progress_bar = False
        tree = SegmentationTree.from_corpus(
            list(self.io.read_corpus_list_file(os.path.join(DATA_DIR, 'test2.txt'))),
            mode='freqlength')
        tree.optimize(rng=random.Random(7))
        utils.show_progress_bar = True

        file_name = os.path.join(self.root, 'model.bin')
        self.io.write_binary_model_file(file_name, tree)
        loaded = self.io.read_binary_model_file(file_name)
        self.assertEqual(loaded.get_morphs(), tree.get_morphs())
        self.assertEqual(loaded.get_compounds(), tree.get_compounds())
        self.assertEqual(loaded.get_cost_breakdown(), tree.get_cost_breakdown())
        self.assertEqual(loaded.mode, 'freqlength')


if __name__ == '__main__':
    unittest.main()
