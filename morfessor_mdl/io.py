import bz2
import codecs
import contextlib
import datetime
import gzip
import locale
import logging
import pickle
import sys

from . import get_version
from .representations import Morph

_logger = logging.getLogger(__name__)


def _dot_escape(text, record=False):
    """Escape a string for a double-quoted Graphviz ID. Record labels
    also need the field syntax characters escaped."""
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    if record:
        for char in "{}|<>":
            text = text.replace(char, "\\" + char)
    return text


class MorfessorIO(object):
    """Definition for all input and output files. Also handles all
    encoding issues.

    The same instance can be used for reading several corpus files, as
    long as they share the encoding and the comment prefix.
    """

    def __init__(self, encoding=None, comment_start='#', lowercase=False,
                 construction_separator=' + '):
        """
            encoding: a string representation of the encoding used for files.
                      If None, the system encoding is used for writing files,
                      and encoding is inferred when reading files.
            comment_start: a string that starts comment lines, which are skipped
                           when reading files.
            lowercase: a Boolean flag for whether to convert to lowercase
                       when reading text files.
            construction_separator: a string that is used to separate morphs
                                    in segmentation output files.
        """
        self.encoding = encoding
        self.comment_start = comment_start
        self.lowercase = lowercase
        self.construction_separator = construction_separator
        self._version = get_version()

    def read_corpus_list_files(self, file_names):
        """Read one or more corpus list files.

        Yield for each word found a Morph object.

        """
        for file_name in file_names:
            for item in self.read_corpus_list_file(file_name):
                yield item

    def read_corpus_list_file(self, file_name):
        """Read a corpus list file.

        Each line has the format:
        <count> <word>

        A line with a single field is a word with count 1.
        Yield a Morph object for each word.

        """
        _logger.info("Reading corpus from list '%s'...", file_name)
        for line in self._read_text_file(file_name):
            try:
                count, word = line.split(None, 1)
                count = int(count)
            except ValueError:
                count, word = 1, line
            yield Morph(word.strip(), count)
        _logger.info("Done.")

    def write_lexicon_file(self, file_name, tree):
        """Write the leaves of a segmentation tree and their counts.

        File format (readable with read_corpus_list_file):
        <count> <morph>

        """
        _logger.info("Saving model lexicon to '%s'...", file_name)
        with self._open_text_file_write(file_name) as file_obj:
            self.format_lexicon(file_obj, tree)
        _logger.info("Done.")

    def write_summary_file(self, file_name, tree):
        """Write the overall cost of a tree followed by its lexicon."""
        _logger.info("Saving model summary to '%s'...", file_name)
        with self._open_text_file_write(file_name) as file_obj:
            file_obj.write("Overall cost: %.5f\n" % tree.get_cost())
            self.format_lexicon(file_obj, tree)
        _logger.info("Done.")

    def write_dot_file(self, file_name, tree):
        """Write a segmentation tree as a Graphviz digraph, with a record
        node for every morph and edges from split morphs to their parts."""
        _logger.info("Saving segmentation tree graph to '%s'...", file_name)
        with self._open_text_file_write(file_name) as file_obj:
            file_obj.write("digraph segmentation_tree {\n")
            file_obj.write('node [shape=record, fontname="Arial"]\n')
            for morph, node in tree:
                file_obj.write('"%s" [label="%s| %d"]\n' % (
                    _dot_escape(morph), _dot_escape(morph, record=True), node.count))
                for child in node.get_children():
                    file_obj.write('"%s" -> "%s"\n' % (_dot_escape(morph), _dot_escape(child)))
            file_obj.write("}\n")
        _logger.info("Done.")

    def write_segmentation_file(self, file_name, segmentations):
        """Write segmentation file.

        File format:
        <count>\t<word>\t<morph1><sep><morph2><sep>...<morphN>

        """
        _logger.info("Saving segmentations to '%s'...", file_name)
        with self._open_text_file_write(file_name) as file_obj:
            d = datetime.datetime.now().replace(microsecond=0)
            file_obj.write("# Output from Morfessor MDL %s, %s\n" %
                           (self._version, d))
            for word, morphs in segmentations:
                file_obj.write("%d\t%s\t%s\n" % (word.frequency, word.letters,
                                                  self.format_constructions(morphs)))
        _logger.info("Done.")

    @staticmethod
    def format_lexicon(file_obj, tree):
        """Write '<count> <morph>' lines for all leaves of a tree"""
        for morph in tree.get_morphs():
            file_obj.write("%d %s\n" % (morph.frequency, morph.letters))

    def format_constructions(self, morphs):
        """Return a formatted string for a list of morph strings."""
        return self.construction_separator.join(morphs)

    def read_binary_model_file(self, file_name):
        """Read a pickled model from file."""
        _logger.info("Loading model from '%s'...", file_name)
        model = self.read_binary_file(file_name)
        _logger.info("Done.")
        return model

    @staticmethod
    def read_binary_file(file_name):
        """Read a pickled object from a file."""
        with open(file_name, 'rb') as fobj:
            obj = pickle.load(fobj)
        return obj

    def write_binary_model_file(self, file_name, model):
        """Pickle a model to a file."""
        _logger.info("Saving model to '%s'...", file_name)
        self.write_binary_file(file_name, model)
        _logger.info("Done.")

    @staticmethod
    def write_binary_file(file_name, obj):
        """Pickle an object into a file."""
        with open(file_name, 'wb') as fobj:
            pickle.dump(obj, fobj, pickle.HIGHEST_PROTOCOL)

    def _open_text_file_write(self, file_name):
        """Open a file for writing with the appropriate compression/encoding"""
        if file_name == '-':
            # Standard output stays open after writing
            return contextlib.nullcontext(sys.stdout)
        elif file_name.endswith('.gz'):
            file_obj = gzip.open(file_name, 'wb')
        elif file_name.endswith('.bz2'):
            file_obj = bz2.BZ2File(file_name, 'wb')
        else:
            file_obj = open(file_name, 'wb')
        if self.encoding is None:
            # Take encoding from locale if not set so far
            self.encoding = locale.getpreferredencoding()
        return codecs.getwriter(self.encoding)(file_obj)

    def _open_text_file_read(self, file_name):
        """Open a file for reading with the appropriate compression/encoding"""
        if file_name == '-':
            return sys.stdin
        if file_name.endswith('.gz'):
            file_obj = gzip.open(file_name, 'rb')
        elif file_name.endswith('.bz2'):
            file_obj = bz2.BZ2File(file_name, 'rb')
        else:
            file_obj = open(file_name, 'rb')
        if self.encoding is None:
            # Try to determine encoding if not set so far
            self.encoding = self._find_encoding(file_name)
        return codecs.getreader(self.encoding)(file_obj)

    def _read_text_file(self, file_name):
        """Read a text file with the appropriate compression and encoding.

        Comments and empty lines are skipped.

        """
        inp = self._open_text_file_read(file_name)
        try:
            for line in inp:
                line = line.rstrip()
                if len(line) == 0 or line.startswith(self.comment_start):
                    continue
                if self.lowercase:
                    yield line.lower()
                else:
                    yield line
        except KeyboardInterrupt:
            if file_name == '-':
                _logger.info("Finished reading from stdin")
                return
            else:
                raise
        finally:
            if inp is not sys.stdin:
                inp.close()

    @staticmethod
    def _find_encoding(*files):
        """Test default encodings on reading files.

        If no encoding is given, this method can be used to test which
        of the default encodings would work.

        """
        test_encodings = ['utf-8', locale.getpreferredencoding()]
        for encoding in test_encodings:
            ok = True
            for f in files:
                if f == '-':
                    continue
                try:
                    if f.endswith('.gz'):
                        file_obj = gzip.open(f, 'rb')
                    elif f.endswith('.bz2'):
                        file_obj = bz2.BZ2File(f, 'rb')
                    else:
                        file_obj = open(f, 'rb')
                    with codecs.getreader(encoding)(file_obj) as reader:
                        for _ in reader:
                            pass
                except UnicodeDecodeError:
                    ok = False
                    break
            if ok:
                _logger.info("Detected %s encoding", encoding)
                return encoding

        raise UnicodeError("Can not determine encoding of input files")
