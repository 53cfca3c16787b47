import collections
import logging
import math
import random

from .utils import _progress
from .exception import ArgumentException, InvariantViolation, \
    MorphNotFoundError
from .representations import Morph, SplitNode

_logger = logging.getLogger(__name__)

# Key of the end-of-morph symbol in letter-cost tables. A letter is
# a string of length one, so the empty string never collides with one.
END_OF_MORPH = ''

# Algorithm variants: mode name -> (explicit frequency, explicit length)
ALGORITHM_MODES = collections.OrderedDict([
    ('baseline', (False, False)),
    ('freq', (True, False)),
    ('length', (False, True)),
    ('freqlength', (True, True)),
])


def _segmentation_to_str(parts):
    """Return a readable string for a list of morph strings"""
    return ' + '.join(parts)


def get_mode_flags(mode):
    """Return the (explicit_frequency, explicit_length) flags of a mode name.
    Raises ArgumentException for an unknown mode."""
    try:
        return ALGORITHM_MODES[mode.lower()]
    except (KeyError, AttributeError):
        raise ArgumentException("unknown algorithm mode '%s'; expected one of %s"
                                % (mode, ", ".join(ALGORITHM_MODES)))


def _combine_counts(data, freqthreshold=1, count_modifier=None):
    """Merge repeated words of a corpus into a single Morph each.

    Arguments:
        data: iterable of Morph objects (None entries are skipped)
        freqthreshold: discard words that occur less than given times
        count_modifier: function for adjusting the counts of each word
    Returns a list of Morph objects in order of first occurrence.
    """
    totalcount = collections.OrderedDict()
    for word in data:
        if word is None or not word.letters:
            continue
        totalcount[word.letters] = totalcount.get(word.letters, 0) + word.frequency

    combined = []
    for letters, count in totalcount.items():
        if count < freqthreshold:
            continue
        if count_modifier is not None:
            count = count_modifier(count)
        if count > 0:
            combined.append(Morph(letters, count))
    return combined


def _letter_counts(data, end_marker=True):
    """Count the letters of a corpus, weighting each word by its frequency.
    With end_marker, every word token also counts one END_OF_MORPH."""
    counts = collections.Counter()
    for word in data:
        if word.frequency <= 0:
            continue
        for letter in word.letters:
            counts[letter] += word.frequency
        if end_marker:
            counts[END_OF_MORPH] += word.frequency
    return counts


def letter_costs_from_corpus(data, end_marker=True):
    """Return a dict mapping each letter of the corpus to its code length
    in bits, -log2(count / total).

    Arguments:
        data: iterable of Morph objects
        end_marker: include the END_OF_MORPH symbol (used by the implicit
                    length prior), counted once per word token
    """
    counts = _letter_counts(data, end_marker=end_marker)
    total = sum(counts.values())
    if total == 0:
        return {}
    logtotal = math.log2(total)
    return {letter: logtotal - math.log2(count) for letter, count in counts.items()}


class SegmentationTree(object):
    """Morfessor Baseline segmentation tree.

    Maps every morph string to a SplitNode. A node with children is split
    into the two morphs named by its child keys; a node without children
    is a leaf, i.e. a morph of the lexicon. Only leaves contribute to the
    cost, which is kept up to date by the CostModel owned by the tree.
    Every count change is funnelled through adjust_morph_count, so the
    tree and the cost model cannot drift apart.

    Implements recursive MDL training (optimize / resplit_node) and
    segmenting of the training words with the trained tree.
    """

    eps = 1e-12  # threshold for testing (in)equality of floating-point numbers

    def __init__(self, cost_model=None, debugging_level=0):
        """Initialize a new, empty tree.
        Arguments:
            cost_model: the CostModel that the tree takes ownership of.
                        Defaults to a Baseline model with an empty letter
                        table (every letter is then free to encode).
            debugging_level: variable level (integer) for debugging. 0 represents
                             no debugging. 1 logs the result for each resplit
                             word, 2 logs split decisions, and 3 logs all
                             count adjustments.
        """
        if cost_model is None:
            cost_model = CostModel()
        self._nodes = {}
        self._compounds = collections.Counter()
        self._cost = cost_model
        self.debugging_level = debugging_level
        self.total_epochs = 0

    @classmethod
    def from_corpus(cls, data, mode='baseline', freqthreshold=1,
                    count_modifier=None, debugging_level=0, **cost_params):
        """Build a tree with one leaf per distinct word of a corpus.

        The letter-cost table of the cost model is computed from the
        corpus (after count merging and dampening) and stays fixed.

        Arguments:
            data: iterable of Morph objects
            mode: algorithm mode, one of ALGORITHM_MODES
            freqthreshold: discard words that occur less than given times
            count_modifier: function for adjusting the counts of each word
            debugging_level: see __init__
            cost_params: hapax_prior, length_prior, length_beta and
                         finish_threshold for the CostModel
        """
        words = _combine_counts(data, freqthreshold, count_modifier)
        cost_model = CostModel.from_corpus(words, mode=mode, **cost_params)
        tree = cls(cost_model, debugging_level=debugging_level)
        for word in words:
            tree.emplace(word.letters, word.frequency)
        _logger.info("Initialized %s model with %s word types / %s tokens",
                     cost_model.mode, len(words), cost_model.total_morph_tokens)
        return tree

    def _debug_permitted(self, priority):
        """A flag for whether to debug at the given priority"""
        return priority <= self.debugging_level

    def __len__(self):
        """Return the number of nodes (leaves and split nodes)"""
        return len(self._nodes)

    def __contains__(self, morph):
        return morph in self._nodes

    def __iter__(self):
        """Iterate over (morph, SplitNode) pairs, sorted by morph"""
        return iter(sorted(self._nodes.items()))

    def __str__(self):
        """Pretty-printing"""
        return "\n".join("{} ({}): {}".format(morph, node.count, _segmentation_to_str(node.get_children()))
                         for morph, node in self)

    def size(self):
        return len(self._nodes)

    def contains(self, morph):
        """Check whether a morph is in the tree"""
        return morph in self._nodes

    def at(self, morph):
        """Return the SplitNode of a morph.
        Raises MorphNotFoundError if the morph is not in the tree."""
        try:
            return self._nodes[morph]
        except KeyError:
            raise MorphNotFoundError(morph)

    @property
    def tokens(self):
        """Return the number of morph tokens."""
        return self._cost.total_morph_tokens

    @property
    def types(self):
        """Return the number of morph types (leaves)."""
        return self._cost.unique_morph_types

    @property
    def mode(self):
        return self._cost.mode

    def get_cost(self):
        """Return current model encoding cost in bits."""
        return self._cost.overall_cost()

    def get_cost_breakdown(self):
        """Return a snapshot of all the cost components of the model."""
        return self._cost.breakdown()

    def get_convergence_threshold(self):
        return self._cost.convergence_threshold()

    def get_letter_costs(self):
        """Return a copy of the frozen letter-cost table."""
        return dict(self._cost.letter_costs)

    def get_morphs(self):
        """Return a list of the leaves (morphs) and their counts,
        sorted alphabetically"""
        return [Morph(morph, node.count) for morph, node in self
                if not node.has_children]

    def get_compounds(self):
        """Return the words added to the tree and their frequencies,
        sorted alphabetically"""
        return [Morph(word, count) for word, count in sorted(self._compounds.items())]

    def segment(self, morph):
        """Return the segmentation of a word or morph, i.e. its
        decomposition into leaf morphs, in linear order."""
        node = self.at(morph)
        if not node.has_children:
            return [morph]
        return self.segment(node.left_child) + self.segment(node.right_child)

    def get_segmentations(self):
        """Yield (word Morph, list of morph strings) for all words."""
        for compound in self.get_compounds():
            yield compound, self.segment(compound.letters)

    def load_data(self, data, freqthreshold=1, count_modifier=None):
        """Add the words of a corpus to the tree.
        Arguments:
            data: iterable of Morph objects
            freqthreshold: discard words that occur less than given times
            count_modifier: function for adjusting the counts of each word
        Words already present in the tree have their counts increased,
        through their existing segmentation. Returns the total cost.
        The letter-cost table is not recomputed.
        """
        for word in _combine_counts(data, freqthreshold, count_modifier):
            self._compounds[word.letters] += word.frequency
            self.adjust_morph_count(word.letters, word.frequency)
        return self.get_cost()

    def emplace(self, morph, frequency):
        """Insert a new leaf with the given count.
        The morph must not be in the tree yet."""
        if not morph:
            raise InvariantViolation("Cannot insert an empty morph")
        if morph in self._nodes:
            raise InvariantViolation("Morph '%s' is already in the tree" % morph)
        if frequency < 1:
            raise InvariantViolation("Cannot insert morph '%s' with count %s" % (morph, frequency))
        self._compounds[morph] += frequency
        self.adjust_morph_count(morph, frequency)

    def split(self, morph, left_length):
        """Split a leaf in two at the given position.
        The count of the morph is added to both parts; parts that are
        already in the tree are shared, and the count flows on into their
        own descendants. The morph stops being a leaf.
        """
        node = self.at(morph)
        if node.has_children:
            raise InvariantViolation("Morph '%s' is already split" % morph)
        if not 0 < left_length < len(morph):
            raise InvariantViolation("Invalid split position %s for morph '%s'" % (left_length, morph))
        count = node.count
        self.adjust_morph_count(morph, -count)
        self._install_split(morph, count, left_length)

    def remove(self, morph):
        """Remove a morph, together with its contribution to all of its
        descendants. Nodes whose count drops to zero are deleted.

        A morph that no other node refers to is removed with its whole
        count. A morph that is a part of other nodes can only be removed
        if it is also a training word; it then gives back the frequency it
        was added with, and stays in the tree as a part.
        Finding the referring nodes scans the whole tree, so removing all
        words one by one takes quadratic time.
        """
        node = self.at(morph)
        parents = [key for key, other in self._nodes.items()
                   if morph in other.get_children()]
        if not parents:
            delta = node.count
        elif morph in self._compounds:
            delta = self._compounds[morph]
        else:
            raise InvariantViolation("Cannot remove morph '%s'; it is a part of %s"
                                     % (morph, ", ".join(sorted(parents))))
        self._compounds.pop(morph, None)
        self.adjust_morph_count(morph, -delta)

    def adjust_morph_count(self, morph, delta):
        """Change the count of a morph and of all its descendants by delta.

        If the morph is not in the tree, it is created as a leaf. Nodes
        whose count drops to zero are deleted. For leaves, the change is
        relayed to the cost model; a leaf appearing or disappearing also
        changes the lexicon. The count may never become negative.
        """
        if not morph:
            raise InvariantViolation("Cannot adjust the count of an empty morph")
        node = self._nodes.get(morph)
        old_count = 0 if node is None else node.count
        new_count = old_count + delta
        if new_count < 0:
            raise InvariantViolation("Count of morph '%s' would become negative (%s %+d)"
                                     % (morph, old_count, delta))
        if node is None:
            node = SplitNode()
            self._nodes[morph] = node
        if self._debug_permitted(3):
            _logger.debug("Adjusting count of morph %s; %s -> %s", morph, old_count, new_count)

        if new_count == 0:
            del self._nodes[morph]
        else:
            node.count = new_count

        if node.has_children:
            self.adjust_morph_count(node.left_child, delta)
            self.adjust_morph_count(node.right_child, delta)
            return

        cost = self._cost
        cost.adjust_token_count(delta)
        if old_count > 0:
            cost.adjust_corpus_cost(-old_count)
            cost.adjust_frequency_cost(-old_count)
        if new_count > 0:
            cost.adjust_corpus_cost(new_count)
            cost.adjust_frequency_cost(new_count)

        if old_count == 0 and new_count > 0:
            cost.adjust_unique_count(1)
            cost.adjust_length_cost(len(morph))
            cost.adjust_string_cost(morph, True)
        elif old_count > 0 and new_count == 0:
            cost.adjust_unique_count(-1)
            cost.adjust_length_cost(-len(morph))
            cost.adjust_string_cost(morph, False)

    def _install_split(self, morph, count, split_index):
        """Store morph as a split node with the given count, and add the
        count to the two parts. The morph must have no count in the tree."""
        left, right = morph[:split_index], morph[split_index:]
        self._nodes[morph] = SplitNode(count, left, right)
        self.adjust_morph_count(left, count)
        self.adjust_morph_count(right, count)
        return left, right

    def resplit_node(self, morph):
        """Optimize the segmentation of a morph by recursively splitting.

        The current analysis of the morph is removed, and the cost of the
        morph as a leaf is compared to the cost of every binary split. If a
        split is better, it is made and both parts are resplit in turn.
        Splits are only accepted if they lower the cost; on equal cost, the
        earliest split position wins. Morphs that are not in the tree are
        skipped.
        """
        node = self._nodes.get(morph)
        if node is None:
            return
        frequency = node.count

        # Remove the current analysis, then price the morph as a leaf
        self.adjust_morph_count(morph, -frequency)
        self.adjust_morph_count(morph, frequency)
        mincost = self._cost.overall_cost()
        best_split_index = 0
        if self._debug_permitted(2):
            _logger.debug("Unsplit cost of morph %s: %.5f", morph, mincost)
        # Only the leaves count; the morph is absent while splits are tried
        self.adjust_morph_count(morph, -frequency)

        for split_index in range(1, len(morph)):
            left, right = morph[:split_index], morph[split_index:]
            self.adjust_morph_count(left, frequency)
            self.adjust_morph_count(right, frequency)
            cost = self._cost.overall_cost()
            if mincost - cost > self.eps:
                mincost = cost
                best_split_index = split_index
            self.adjust_morph_count(left, -frequency)
            self.adjust_morph_count(right, -frequency)

        if best_split_index == 0:
            self.adjust_morph_count(morph, frequency)
            return

        left, right = self._install_split(morph, frequency, best_split_index)
        if self._debug_permitted(2):
            _logger.debug("Splitting morph %s into %s; cost: %.5f",
                          morph, _segmentation_to_str((left, right)), mincost)
        self.resplit_node(left)
        self.resplit_node(right)

    def optimize(self, rng=None, max_epochs=None):
        """Train the tree in batch fashion.

        In each iteration (epoch) every node in the tree is resplit once,
        in a random order. Training stops when the improvement of the last
        epoch is smaller than or equal to the convergence threshold of the
        cost model.
        Arguments:
            rng: random.Random instance used for shuffling; pass a seeded
                 one for reproducible runs
            max_epochs: maximum number of epochs to train
        Returns the number of epochs and the final cost.
        """
        if rng is None:
            rng = random.Random()
        epochs = 0
        newcost = self.get_cost()
        if not self._nodes:
            _logger.info("Segmentation tree is empty; nothing to optimize")
            return epochs, newcost

        _logger.info("Words in training data: %s types / %s tokens",
                     len(self._compounds), sum(self._compounds.values()))
        _logger.info("Starting batch training")
        _logger.info("Epochs: %s\tCost: %s", epochs, newcost)

        while True:
            # One epoch
            keys = sorted(self._nodes)
            rng.shuffle(keys)
            for morph in _progress(keys, desc="Epoch %s" % (epochs + 1)):
                self.resplit_node(morph)
                if self._debug_permitted(1) and morph in self._nodes:
                    _logger.debug("#%s -> %s", morph, _segmentation_to_str(self.segment(morph)))
            epochs += 1
            self.total_epochs += 1

            oldcost = newcost
            newcost = self.get_cost()
            _logger.info("Epochs: %s\tCost: %s", epochs, newcost)
            if oldcost - newcost <= self._cost.convergence_threshold():
                break
            if max_epochs is not None and epochs >= max_epochs:
                _logger.info("Max number of epochs reached, stop training")
                break
        _logger.info("Done.")
        return epochs, newcost


class CostModel(object):
    """Two-part MDL code length of a segmentation, in bits.

    The cost is the sum of the lexicon cost (morph frequencies, morph
    lengths, morph spellings, and the ordering of the lexicon) and the
    corpus cost (encoding the morph tokens given their frequencies). The
    model only keeps running totals; a segmentation tree adjusts them on
    every change of its leaves, and the costs are derived on read.

    Frequencies and lengths each have an implicit and an explicit prior,
    which gives the four variants in ALGORITHM_MODES:
        implicit frequency: log2 of the number of ways to distribute the
                            tokens over the types, from the aggregates only
        explicit frequency: per-morph Zipf-like prior, parameterized by the
                            expected proportion of hapax legomena
        implicit length: every morph ends with an end-of-morph symbol
        explicit length: per-morph Gamma prior on the length, with its
                         mode at length_prior
    The letter-cost table is fixed when the model is created.

    All costs are 0.0 for an empty model. The model relies on every leaf
    having a positive count, so that there are never fewer tokens than
    types; a violation raises InvariantViolation instead of producing
    NaN costs.
    """

    exact_binomial_limit = 100  # use Stirling's approximation above this many tokens

    # constant used for speeding up logfactorial calculations with Stirling's
    # approximation
    _log2pi = math.log(2 * math.pi)
    _ln2 = math.log(2)

    def __init__(self, letter_costs=None, explicit_frequency=False,
                 explicit_length=False, hapax_prior=0.5, length_prior=7.0,
                 length_beta=1.0, finish_threshold=0.005,
                 unknown_letter_cost=0.0):
        """Initialize the model.
        Arguments:
            letter_costs: dict mapping letters (and END_OF_MORPH) to their
                          code lengths in bits
            explicit_frequency: use the explicit frequency prior
            explicit_length: use the explicit length prior
            hapax_prior: expected proportion of morphs occurring only once,
                         between 0 and 1
            length_prior: most common morph length, > 0
            length_beta: beta (scale) of the Gamma length prior, > 0;
                         length_prior must be below 24 * length_beta
            finish_threshold: stopping threshold, between 0 and 1; the
                              convergence threshold is this times the
                              number of morph types
            unknown_letter_cost: code length of letters that are not in
                                 letter_costs
        """
        if not 0 < hapax_prior < 1:
            raise ArgumentException("hapax prior must be between 0 and 1, not %s" % hapax_prior)
        if not length_prior > 0:
            raise ArgumentException("length prior must be positive, not %s" % length_prior)
        if not length_beta > 0:
            raise ArgumentException("length beta must be positive, not %s" % length_beta)
        if not length_prior < 24 * length_beta:
            raise ArgumentException("length prior %s is too large for beta %s "
                                    "(must be below 24 * beta)" % (length_prior, length_beta))
        if not 0 < finish_threshold < 1:
            raise ArgumentException("finish threshold must be between 0 and 1, not %s" % finish_threshold)

        self.letter_costs = dict(letter_costs) if letter_costs else {}
        self.unknown_letter_cost = unknown_letter_cost
        self.explicit_frequency = explicit_frequency
        self.explicit_length = explicit_length
        self.hapax_prior = hapax_prior
        self.length_prior = length_prior
        self.length_beta = length_beta
        self.finish_threshold = finish_threshold

        # Parameters of the explicit priors
        self._hapax_exponent = math.log2(1 - hapax_prior)
        self._gamma_shape = length_prior / length_beta + 1
        self._gamma_lognorm = (math.lgamma(self._gamma_shape) +
                               self._gamma_shape * math.log(length_beta))

        # Running totals
        self.total_morph_tokens = 0
        self.unique_morph_types = 0
        self.cost_from_frequencies = 0.0
        self.cost_from_lengths = 0.0
        self.cost_from_strings = 0.0
        self.logtokensum = 0.0

    @classmethod
    def from_corpus(cls, data, mode='baseline', **params):
        """Create a model for the given algorithm mode, with the letter
        costs of a corpus.
        Arguments:
            data: iterable of Morph objects
            mode: one of ALGORITHM_MODES
            params: keyword arguments for __init__
        """
        explicit_frequency, explicit_length = get_mode_flags(mode)
        data = list(data)
        counts = _letter_counts(data, end_marker=not explicit_length)
        total = sum(counts.values())
        return cls(letter_costs_from_corpus(data, end_marker=not explicit_length),
                   explicit_frequency=explicit_frequency,
                   explicit_length=explicit_length,
                   unknown_letter_cost=math.log2(total + 1),
                   **params)

    def __repr__(self):
        return "{}(mode={!r}, tokens={}, types={})".format(
            type(self).__name__, self.mode, self.total_morph_tokens, self.unique_morph_types)

    @property
    def mode(self):
        """The name of the algorithm mode"""
        flags = (self.explicit_frequency, self.explicit_length)
        for name, mode_flags in ALGORITHM_MODES.items():
            if mode_flags == flags:
                return name

    @classmethod
    def _logfactorial(cls, n):
        """Calculate logarithm of n!.
        For large n (n >= 20), use Stirling's approximation.
        """
        if n < 2:
            return 0.0
        if n < 20:
            return math.log(math.factorial(n))
        logn = math.log(n)
        return n * logn - n + 0.5 * (logn + cls._log2pi)

    def _letter_cost(self, letter):
        return self.letter_costs.get(letter, self.unknown_letter_cost)

    def _frequency_codelength(self, frequency):
        """-log2(f^e - (f+1)^e) with e = log2(1 - hapax_prior)"""
        e = self._hapax_exponent
        return -(e * math.log2(frequency) +
                 math.log2(-math.expm1(e * math.log1p(1.0 / frequency))))

    def _length_codelength(self, length):
        """-log2 of the Gamma density of a morph length"""
        logpdf = ((self._gamma_shape - 1) * math.log(length) -
                  length / self.length_beta - self._gamma_lognorm)
        return -logpdf / self._ln2

    def adjust_token_count(self, delta):
        """Update the number of morph tokens"""
        if self.total_morph_tokens + delta < 0:
            raise InvariantViolation("Number of morph tokens would become negative")
        self.total_morph_tokens += delta

    def adjust_unique_count(self, delta):
        """Update the number of morph types"""
        if self.unique_morph_types + delta < 0:
            raise InvariantViolation("Number of morph types would become negative")
        self.unique_morph_types += delta

    def adjust_frequency_cost(self, delta_frequency):
        """Add (positive delta) or remove (negative delta) the frequency
        cost of a morph with the given frequency. A no-op for the implicit
        prior, which is computed from the aggregates on read."""
        if not self.explicit_frequency or delta_frequency == 0:
            return
        if delta_frequency > 0:
            self.cost_from_frequencies += self._frequency_codelength(delta_frequency)
        else:
            self.cost_from_frequencies -= self._frequency_codelength(-delta_frequency)

    def adjust_length_cost(self, delta_length):
        """Add (positive delta) or remove (negative delta) the length cost
        of a morph with the given length. With the implicit prior, the cost
        is that of one end-of-morph symbol."""
        if delta_length == 0:
            return
        if self.explicit_length:
            cost = self._length_codelength(abs(delta_length))
        else:
            cost = self._letter_cost(END_OF_MORPH)
        if delta_length > 0:
            self.cost_from_lengths += cost
        else:
            self.cost_from_lengths -= cost

    def adjust_string_cost(self, string, add):
        """Add or remove the spelling cost of a morph"""
        cost = sum(self._letter_cost(letter) for letter in string)
        if add:
            self.cost_from_strings += cost
        else:
            self.cost_from_strings -= cost

    def adjust_corpus_cost(self, delta_frequency):
        """Add or remove the f * log(f) term of a morph with frequency f"""
        frequency = abs(delta_frequency)
        if frequency < 2:
            return
        if delta_frequency > 0:
            self.logtokensum += frequency * math.log(frequency)
        else:
            self.logtokensum -= frequency * math.log(frequency)

    def frequency_cost(self):
        """Cost of the morph frequencies.
        Implicit prior: log2 of the binomial coefficient C(N - 1, M - 1)
        for N tokens and M types, exact below exact_binomial_limit tokens."""
        if self.explicit_frequency:
            return self.cost_from_frequencies
        tokens = self.total_morph_tokens
        types = self.unique_morph_types
        if types == 0:
            return 0.0
        if tokens < types:
            raise InvariantViolation("Model has fewer morph tokens (%s) than types (%s)" % (tokens, types))
        if tokens < self.exact_binomial_limit:
            return math.log2(math.comb(tokens - 1, types - 1))
        return (self._logfactorial(tokens - 1) -
                self._logfactorial(types - 1) -
                self._logfactorial(tokens - types)) / self._ln2

    def length_cost(self):
        return self.cost_from_lengths

    def morph_string_cost(self):
        return self.cost_from_strings

    def lexicon_order_cost(self):
        """The lexicon can be coded in any of M! orders; this subtracts
        the Stirling approximation of log2(M!)."""
        types = self.unique_morph_types
        if types == 0:
            return 0.0
        return -(types * math.log(types) - types) / self._ln2

    def lexicon_cost(self):
        """Calculate the cost for encoding the lexicon"""
        return (self.frequency_cost() + self.length_cost() +
                self.morph_string_cost() + self.lexicon_order_cost())

    def corpus_cost(self):
        """Calculate the cost for encoding the corpus given the lexicon:
        (N log N - sum f log f) / log 2 for N tokens."""
        tokens = self.total_morph_tokens
        if tokens == 0:
            return 0.0
        return (tokens * math.log(tokens) - self.logtokensum) / self._ln2

    def overall_cost(self):
        return self.lexicon_cost() + self.corpus_cost()

    def convergence_threshold(self):
        """The smallest cost improvement of an epoch that continues training"""
        return self.finish_threshold * self.unique_morph_types

    def breakdown(self):
        """Return an OrderedDict with all cost components and aggregates"""
        return collections.OrderedDict([
            ('overall_cost', self.overall_cost()),
            ('lexicon_cost', self.lexicon_cost()),
            ('corpus_cost', self.corpus_cost()),
            ('frequency_cost', self.frequency_cost()),
            ('length_cost', self.length_cost()),
            ('morph_string_cost', self.morph_string_cost()),
            ('lexicon_order_cost', self.lexicon_order_cost()),
            ('total_morph_tokens', self.total_morph_tokens),
            ('unique_morph_types', self.unique_morph_types),
        ])
