"""
morfessor-mdl - unsupervised morphological segmentation with the
Morfessor Baseline minimum-description-length model.

The model keeps a forest of binary splits over the training words and a
two-part code length (lexicon + corpus) that is updated incrementally on
every change, and searches for a low-cost segmentation by greedy recursive
resplitting.
"""

import logging

__all__ = ['MorfessorException', 'ArgumentException', 'InvariantViolation',
           'MorphNotFoundError', 'MorfessorIO', 'SegmentationTree',
           'CostModel', 'ALGORITHM_MODES', 'Morph', 'SplitNode',
           'letter_costs_from_corpus', 'get_default_argparser', 'main']

__version__ = '0.1.0'
__author__ = 'morfessor-mdl developers'


def get_version():
    return __version__

# The public api imports need to be at the end of the file,
# so that the package global names are available to the modules
# when they are imported.

from .baseline import SegmentationTree, CostModel, ALGORITHM_MODES, \
    letter_costs_from_corpus
from .cmd import get_default_argparser, main
from .exception import MorfessorException, ArgumentException, \
    InvariantViolation, MorphNotFoundError
from .io import MorfessorIO
from .representations import Morph, SplitNode

logger = logging.getLogger(__name__)
