import logging
import math
import random
import sys
import time

from . import get_version
from . import utils
from .baseline import SegmentationTree, ALGORITHM_MODES
from .exception import ArgumentException
from .io import MorfessorIO

_logger = logging.getLogger(__name__)


def get_default_argparser():
    import argparse

    parser = argparse.ArgumentParser(
        prog='morfessor-mdl',
        description="""
Morfessor MDL %s

Unsupervised morphological segmentation with the Morfessor Baseline
minimum-description-length model. The training words are split
recursively as long as splitting lowers the two-part code length of
the lexicon and the corpus.

Command-line arguments:
""" % get_version(),
        epilog="""
Simple usage examples (training and inspecting):
  %(prog)s -t training_corpus.txt -s model.pickled
  %(prog)s -t training_corpus.txt -m freqlength -x lexicon.txt --dot tree.dot
  %(prog)s -l model.pickled -o summary.txt
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False)

    # Options for input data files
    add_arg = parser.add_argument_group('input data files').add_argument
    add_arg('-l', '--load', dest="loadfile", default=None, metavar='<file>',
            help="load existing model from file (pickled model object)")
    add_arg('-t', '--traindata', dest='trainfiles', action='append',
            default=[], metavar='<file>',
            help="input corpus list file(s) for training, one word per line "
                 "optionally prefixed by its count (text or bz2/gzipped text;"
                 " use '-' for standard input; add several times in order to "
                 "append multiple files)")

    # Options for output data files
    add_arg = parser.add_argument_group('output data files').add_argument
    add_arg('-o', '--output', dest="outfile", default='-', metavar='<file>',
            help="output file for the model summary: the overall cost and "
                 "the lexicon (for standard output, use '-'; default "
                 "'%(default)s')")
    add_arg('-s', '--save', dest="savefile", default=None, metavar='<file>',
            help="save final model to file (pickled model object)")
    add_arg('-x', '--lexicon', dest="lexfile", default=None, metavar='<file>',
            help="output final lexicon to given file, in the corpus list "
                 "format")
    add_arg('--dot', dest="dotfile", default=None, metavar='<file>',
            help="output the segmentation tree as a Graphviz dot file")
    add_arg('--segmentation-output', dest="savesegfile", default=None,
            metavar='<file>',
            help="save the segmentations of the training words to file")

    # Options for data formats
    add_arg = parser.add_argument_group(
        'data format options').add_argument
    add_arg('-e', '--encoding', dest='encoding', metavar='<encoding>',
            help="encoding of input and output files (if none is given, "
                 "both the local encoding and UTF-8 are tried)")
    add_arg('--lowercase', dest="lowercase", default=False,
            action='store_true',
            help="lowercase input data")
    add_arg('--construction-separator', dest='constrseparator',
            default=' + ', metavar='<str>',
            help="morph separator in the segmentation output; plain string, "
                 "not regexp (default: '%(default)s')")

    # Options for model training
    add_arg = parser.add_argument_group(
        'training options').add_argument
    add_arg('-m', '--mode', dest="algmode", default='baseline',
            metavar='<mode>', choices=list(ALGORITHM_MODES),
            help="cost model variant ('baseline', 'freq' for the explicit "
                 "frequency prior, 'length' for the explicit length prior, "
                 "or 'freqlength' for both; default '%(default)s')")
    add_arg('--hapax-prior', dest='hapax_prior', type=float, default=0.5,
            metavar='<float>',
            help="expected proportion of morphs occurring only once, used "
                 "by the explicit frequency prior (default %(default)s)")
    add_arg('--length-prior', dest='length_prior', type=float, default=7.0,
            metavar='<float>',
            help="most common morph length, used by the explicit length "
                 "prior (default %(default)s)")
    add_arg('--length-beta', dest='length_beta', type=float, default=1.0,
            metavar='<float>',
            help="beta of the Gamma distribution of the explicit length "
                 "prior (default %(default)s)")
    add_arg('-d', '--dampening', dest="dampening", default='none',
            metavar='<type>', choices=['none', 'log', 'ones'],
            help="frequency dampening for training data ('none', 'log', or "
                 "'ones'; default '%(default)s')")
    add_arg('--batch-minfreq', dest="freqthreshold", type=int, default=1,
            metavar='<int>',
            help="compound frequency threshold for batch training (default "
                 "%(default)s)")
    add_arg('-F', '--finish-threshold', dest='finish_threshold', type=float,
            default=0.005, metavar='<float>',
            help="Stopping threshold. Training stops when the improvement "
                 "of the last epoch is smaller than or equal to this value "
                 "times the number of morph types (default %(default)s)")
    add_arg('--max-epochs', dest='maxepochs', type=int, default=None,
            metavar='<int>',
            help='hard maximum of epochs in training')
    add_arg('-r', '--randseed', dest="randseed", type=int, default=None,
            metavar='<seed>',
            help="seed for random number generator")

    # Options for logging
    add_arg = parser.add_argument_group('logging options').add_argument
    add_arg('-v', '--verbose', dest="verbose", type=int, default=1,
            metavar='<int>',
            help="verbose level; controls what is written to the standard "
                 "error stream or log file (default %(default)s)")
    add_arg('--logfile', dest='log_file', metavar='<file>',
            help="write log messages to file in addition to standard "
                 "error stream")
    add_arg('--progressbar', dest='progress', default=False,
            action='store_true',
            help="Force the progressbar to be displayed (possibly lowers the "
                 "log level for the standard error stream)")

    add_arg = parser.add_argument_group('other options').add_argument
    add_arg('-h', '--help', action='help',
            help="show this help message and exit")
    add_arg('--version', action='version',
            version='%(prog)s ' + get_version(),
            help="show version number and exit")

    return parser


def initialize_logging(args):
    """Initialize loggers based on command line args"""
    if args.verbose >= 2:
        loglevel = logging.DEBUG
    elif args.verbose >= 1:
        loglevel = logging.INFO
    else:
        loglevel = logging.WARNING

    rootlogger = logging.getLogger()
    rootlogger.setLevel(logging.DEBUG)

    logfile_format = '%(asctime)s %(levelname)s:%(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'
    console_format = '%(message)s'

    console_level = loglevel
    if args.log_file is not None or args.progress:
        # If logging to a file or progress bar is forced, make INFO
        # the highest level for the error stream
        console_level = max(loglevel, logging.INFO)

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(console_format))
    rootlogger.addHandler(ch)

    # FileHandler for log_file
    if args.log_file is not None:
        fh = logging.FileHandler(args.log_file, 'w')
        fh.setLevel(loglevel)
        fh.setFormatter(logging.Formatter(logfile_format, date_format))
        rootlogger.addHandler(fh)

    return console_level


def get_dampening_function(dampening):
    """Return the count modifier for a dampening type"""
    if dampening == 'none':
        return None
    elif dampening == 'log':
        return lambda x: int(round(math.log(x + 1, 2)))
    elif dampening == 'ones':
        return lambda x: 1
    raise ArgumentException("unknown dampening type '%s'" % dampening)


def main(args):

    console_level = initialize_logging(args)

    # If debug messages are printed to screen, only warning messages
    # (or above) should be printed to screen, or if stderr is not a
    # tty (but a pipe or a file), don't show the progressbar
    if (console_level != logging.INFO or
            (hasattr(sys.stderr, 'isatty') and not sys.stderr.isatty())):
        utils.show_progress_bar = False

    # Force progress bar
    if args.progress:
        utils.show_progress_bar = True

    if args.loadfile is None and len(args.trainfiles) == 0:
        raise ArgumentException("either model file or training data should "
                                "be defined")

    dampfunc = get_dampening_function(args.dampening)
    rng = random.Random(args.randseed)

    io = MorfessorIO(encoding=args.encoding,
                     construction_separator=args.constrseparator,
                     lowercase=args.lowercase)

    # The whole corpus is read before the tree is built, so that a
    # missing file fails before any training
    data = list(io.read_corpus_list_files(args.trainfiles))

    # Load existing model or create a new one
    if args.loadfile is not None:
        tree = io.read_binary_model_file(args.loadfile)
        tree.debugging_level = max(args.verbose - 1, 0)
        if data:
            c = tree.load_data(data, args.freqthreshold, dampfunc)
            _logger.info("Cost after adding training data: %s", c)
    else:
        tree = SegmentationTree.from_corpus(
            data, mode=args.algmode,
            freqthreshold=args.freqthreshold,
            count_modifier=dampfunc,
            debugging_level=max(args.verbose - 1, 0),
            hapax_prior=args.hapax_prior,
            length_prior=args.length_prior,
            length_beta=args.length_beta,
            finish_threshold=args.finish_threshold)

    # Train model
    if data:
        ts = time.time()
        e, c = tree.optimize(rng=rng, max_epochs=args.maxepochs)
        te = time.time()
        _logger.info("Epochs: %s", e)
        _logger.info("Final cost: %s", c)
        _logger.info("Training time: %.3fs", (te - ts))

    # Save model
    if args.savefile is not None:
        io.write_binary_model_file(args.savefile, tree)

    if args.lexfile is not None:
        io.write_lexicon_file(args.lexfile, tree)

    if args.dotfile is not None:
        io.write_dot_file(args.dotfile, tree)

    if args.savesegfile is not None:
        io.write_segmentation_file(args.savesegfile, tree.get_segmentations())

    if args.outfile is not None:
        io.write_summary_file(args.outfile, tree)
