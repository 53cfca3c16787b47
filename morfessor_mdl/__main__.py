import sys

from .cmd import get_default_argparser, main
from .exception import ArgumentException


def run(argv=None):
    parser = get_default_argparser()
    args = parser.parse_args(argv)
    try:
        main(args)
    except ArgumentException as e:
        parser.error(e)
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == "__main__":
    run()
