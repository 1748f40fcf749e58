"""
Capture CLI options for logging
"""

import logging
import argparse
import sys


def logging_cliconfig(logger, argv=None):
    """Configure logging from command-line options:
    --log=...     Log level
    --logfile=... Log file
    --stdout=...  Redirect stdout to a file
    --stderr=...  Redirect stderr to a file

    Unknown options are ignored so this can be called on any command line.
    """
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    parser.add_argument("--log", default="", type=str, help="Log level")
    parser.add_argument("--logfile", default="", type=str, help="Log file")
    parser.add_argument(
        "--stdout", default="", type=str, help="Log file for records below WARNING"
    )
    parser.add_argument(
        "--stderr", default="", type=str, help="Log file for records from WARNING"
    )
    args, _ = parser.parse_known_args(argv)

    hashandlers = logger_has_handlers(logger)

    if args.log and not hashandlers:
        logger.setLevel(args.log.upper())
    if args.logfile:
        logging_filehandler(args.logfile, logger)
    if args.stdout:
        logging_filehandler(args.stdout, logger, error=False)
    elif not hashandlers:
        logging_stdhandler(logger, error=False)
    if args.stderr:
        logging_filehandler(args.stderr, logger, error=True)
    elif not hashandlers:
        logging_stdhandler(logger, error=True)


def logger_has_handlers(logger):
    while logger is not None:
        if logger.handlers:
            return True
        logger = logger.parent
    return False


def logging_stdhandler(logger, error=True):
    """Add a handler for stderr (error=True) or stdout (error=False)"""
    stream = sys.stderr if error else sys.stdout
    handler = logging.StreamHandler(stream)
    logging_configure(handler, error=error)
    logger.addHandler(handler)


def logging_filehandler(filename, logger, error=None):
    handler = logging.FileHandler(filename)
    logging_configure(handler, error=error)
    logger.addHandler(handler)


def logging_configure(handler, error=None):
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s: %(message)s"))
    if error is not None:
        handler.addFilter(_LevelSplitFilter(error))


class _LevelSplitFilter(logging.Filter):
    """Pass records from WARNING upwards (error=True) or below WARNING"""

    def __init__(self, error):
        super(_LevelSplitFilter, self).__init__()
        self.error = error

    def filter(self, record):
        if self.error:
            return record.levelno >= logging.WARNING
        return record.levelno < logging.WARNING


def getLogger(name, filename):
    """Logger for a module or, when run as a script, for the script file"""
    if name == "__main__":
        logname = filename
    else:
        logname = name
    logger = logging.getLogger(logname)
    if name == "__main__":
        logging_cliconfig(logger)
    return logger
