import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

import yaml
from pyramid.exceptions import ConfigurationError
from yaml.error import YAMLError

from spindle import __meta__
from spindle.config import SPINDLE_DEFAULT_INI_SECTION, SpindleSetting, load_settings
from spindle.deserializer import ExecuteDeserializer
from spindle.exceptions import ExecuteDecodeError, InvalidExecuteRequest
from spindle.formats import repr_json
from spindle.utils import fully_qualified_name, load_file, setup_loggers

if TYPE_CHECKING:
    from typing import Optional, TextIO

    from spindle.typedefs import JSON, SettingsType

LOGGER = logging.getLogger(__name__)


def setup_logger_from_options(logger, args):  # pragma: no cover
    # type: (logging.Logger, argparse.Namespace) -> None
    """
    Uses argument parser options to setup logging level from specified flags.

    Setup both the specific CLI logger that is provided and the top-level package logger.
    """
    if args.log_level:
        logger.setLevel(logging.getLevelName(args.log_level.upper()))
    elif args.quiet:
        logger.setLevel(logging.ERROR)
    elif args.verbose:
        logger.setLevel(logging.INFO)
    elif args.debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
    setup_loggers({}, force_stdout=args.stdout, log_file=args.log)
    if logger.name != __meta__.__name__:
        setup_logger_from_options(logging.getLogger(__meta__.__name__), args)


def make_logging_options(parser):
    # type: (argparse.ArgumentParser) -> None
    """
    Defines argument parser options for logging operations.
    """
    log_title = "Logging Arguments"
    log_desc = "Options that configure output logging."
    log_opts = parser.add_argument_group(title=log_title, description=log_desc)
    log_opts.add_argument("--stdout", action="store_true", help="Enforce logging to stdout for display in console.")
    log_opts.add_argument("--log", "--log-file", help="Output file to write generated logs.")
    lvl_opts = log_opts.add_mutually_exclusive_group()
    lvl_opts.add_argument("--quiet", "-q", action="store_true", help="Do not output anything else than error.")
    lvl_opts.add_argument("--debug", "-d", action="store_true", help="Enable extra debug logging.")
    lvl_opts.add_argument("--verbose", "-v", action="store_true", help="Output informative logging details.")
    lvl_names = ["DEBUG", "INFO", "WARN", "ERROR"]
    lvl_opts.add_argument("--log-level", "-l", dest="log_level",
                          choices=list(sorted(lvl_names)), type=str.upper,
                          help="Explicit log level to employ (default: %(default)s, case-insensitive).")


def make_parser():
    # type: () -> argparse.ArgumentParser
    """
    Generate the :term:`CLI` parser.
    """
    log_parser = argparse.ArgumentParser(add_help=False)
    make_logging_options(log_parser)

    desc = f"Run {__meta__.__title__} operations."
    parser = argparse.ArgumentParser(prog=__meta__.__name__, description=desc, parents=[log_parser])
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__meta__.__version__}",
        help="Display the version of the package."
    )
    ops_parsers = parser.add_subparsers(
        title="Operations", dest="operation",
        description="Name of the operation to run."
    )

    op_decode = ops_parsers.add_parser(
        "decode",
        description=(
            "Decode the inputs and outputs of an execution request body. "
            "Result is printed as JSON, with null entries for inputs that could not be decoded."
        ),
        parents=[log_parser],
    )
    op_decode.add_argument(
        "body",
        help=(
            "Execution request body. Allows both JSON and YAML format when using file reference. "
            "Can be provided either with a local file, literal string contents formatted as JSON, "
            "or '-' to read it from standard input."
        )
    )
    op_decode.add_argument(
        "-c", "--config", dest="config",
        help="INI configuration file from which to load 'spindle.*' settings."
    )
    op_decode.add_argument(
        "-s", "--section", dest="section", default=SPINDLE_DEFAULT_INI_SECTION,
        help="Section of the INI configuration file where settings are defined (default: %(default)s)."
    )
    op_decode.add_argument(
        "-S", "--strict", dest="strict", action="store_true",
        help="Fail the operation if any input value cannot be decoded instead of reporting it as null."
    )
    op_decode.add_argument(
        "-i", "--indent", dest="indent", type=int, default=2,
        help="Indentation of the printed JSON result (default: %(default)s)."
    )
    return parser


def load_body(body, stdin=None):
    # type: (str, Optional[TextIO]) -> JSON
    """
    Loads the execution body from a file reference, standard input or literal contents.

    :raises InvalidExecuteRequest: if the contents cannot be parsed.
    """
    try:
        if body == "-":
            return yaml.safe_load((stdin or sys.stdin).read())
        if os.path.isfile(body):
            return load_file(body)
        return yaml.safe_load(body)
    except (ValueError, YAMLError) as exc:
        raise InvalidExecuteRequest(f"Cannot parse execution body: {exc!s}")


def decode(body, config=None, section=SPINDLE_DEFAULT_INI_SECTION, strict=False, indent=2, stdin=None):
    # type: (str, Optional[str], str, bool, Optional[int], Optional[TextIO]) -> str
    """
    Decodes the execution body and returns the :term:`JSON` representation of the result.
    """
    settings = {}  # type: SettingsType
    if config:
        settings.update(load_settings(config, section=section))
    if strict:
        settings[SpindleSetting.STRICT_INPUTS] = True
    deserializer = ExecuteDeserializer.from_settings(settings)
    LOGGER.debug("Using %r", deserializer)
    request = deserializer.read_execute(load_body(body, stdin=stdin))
    return repr_json(request.json(), indent=indent)


def main(*args):
    # type: (*str) -> int
    parser = make_parser()
    ns = parser.parse_args(args=args or None)
    setup_logger_from_options(LOGGER, ns)
    kwargs = vars(ns)
    # remove logging params not known by operations
    for param in ["stdout", "log", "log_level", "quiet", "debug", "verbose"]:
        kwargs.pop(param, None)
    oper = kwargs.pop("operation", None)
    LOGGER.debug("Requested operation: [%s]", oper)
    if oper != "decode":
        parser.print_help()
        return 0
    try:
        result = decode(**kwargs)
    except (ExecuteDecodeError, ConfigurationError, OSError) as exc:
        msg = "Operation failed due to exception."
        body = {"message": msg, "cause": str(exc), "error": fully_qualified_name(exc)}
        LOGGER.error("%s failed. %s", oper.title(), msg)
        print(repr_json(body))  # use print in case logger disabled or level error/warn
        return -1
    LOGGER.info("%s successful.", oper.title())
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
