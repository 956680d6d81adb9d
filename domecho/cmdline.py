from __future__ import annotations

import io
import itertools
import sys
from typing import List, Union, cast

import docopt
from typing_extensions import Final, TypedDict

from domecho import __version__, echo
from domecho.exceptions import DomEchoError
from domecho.parsing import ValidationMode

# - Assign doc to DOC to keep it if python -OO is used (which strips docstrings)
# - We format spaces into blank lines to work around a bug in docopt-ng's usage
#   parser.
USAGE = """\
usage: domecho [options] [--] <xml-file>...
       domecho --help\
"""

OPTIONS = f"""\
options:
    <xml-file>
        Filesystem path of the XML document to echo. Any argument which is
        not one of the options below is taken to be a file. If more than one
        is given, the last one is used.
{" "}
    --dtd
        Validate the document against its DTD while parsing it. Can also be
        given as -dtd.
{" "}
    --xsd
        Validate the document against the W3C XML Schema named by its
        xsi:schemaLocation or xsi:noNamespaceSchemaLocation attribute. Takes
        precedence over --dtd. Can also be given as -xsd.
{" "}
    --xsdss <xsd-file>
        Validate the document against the W3C XML Schema in <xsd-file>. Can
        also be given as -xsdss <xsd-file>.
{" "}
    --traceback
        Print the Python traceback on errors.
{" "}
    --version
        Print the version and exit.
{" "}
    --help, -h
        Show this help.
"""

__doc__ = DOC = f"""
Print the node tree of an XML document, one node per line, indented by depth.
Validation warnings and errors are printed to stderr as they're found.

{USAGE}

{OPTIONS}"""

# Single-dash spellings of the validation options
LEGACY_OPTIONS: Final = {"-dtd": "--dtd", "-xsd": "--xsd", "-xsdss": "--xsdss"}

FLAG_OPTIONS: Final = frozenset(
    ["--dtd", "--xsd", "--traceback", "--version", "--help", "-h"]
)
VALUE_OPTIONS: Final = frozenset(["--xsdss"])

OUTPUT_ENCODING: Final = "utf-8"

ParsedArgs = TypedDict(
    "ParsedArgs",
    {
        "<xml-file>": List[str],
        "--dtd": bool,
        "--xsd": bool,
        "--xsdss": Union[str, None],
        "--traceback": bool,
        "--version": bool,
        "--help": bool,
        "-h": bool,
        "--": bool,
    },
)


def normalise_argv(argv: list[str]) -> list[str]:
    """
    Rewrite single-dash option spellings to their double-dash forms and move
    every argument which isn't an option after a "--", so that docopt takes
    it as a file name.
    """
    options: list[str] = []
    files: list[str] = []

    args = iter(argv)
    for arg in args:
        arg = LEGACY_OPTIONS.get(arg, arg)

        if arg in VALUE_OPTIONS:
            options.append(arg)
            # A missing value is left for docopt to report
            options.extend(itertools.islice(args, 1))
        elif arg in FLAG_OPTIONS or arg.split("=", 1)[0] in VALUE_OPTIONS:
            options.append(arg)
        elif arg != "--":
            files.append(arg)

    if files:
        return options + ["--"] + files
    return options


def get_validation_mode(args: ParsedArgs) -> ValidationMode:
    # XML Schema validation takes precedence over DTD validation
    if args["--xsd"] or args["--xsdss"] is not None:
        return ValidationMode.XSD
    if args["--dtd"]:
        return ValidationMode.DTD
    return ValidationMode.NONE


def _main(args: ParsedArgs) -> None:
    xml_file = args["<xml-file>"][-1]

    out = io.TextIOWrapper(sys.stdout.buffer, encoding=OUTPUT_ENCODING, newline="\n")
    try:
        echo(
            xml_file,
            out,
            validation=get_validation_mode(args),
            schema_source=args["--xsdss"],
        )
    finally:
        out.flush()
        # Leave sys.stdout's buffer open
        out.detach()


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = cast(
            ParsedArgs,
            docopt.docopt(DOC, version=__version__, argv=normalise_argv(argv)),
        )
    except docopt.DocoptExit as e:
        if e.code:
            # docopt-ng's own messages for bad options are confusing, so
            # print the usage and option docs instead.
            print(
                f"""\
domecho couldn't understand the command line options it received.

{USAGE}

{OPTIONS}""",
                file=sys.stderr,
                end="",
            )
            raise SystemExit(1) from e
        raise e
    try:
        _main(args)
    except DomEchoError as e:
        print(f"fatal: {e}", file=sys.stderr)

        if args["--traceback"]:
            import traceback

            print("\n--traceback on, full traceback follows:\n", file=sys.stderr)
            traceback.print_exc()

        sys.exit(1)


if __name__ == "__main__":
    main()
