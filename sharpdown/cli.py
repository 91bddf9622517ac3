from __future__ import annotations

import argparse
import os
import sys

from . import config, constants
from . import messages as m


def readSemver() -> str | None:
    try:
        with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
            return fh.read().strip()
    except FileNotFoundError:
        return None


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    # No subcommand means convert stdin to stdout.
    if not argv:
        argv = ["convert"]

    semver = readSemver()
    description = "Converts Markdown text into HTML."
    if semver:
        description = f"Sharpdown v{semver}: {description}"

    argparser = argparse.ArgumentParser(prog="sharpdown", description=description)
    argparser.add_argument("--version", action="version", version=semver or "unknown")
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Hide one more category of message, starting with the least severe. Repeatable.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Print no messages at all.",
    )
    argparser.add_argument(
        "-f",
        "--force",
        dest="errorLevel",
        action="store_const",
        const="nothing",
        help="Never stop on errors; same as --die-on=nothing.",
    )
    argparser.add_argument(
        "-d",
        "--dry-run",
        dest="dryRun",
        action="store_true",
        help="Convert as usual, but don't write the result.",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Keep messages to plain ASCII.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="Message format: 'plain' text, 'console' text with colors (the default on a color terminal), 'markup' tags, or a 'json' array.",
    )
    argparser.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS),
        help="Lowest message category that stops Sharpdown from writing output. Defaults to 'fatal'.",
    )
    argparser.add_argument(
        "--die-when",
        dest="errorTiming",
        choices=m.DEATH_TIMING,
        default="late",
        help="'early' stops at the first such message; 'late' (the default) reports everything first.",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    convertParser = subparsers.add_parser("convert", help="Convert a Markdown file into HTML.")
    convertParser.add_argument(
        "infile",
        nargs="?",
        default="-",
        help='Path to the source file, or stdin ("-", the default).',
    )
    convertParser.add_argument(
        "outfile",
        nargs="?",
        default="-",
        help='Path to the output file, or stdout ("-", the default).',
    )
    convertParser.add_argument(
        "--no-autolink",
        dest="autoHyperlink",
        action="store_false",
        help="Don't turn bare http://, https://, and ftp:// URLs into links.",
    )
    convertParser.add_argument(
        "--auto-newlines",
        dest="autoNewlines",
        action="store_true",
        help="Turn every newline inside a paragraph into a <br>.",
    )
    convertParser.add_argument(
        "--html",
        dest="emptyElementSuffix",
        action="store_const",
        const=">",
        default="/>",
        help="Close void elements HTML-style (<br>) rather than XHTML-style (<br/>).",
    )
    convertParser.add_argument(
        "--empty-element-suffix",
        dest="emptyElementSuffix",
        choices=config.EMPTY_ELEMENT_SUFFIXES,
        help="How void elements are closed. --html is a shorthand for '>'.",
    )
    convertParser.add_argument(
        "--no-encode-urls",
        dest="encodeProblemUrlChars",
        action="store_false",
        help="Leave quotes, parens, and the like in URLs unencoded.",
    )
    convertParser.add_argument(
        "--no-link-emails",
        dest="linkEmails",
        action="store_false",
        help="Leave <address@example.com> alone instead of making it a mailto: link.",
    )
    convertParser.add_argument(
        "--loose-emphasis",
        dest="strictBoldItalic",
        action="store_false",
        help="Allow * and _ emphasis to start or end in the middle of a word.",
    )
    convertParser.add_argument(
        "--standalone",
        dest="standalone",
        action="store_true",
        help="Wrap the output in a full HTML page with a stylesheet.",
    )
    convertParser.add_argument(
        "--style",
        dest="styleFile",
        default=None,
        help="Stylesheet to embed with --standalone, instead of the default one.",
    )
    convertParser.add_argument(
        "--lint",
        dest="lint",
        action="store_true",
        help="Check the output for leftover placeholders, and links or images with nothing to point at.",
    )

    testParser = subparsers.add_parser("test", help="Run Sharpdown's snapshot tests.")
    testParser.add_argument(
        "--rebase",
        default=False,
        action="store_true",
        help="Overwrite the expected .html outputs with what the converter currently produces.",
    )
    testParser.add_argument(
        "--file",
        dest="files",
        nargs="+",
        default=[],
        help="Only run/rebase tests whose filename contains one of these strings.",
    )

    options = argparser.parse_args(argv)
    configureMessages(options)
    constants.dryRun = options.dryRun

    if options.subparserName == "convert":
        handleConvert(options)
    elif options.subparserName == "test":
        handleTest(options)


def configureMessages(options: argparse.Namespace) -> None:
    state = m.state
    state.silent = options.silent
    state.printOn = "nothing" if options.silent else m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        state.dieOn = options.errorLevel
    state.dieWhen = options.errorTiming
    state.asciiOnly = options.asciiOnly
    if options.printMode is not None:
        state.printMode = options.printMode
    elif "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        state.printMode = "plain"
    else:
        state.printMode = "console"


def handleConvert(options: argparse.Namespace) -> None:
    from . import lint
    from .document import composeDocument, defaultStyle
    from .markdown import Markdown

    if options.outfile == "-":
        # The converted document owns stdout.
        m.state.fh = sys.stderr

    try:
        markdownOptions = config.Options(
            autoHyperlink=options.autoHyperlink,
            autoNewlines=options.autoNewlines,
            emptyElementSuffix=options.emptyElementSuffix,
            encodeProblemUrlChars=options.encodeProblemUrlChars,
            linkEmails=options.linkEmails,
            strictBoldItalic=options.strictBoldItalic,
        )
    except ValueError as e:
        m.die(str(e))
        m.retroactivelyCheckErrorLevel("late")
        return

    source = readInput(options.infile)
    if source is None:
        m.retroactivelyCheckErrorLevel("late")
        return

    output = Markdown(markdownOptions).transform(source)
    if options.lint:
        lint.lintFragment(output)
    if options.standalone:
        style = readStyle(options.styleFile) if options.styleFile else defaultStyle()
        if style is None:
            m.retroactivelyCheckErrorLevel("late")
            return
        if source:
            output = composeDocument(output, style)

    m.retroactivelyCheckErrorLevel("late")
    writeOutput(output, options.outfile)


def readInput(infile: str) -> str | None:
    try:
        if infile == "-":
            return sys.stdin.read()
        with open(infile, encoding="utf-8", newline="") as fh:
            return fh.read()
    except OSError as e:
        m.die(f"Couldn't read the input file '{infile}':\n{e}")
        return None
    except UnicodeDecodeError as e:
        m.die(f"The input file '{infile}' isn't valid UTF-8:\n{e}")
        return None


def readStyle(styleFile: str) -> str | None:
    try:
        with open(styleFile, encoding="utf-8") as fh:
            return fh.read()
    except OSError as e:
        m.die(f"Couldn't read the stylesheet '{styleFile}':\n{e}")
        return None


def writeOutput(output: str, outfile: str) -> None:
    if constants.dryRun:
        m.say(f"Dry run, so not writing {len(output)} characters of output.")
        return
    if outfile == "-":
        sys.stdout.write(output)
        if output and not output.endswith("\n"):
            sys.stdout.write("\n")
        return
    try:
        with open(outfile, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(output)
    except OSError as e:
        m.die(f"Couldn't write the output file '{outfile}':\n{e}")
        m.retroactivelyCheckErrorLevel("late")
        return
    m.success(f"Successfully converted, with {m.state.categoryCounts['warning']} warning(s).")


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    m.state.dieOn = "nothing"
    filters = test.TestFilter.fromOptions(options)
    if options.rebase:
        test.rebase(filters)
    else:
        result = test.run(filters)
        sys.exit(0 if result else 1)
