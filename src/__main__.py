#!/usr/bin/env python3
"""
zinepress - Static magazine builder for markdown content

Reads a zine.yaml site definition with its authors and markdown articles and
writes one static HTML page per article, per author, plus an author list
and an index.

Usage:
    zinepress inputdir/ outputdir/

    inputdir (or one of its parents) must contain zine.yaml. A static/
    directory next to it is copied to the output as-is.

Examples:
    # Basic build
    zinepress . build/

    # Into a subdirectory, verbose
    zinepress . build/ --outputSubdir site/ -vv

    # Point @mentions at another profile host
    zinepress . build/ --mentionUrl "https://gitlab.com/{name}"
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    Context,
    ZineError,
    __version__,
    LOG,
    dir_copy,
    site_load,
    state_connectToLogger,
    zineFolder_find,
)
from .models import ProgramState, pipeline


parser = ArgumentParser(
    description="zinepress - static magazine builder for markdown content",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the built site",
)

parser.add_argument(
    "--mentionUrl",
    default=None,
    type=str,
    help="Profile URL template for `@name` mentions, e.g. https://github.com/{name}",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def stage_fail(message: str, state: ProgramState) -> None:
    print(message, file=sys.stderr)
    if state.verbosity >= 3 or appsettings.debug_mode:
        import traceback

        traceback.print_exc()
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Locate the site root and prepare the output directory.

    Returns:
        ProgramState with added fields:
            - siteRoot: Directory holding zine.yaml
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if no zine.yaml is found at or above inputdir
    """
    state = inputstate.copy()
    LOG("Checking environment...", level=2)

    found = zineFolder_find(state.inputdir)
    if found is None:
        state.envOK = False
        stage_fail(f"Error: No {appsettings.site_file} found in {state.inputdir} or its parents", state)
    state.siteRoot = found[0]
    LOG(f"Site root: {state.siteRoot}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def site_parse(inputstate: ProgramState) -> ProgramState:
    """
    Load zine.yaml and parse every author and article.

    Returns:
        ProgramState with added field:
            - site: Parsed Site entity

    Exits:
        1 on malformed metadata, unreadable articles or invalid dates
    """
    state = inputstate.copy()
    LOG("Parsing site...", level=1)

    try:
        site = site_load(state.siteRoot)
        site.mention_url = state.mentionUrl
        site.parse(state.siteRoot)
    except ZineError as e:
        stage_fail(f"Error: {e}", state)
    LOG(f"Parsed {len(site.articles)} articles, {len(site.authors)} authors", level=2)

    state.site = site
    return state


def site_render(inputstate: ProgramState) -> ProgramState:
    """
    Render all pages and copy static assets.

    Returns:
        ProgramState with added field:
            - pageCount: Number of pages written

    Exits:
        1 if rendering fails
    """
    state = inputstate.copy()
    LOG("Rendering pages...", level=1)

    if state.site is None:
        stage_fail("Error: No parsed site available", state)

    try:
        state.pageCount = state.site.render(Context(), state.htmlOutputdir)
        static_dir = state.siteRoot / "static"
        if static_dir.is_dir():
            dir_copy(static_dir, state.htmlOutputdir)
            LOG("Copied static/ to output", level=2)
    except (ZineError, OSError) as e:
        stage_fail(f"Render error: {e}", state)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """Display build results (terminal pipeline stage)."""
    state: ProgramState = inputstate.copy()
    if not state.pageCount:
        stage_fail("Error: Build produced no pages", state)

    LOG("\n✓ Build successful!", level=1)
    LOG(f"  Output: {state.htmlOutputdir}", level=1)
    LOG(f"  Pages:  {state.pageCount}", level=1)
    LOG("\nTo view:", level=1)
    LOG(f"  cd {state.htmlOutputdir}", level=1)
    LOG("  python3 -m http.server 8000", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="zinepress - static magazine builder",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - build the static site found at inputdir into outputdir.

    Pipeline:
        1. env_check: Locate zine.yaml, create output directory
        2. site_parse: Load metadata, read articles
        3. site_render: Write pages, copy static assets
        4. results_report: Display results
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )
    state_connectToLogger(state)
    pipeline(state, env_check, site_parse, site_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
