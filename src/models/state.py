"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing build stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Callable, TYPE_CHECKING
from dataclasses import dataclass, field, fields

if TYPE_CHECKING:
    from ..lib.entity import Site


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the site build pipeline.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, outputSubdir, mentionUrl
        - env_check: siteRoot, htmlOutputdir, envOK
        - site_parse: site
        - site_render: pageCount
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding zine.yaml (or below it)
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        outputSubdir: Subdirectory within outputdir for the built site
        mentionUrl: Optional override of the @mention profile URL template
        envOK: Environment validation passed
        siteRoot: Directory where zine.yaml was found
        htmlOutputdir: Final output directory (outputdir / outputSubdir)
        site: Parsed Site entity
        pageCount: Number of pages written
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    outputSubdir: str = field(default=".")
    mentionUrl: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    siteRoot: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    site: Optional["Site"] = field(default=None)
    pageCount: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options without a matching field are ignored.
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**{**filtered_options, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """Shallow copy of the state"""
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Example:
        final_state = pipeline(state, env_check, site_parse, site_render, results_report)

    is equivalent to:
        results_report(site_render(site_parse(env_check(state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
