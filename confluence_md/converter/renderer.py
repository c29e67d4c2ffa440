"""Invoke pandoc to render normalized HTML into Markdown files."""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import subprocess
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from confluence_md.config import PandocConfig

logger = logging.getLogger(__name__)


class RendererNotFoundError(FileNotFoundError):
    """Raised when the pandoc executable cannot be located."""


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """Completion record of one pandoc invocation."""

    target: Path
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Return True when pandoc exited successfully."""
        return self.returncode == 0


def run_pandoc(
    args: list[str], *, input_text: str, cwd: Path
) -> subprocess.CompletedProcess[str]:
    """Run pandoc with ``args``, feeding ``input_text`` on stdin."""
    return subprocess.run(  # noqa: S603
        args,
        input=input_text,
        cwd=cwd,
        check=False,
        text=True,
        encoding="utf-8",
        capture_output=True,
    )


class PandocRenderer:
    """Render HTML text to a Markdown file with the configured pandoc.

    Parameters
    ----------
    config : PandocConfig
        Executable, formats, and extra arguments for pandoc.

    Raises
    ------
    RendererNotFoundError
        If the configured executable is not on ``PATH``.
    """

    def __init__(self, config: PandocConfig) -> None:
        executable = shutil.which(config.executable)
        if not executable:
            msg = f"Unable to locate '{config.executable}' on PATH"
            raise RendererNotFoundError(msg)
        self.executable = executable
        self.config = config

    def command(self, target: Path) -> list[str]:
        """Return the pandoc argument list that writes to ``target``."""
        return [
            self.executable,
            "-f",
            self.config.input_format,
            "-t",
            self.config.output_format,
            *self.config.extra_args,
            "-o",
            str(target),
        ]

    def render(self, html: str, target: Path) -> RenderResult:
        """Render ``html`` into ``target`` and wait for pandoc to finish.

        A non-zero exit status is logged and reported in the result; it does
        not raise, so the caller can continue with the next page. pandoc runs
        inside the target directory, so the output path is made absolute first.
        """
        output = target.resolve()
        output.parent.mkdir(parents=True, exist_ok=True)
        completed = run_pandoc(
            self.command(output), input_text=html, cwd=output.parent
        )
        result = RenderResult(
            target=target,
            returncode=completed.returncode,
            stderr=(completed.stderr or "").strip(),
        )
        if not result.ok:
            logger.error(
                "pandoc failed for %s (exit %d): %s",
                target,
                result.returncode,
                result.stderr,
            )
        return result


__all__ = ["PandocRenderer", "RenderResult", "RendererNotFoundError", "run_pandoc"]
