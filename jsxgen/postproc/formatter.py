"""Prettier adapter for generated JSX modules."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..errors import FormatterError
from ..logging import get_logger
from ..codegen.naming import to_camel_case

# Prettier options whose default is true; false must be passed as --no-<flag>.
_NEGATABLE_OPTIONS = {"semi", "bracket-spacing"}


@dataclass
class FormatRequest:
    """Source text plus the file name Prettier uses to pick a parser."""

    source: str
    filename: str
    executable: str
    args: Sequence[str]
    timeout: Optional[float]


class SourceFormatter:
    """Formats generated modules, returning the raw text when formatting fails."""

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        executable: str = "prettier",
        timeout: Optional[float] = 30.0,
        enabled: bool = True,
        runner: Callable[[FormatRequest], str] | None = None,
    ) -> None:
        self.options = dict(options or {})
        self.executable = executable
        self.timeout = timeout
        self.enabled = enabled
        self._runner = runner or self._cli_runner
        self.logger = get_logger("formatter")

    def format(self, source: str, filename: str) -> str:
        if not self.enabled:
            return source
        request = FormatRequest(
            source=source,
            filename=filename,
            executable=self.executable,
            args=prettier_arguments(self.options),
            timeout=self.timeout,
        )
        try:
            formatted = self._runner(request)
        except FormatterError as exc:
            self.logger.warning(
                "Could not format %s with Prettier. Writing raw content. Error: %s", filename, exc
            )
            return source
        if not formatted.strip():
            self.logger.warning("Prettier returned no output for %s. Writing raw content.", filename)
            return source
        return formatted

    def _cli_runner(self, request: FormatRequest) -> str:
        command = [request.executable, "--stdin-filepath", request.filename, *request.args]
        try:
            completed = subprocess.run(
                command,
                input=request.source,
                capture_output=True,
                text=True,
                check=True,
                timeout=request.timeout,
            )
        except FileNotFoundError as exc:
            # No point retrying every file once the executable is known to be missing.
            self.enabled = False
            raise FormatterError(f"{request.executable} executable not found") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip().splitlines()
            raise FormatterError(detail[0] if detail else f"exit status {exc.returncode}") from exc
        except subprocess.TimeoutExpired as exc:
            raise FormatterError(f"timed out after {request.timeout}s") from exc
        return completed.stdout


def prettier_arguments(options: Mapping[str, Any]) -> List[str]:
    """Translate a Prettier options mapping into CLI flags."""
    args: List[str] = []
    for key, value in options.items():
        flag = _kebab(key)
        if isinstance(value, bool):
            if value:
                args.append(f"--{flag}")
            elif flag in _NEGATABLE_OPTIONS:
                args.append(f"--no-{flag}")
        elif value is None:
            continue
        else:
            args.extend([f"--{flag}", str(value)])
    return args


def _kebab(name: str) -> str:
    camel = to_camel_case(name)
    return "".join(f"-{char.lower()}" if char.isupper() else char for char in camel)


__all__ = ["FormatRequest", "SourceFormatter", "prettier_arguments"]
