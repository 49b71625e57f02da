"""Shared utilities for checking external tool dependencies and their versions."""

import re
import subprocess


def parse_version_tuple(version_str: str) -> tuple[int, ...]:
    """Parse a version string like '3.100' or '6.1.1' into a tuple of ints."""
    return tuple(int(x) for x in version_str.split("."))


def _check_version(
    tool: str,
    args: list[str],
    pattern: str,
    min_version: tuple[int, ...],
    max_version_exclusive: tuple[int, ...] | None,
) -> str:
    try:
        result = subprocess.run(
            [tool, *args], capture_output=True, text=True, timeout=5, check=False,
        )
    except FileNotFoundError:
        raise RuntimeError(f"Required tool not found: {tool}")

    output = result.stdout + result.stderr
    match = re.search(pattern, output)
    if not match:
        raise RuntimeError(f"Could not parse {tool} version from output: {output.strip()[:200]!r}")

    version_str = match.group(1)
    version = parse_version_tuple(version_str)

    too_new = max_version_exclusive is not None and version >= max_version_exclusive
    if version < min_version or too_new:
        required = f">= {'.'.join(map(str, min_version))}"
        if max_version_exclusive is not None:
            required += f" and < {'.'.join(map(str, max_version_exclusive))}"
        raise RuntimeError(f"{tool} version {version_str} is not supported. Required: {required}")

    return version_str


def check_ffmpeg(min_version: tuple[int, ...] = (4, 0)) -> str:
    """Verify ffmpeg is available and recent enough.

    Parses version from output like 'ffmpeg version 6.1.1-3ubuntu5 Copyright ...'
    or 'ffmpeg version n7.0'.

    Returns:
        The detected version string.

    Raises:
        RuntimeError: If ffmpeg is not found or version is out of range.
    """
    return _check_version("ffmpeg", ["-version"], r"ffmpeg version n?(\d+\.\d+(?:\.\d+)?)", min_version, None)


def check_lame(
    min_version: tuple[int, ...] = (3, 98),
    max_version_exclusive: tuple[int, ...] = (4,),
) -> str:
    """Verify lame is available and within the required version range.

    Parses version from output like 'LAME 64bits version 3.100 (http://lame.sf.net)'.
    """
    return _check_version("lame", ["--version"], r"LAME .*?version (\d+\.\d+(?:\.\d+)?)", min_version, max_version_exclusive)
