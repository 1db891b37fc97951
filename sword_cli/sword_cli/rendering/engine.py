"""Project generation engine."""

from __future__ import annotations

import logging
import re
from importlib.resources.abc import Traversable
from pathlib import Path

from ..core.errors import EmptyProjectName, TargetExists, TemplateWriteError
from ..core.models import GenerationRequest
from .io import atomic_write_bytes, ensure_dir
from .tree import bundled_template, is_ignored

logger = logging.getLogger(__name__)

TEMPLATE_ENV_FILENAME = "env.template"
ENV_FILENAME = ".env"


def substitute(text: str, replacements: dict[str, str]) -> str:
    """Replace every token in a single pass.

    Substituted values are never scanned again, so a value that happens to
    contain another token is written verbatim.
    """
    if not replacements:
        return text
    pattern = re.compile("|".join(map(re.escape, replacements)))
    return pattern.sub(lambda match: replacements[match.group(0)], text)


def render_file(source: Traversable, dest: Path, replacements: dict[str, str]) -> Path:
    """Write a single template file.

    Args:
        source: Template file
        dest: Destination directory
        replacements: Token to value mapping applied to text files

    Returns:
        Output file path
    """
    name = ENV_FILENAME if source.name == TEMPLATE_ENV_FILENAME else source.name
    output_path = dest / name

    data = source.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Copying binary file: {output_path}")
    else:
        data = substitute(text, replacements).encode("utf-8")
        logger.debug(f"Rendering template: {output_path}")

    try:
        atomic_write_bytes(output_path, data)
    except OSError as e:
        raise TemplateWriteError(output_path, e.strerror or str(e)) from e
    return output_path


def extract_tree(
    directory: Traversable, dest: Path, replacements: dict[str, str]
) -> list[Path]:
    """Recursively copy a template directory into ``dest``.

    Returns:
        List of output file paths
    """
    outputs: list[Path] = []
    for entry in sorted(directory.iterdir(), key=lambda e: e.name):
        if is_ignored(entry):
            continue
        if entry.is_dir():
            subdir = dest / entry.name
            try:
                ensure_dir(subdir)
            except OSError as e:
                raise TemplateWriteError(subdir, e.strerror or str(e)) from e
            outputs.extend(extract_tree(entry, subdir, replacements))
        else:
            outputs.append(render_file(entry, dest, replacements))
    return outputs


def validate_request(request: GenerationRequest) -> None:
    """Check a request before anything is written.

    Raises:
        EmptyProjectName: the project name is empty
        TargetExists: the target directory exists and init_in_place is off
    """
    if not request.project_name:
        raise EmptyProjectName()
    if not request.init_in_place and request.target_path.exists():
        raise TargetExists(request.target_path)


def generate(
    request: GenerationRequest, template_root: Traversable | None = None
) -> list[Path]:
    """Generate a project from the template tree.

    Args:
        request: Project settings
        template_root: Template directory (default: the bundled base template)

    Returns:
        List of output file paths

    Raises:
        EmptyProjectName: the project name is empty
        TargetExists: the target directory exists and init_in_place is off
        TemplateWriteError: a file or directory could not be written
    """
    validate_request(request)
    target = request.target_path

    root = template_root if template_root is not None else bundled_template()
    logger.info(f"Generating project '{request.project_name}' in {target}")

    try:
        ensure_dir(target)
    except OSError as e:
        raise TemplateWriteError(target, e.strerror or str(e)) from e

    outputs = extract_tree(root, target, request.replacements())

    logger.info(f"Successfully generated {len(outputs)} file(s)")
    return outputs
