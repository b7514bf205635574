"""Entry-module synthesis for feature-selected builds."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator

from .errors import FilesystemError
from .features import CUSTOM_FEATURES, FeatureRegistry

CORE_BINDING = "videojs"


def render_entry(features: Iterable[str], registry: FeatureRegistry = CUSTOM_FEATURES) -> str:
    """Render the entry module source for an already normalised feature set.

    The core module is imported once and re-exported as the default export;
    each optional feature contributes side-effect imports in registry order,
    so the text depends only on the set of keys, never on selection order.
    """

    core = registry.core()
    selected = set(features)
    lines = [f"import {CORE_BINDING} from '{ref}';" for ref in core.source_refs[:1]]
    lines.append(f"export default {CORE_BINDING};")
    for descriptor in registry.ordered(selected):
        if descriptor.required:
            continue
        lines.extend(f"import '{ref}';" for ref in descriptor.source_refs)
    return "\n".join(lines) + "\n"


@contextlib.contextmanager
def scoped_file(directory: Path, content: str, *, prefix: str, suffix: str) -> Iterator[Path]:
    """Write ``content`` to a unique file in ``directory`` and remove it on exit."""

    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
    except OSError as exc:
        raise FilesystemError(f"Unable to write temporary file in {directory}: {exc}") from exc

    path = Path(name)
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Unable to remove temporary file {path}: {exc}") from exc


def scoped_entry_module(directory: Path, content: str) -> contextlib.AbstractContextManager[Path]:
    """Scoped temporary entry module; relative imports resolve from ``directory``."""

    return scoped_file(directory, content, prefix=".videojs-entry-", suffix=".js")
