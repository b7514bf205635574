"""License banner rendering from the project's lodash-style header template."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping

from pydantic import ValidationError

from .errors import ConfigurationError
from .schemas.build import PackageMetadata

_TAG_RE = re.compile(r"<%(=?)\s*(.*?)\s*%>", re.DOTALL)
_IF_RE = re.compile(r"^if\s*\(\s*(!?)\s*([A-Za-z_$][\w$]*)\s*\)\s*\{$")
_ELSE_RE = re.compile(r"^\}\s*else\s*\{$")
_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def render_template(template: str, context: Mapping[str, object]) -> str:
    """Render the subset of lodash ``_.template`` used by license headers.

    Supports ``<%= name %>`` interpolation and ``<% if (flag) { %>`` /
    ``<% } else { %>`` / ``<% } %>`` blocks, including ``!flag``.
    """

    output: List[str] = []
    # Each frame: (parent emitting, branch condition).
    stack: List[tuple[bool, bool]] = []
    emitting = True
    position = 0

    for match in _TAG_RE.finditer(template):
        if emitting:
            output.append(template[position:match.start()])
        position = match.end()
        interpolate, body = match.group(1), match.group(2)

        if interpolate:
            if not _NAME_RE.match(body):
                raise ConfigurationError(f"Unsupported template expression: <%= {body} %>")
            if body not in context:
                raise ConfigurationError(f"Template variable '{body}' is not defined.")
            if emitting:
                output.append(str(context[body]))
            continue

        condition = _IF_RE.match(body)
        if condition:
            negate, name = condition.groups()
            if name not in context:
                raise ConfigurationError(f"Template variable '{name}' is not defined.")
            value = bool(context[name]) != bool(negate)
            stack.append((emitting, value))
            emitting = emitting and value
        elif _ELSE_RE.match(body):
            if not stack:
                raise ConfigurationError("Template 'else' without matching 'if'.")
            parent, value = stack.pop()
            stack.append((parent, not value))
            emitting = parent and not value
        elif body == "}":
            if not stack:
                raise ConfigurationError("Template block closed without matching 'if'.")
            emitting = stack.pop()[0]
        else:
            raise ConfigurationError(f"Unsupported template statement: <% {body} %>")

    if stack:
        raise ConfigurationError("Template has an unterminated 'if' block.")
    if emitting:
        output.append(template[position:])
    return "".join(output)


def load_package_metadata(path: Path) -> PackageMetadata:
    """Load version and copyright from ``package.json``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Package metadata not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to read package metadata {path}: {exc}") from exc
    try:
        return PackageMetadata.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid package metadata in {path}: {exc}") from exc


@dataclass(frozen=True)
class BannerSource:
    """Template text and package metadata, loaded once per invocation."""

    template: str
    metadata: PackageMetadata

    @classmethod
    def load(cls, template_path: Path, package_json: Path) -> "BannerSource":
        try:
            template = template_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Unable to read license template {template_path}: {exc}") from exc
        return cls(template=template, metadata=load_package_metadata(package_json))

    def render(self, *, includes_vtt: bool) -> str:
        context = {
            "version": self.metadata.version,
            "copyright": self.metadata.copyright,
            "includesVtt": includes_vtt,
        }
        return render_template(self.template, context)
