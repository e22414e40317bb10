"""Config template rendering for the carbon-clickhouse fixture.

Templates are Jinja2 files rendered with StrictUndefined, so a template that
references a parameter the fixture does not provide fails instead of
rendering an empty string. Go-style field references (``{{.CCH_ADDR}}``) used
by existing carbon-clickhouse test templates are accepted as well.
"""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound, TemplateSyntaxError

from cch_fixture.exceptions import ConfigTemplateError

# {{.NAME}}, {{ .NAME }}, {{- .NAME -}}
GO_FIELD_REFERENCE = re.compile(r"\{\{(-?)\s*\.(\w+)\s*(-?)\}\}")


def convert_go_field_references(source: str) -> str:
    """Rewrite Go template field references into Jinja2 variable references."""
    return GO_FIELD_REFERENCE.sub(r"{{\1 \2 \3}}", source)


class ConfigTemplateLoader(FileSystemLoader):
    """FileSystemLoader that accepts Go-style ``{{.NAME}}`` references."""

    def get_source(self, environment, template):
        source, filename, uptodate = super().get_source(environment, template)
        return convert_go_field_references(source), filename, uptodate


def render_config_template(template_dir: str | Path, template_name: str, **params: str) -> str:
    """Render a config template with the provided parameters.

    The template path is joined to ``template_dir`` as a plain path, so it may
    point outside of it (e.g. ``../shared/carbon-clickhouse.conf.tpl``).

    Args:
        template_dir: Base directory templates are resolved against.
        template_name: Template path relative to ``template_dir``.
        **params: Variables passed to the template context.

    Returns:
        The rendered config text.

    Raises:
        ConfigTemplateError: With stage ``locate`` if the template does not exist,
            ``parse`` on invalid syntax and ``render`` on any other template error.
    """
    template_path = Path(template_dir) / template_name
    env = Environment(
        loader=ConfigTemplateLoader(template_path.parent),
        undefined=StrictUndefined,
        autoescape=False,  # Config files, not HTML
        keep_trailing_newline=True,
    )

    try:
        template = env.get_template(template_path.name)
    except TemplateNotFound as e:
        raise ConfigTemplateError("locate", str(template_path), f"template not found: {e}") from e
    except TemplateSyntaxError as e:
        raise ConfigTemplateError("parse", str(template_path), f"line {e.lineno}: {e.message}") from e

    try:
        return template.render(**params)
    except TemplateError as e:
        raise ConfigTemplateError("render", str(template_path), str(e)) from e


def write_config_file(directory: Path, file_name: str, content: str, *, template_path: str = "") -> Path:
    """Write rendered config into ``directory/file_name``.

    Raises:
        ConfigTemplateError: With stage ``write`` if the file cannot be written.
    """
    config_file = directory / file_name
    try:
        config_file.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigTemplateError("write", template_path or file_name, str(e)) from e
    return config_file


__all__ = [
    "ConfigTemplateLoader",
    "convert_go_field_references",
    "render_config_template",
    "write_config_file",
]
