"""Jinja2 rendering for the small metadata files shipped with the site."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir is not None:
        directories.append(str(templates_dir))
    directories.append(str(TEMPLATES_DIR))
    loader = FileSystemLoader(directories)
    return Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("xml.j2", "html.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render(template_name: str, environment: Environment | None = None, **context: object) -> str:
    env = environment or create_environment()
    return env.get_template(template_name).render(**context)


__all__ = ["TEMPLATES_DIR", "create_environment", "render"]
