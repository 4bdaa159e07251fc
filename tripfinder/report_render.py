"""
Handles Jinja2 HTML rendering of the select lists.
"""
import os
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

# Global template environment for caching
_template_env = None


def _get_template_env() -> Environment:
    """Get or create the global template environment."""
    global _template_env
    if _template_env is None:
        _template_env = Environment(
            loader=FileSystemLoader(os.path.join(os.path.dirname(__file__), 'templates')),
            autoescape=select_autoescape(['html', 'j2']),
            cache_size=50,
            auto_reload=False,
        )
    return _template_env


def render_html_report(template_name: str, data: Dict[str, Any]) -> str:
    env = _get_template_env()
    template = env.get_template(template_name)
    return template.render(**data)
