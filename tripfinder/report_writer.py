"""
Writers for query results (HTML select lists, JSON).
"""
import json
import os
from typing import Any, Dict

from tripfinder.logger import get_logger
from tripfinder.report_render import render_html_report

logger = get_logger("report_writer")


def render_and_write_html(template_name: str, data: Dict[str, Any], output_path: str) -> None:
    """
    Render a template with data and write to an HTML file.

    Args:
        template_name: Name of the Jinja2 template file
        data: Dictionary containing data to render in the template
        output_path: Path where the HTML file should be written
    """
    try:
        html_output = render_html_report(template_name, data)

        os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_output)

        logger.debug(f"HTML written to: {output_path}")
    except Exception as e:
        logger.error(f"Error writing HTML to {output_path}: {e}")
        raise


def write_result_json(output_dir: str, filename: str, data: Any, pretty: bool = False) -> str:
    """
    Write a query result to a JSON file.

    Returns:
        The path of the written file.
    """
    file_path = os.path.join(output_dir, filename)
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(data, f, ensure_ascii=False, indent=2)
            else:
                json.dump(data, f, ensure_ascii=False, separators=(',', ':'))

        logger.info(f"Result JSON written to: {file_path}")
    except Exception as e:
        logger.error(f"Error writing result JSON to {file_path}: {e}")
        raise
    return file_path
