# fgprint/utils/html_helpers.py

import html
import re
from typing import Mapping

PLACEHOLDER_RE = re.compile(r"\{\{\s*[A-Za-z0-9_]+\s*\}\}")


def escape_html(value) -> str:
    """
    Escape &, <, > and quotes so backend text can't break the label markup.
    """
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def replace_placeholders_in_template(template: str, mapping: Mapping[str, str]) -> str:
    """
    Replace every placeholder like "{{part_name}}" in `template` with
    mapping["{{part_name}}"]. Single pass, so inserted values are never
    scanned again. Unknown placeholders are left untouched.
    Values are inserted as-is; escape them first.
    """
    return PLACEHOLDER_RE.sub(lambda m: mapping.get(m.group(0), m.group(0)), template)
