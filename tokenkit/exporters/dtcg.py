"""W3C Design Tokens Format (DTCG) exporter.

The output follows the draft's structure (``$type``, ``$value``,
``$description``) but is not validated against the schema.
"""

import json
from typing import Any

from ..models import CollectionVariableDetail
from .base import Exporter, ExportOptions, dot_name, slug

REF_KEY = "$ref"
MODES_KEY = "$modes"


class DTCGExporter(Exporter):
    """Renders a ``$modes`` object with a nested token tree per mode.

    Names are split on ``/`` and each segment is slugged. A leaf overwrites
    whatever sits at its key, while a deeper name nests inside an existing
    object at an intermediate key (even a leaf).
    """

    @property
    def format_name(self) -> str:
        return "dtcg"

    def render_reference(self, target_name: str) -> dict[str, str]:
        return {REF_KEY: dot_name(target_name)}

    def build_tree(
        self,
        variables: list[CollectionVariableDetail],
        mode_id: str,
        options: ExportOptions,
    ) -> dict[str, Any]:
        """Build the nested token tree for one mode."""
        root: dict[str, Any] = {}
        for variable in variables:
            parts = [slug(part) for part in variable.name.split("/")]
            leaf: dict[str, Any] = {"$type": variable.type.value}
            if variable.description is not None:
                leaf["$description"] = variable.description
            leaf["$value"] = self.render_value(variable, mode_id, options)

            current = root
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[parts[-1]] = leaf
        return root

    def render_document(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        modes = {
            mode.name: self.build_tree(variables, mode.mode_id, options)
            for mode in options.modes
        }
        return json.dumps({MODES_KEY: modes}, indent=2, ensure_ascii=False)
