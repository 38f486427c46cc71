"""Plain JSON exporter."""

import json
from typing import Any

from ..models import CollectionVariableDetail
from .base import Exporter, ExportOptions, dot_name, slug


class JSONExporter(Exporter):
    """Renders one object per mode mapping dotted names to values.

    Mode keys are slugged (``"Dark Mode"`` -> ``"dark-mode"``); aliases
    render as ``{dotted.target}`` in alias mode and missing values as
    ``null``.
    """

    @property
    def format_name(self) -> str:
        return "json"

    def render_reference(self, target_name: str) -> str:
        return f"{{{dot_name(target_name)}}}"

    def render_document(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        document: dict[str, Any] = {}
        for mode in options.modes:
            document[slug(mode.name)] = {
                dot_name(variable.name): self.render_value(variable, mode.mode_id, options)
                for variable in variables
            }
        return json.dumps(document, indent=2, ensure_ascii=False)
