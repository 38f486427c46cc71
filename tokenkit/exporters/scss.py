"""SCSS variables exporter."""

from ..models import CollectionVariableDetail
from .base import Exporter, ExportOptions, dash_name


class SCSSExporter(Exporter):
    """Renders a flat list of ``$name: value;`` lines per mode."""

    @property
    def format_name(self) -> str:
        return "scss"

    def render_reference(self, target_name: str) -> str:
        return f"${dash_name(target_name)}"

    def render_document(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        sections = []
        for mode in options.modes:
            lines = [f"// Mode: {mode.name}"]
            for variable in variables:
                value = self.render_text(variable, mode.mode_id, options)
                lines.append(f"${dash_name(variable.name)}: {value};")
            sections.append("\n".join(lines))
        return "\n\n".join(sections)
