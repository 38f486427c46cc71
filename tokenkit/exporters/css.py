"""CSS custom properties exporter."""

from ..models import CollectionVariableDetail
from .base import Exporter, ExportOptions, dash_name


class CSSExporter(Exporter):
    """Renders one ``:root`` block of custom properties per mode.

    Aliases render as ``var(--target-name)`` when exporting in alias mode.
    """

    @property
    def format_name(self) -> str:
        return "css"

    def render_reference(self, target_name: str) -> str:
        return f"var(--{dash_name(target_name)})"

    def render_document(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        blocks = []
        for mode in options.modes:
            lines = [f"/* Mode: {mode.name} */", ":root {"]
            for variable in variables:
                value = self.render_text(variable, mode.mode_id, options)
                lines.append(f"  --{dash_name(variable.name)}: {value};")
            lines.append("}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)
