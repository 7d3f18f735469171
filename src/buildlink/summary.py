"""Plain-text build summary for posting on forums."""

from typing import Optional

from .personas import PersonaCatalog
from .selection import Selection
from .url import assemble_link

TITLE = "RockTune Build"


def text_summary(selection: Selection, link_url: Optional[str] = None,
                 personas: Optional[PersonaCatalog] = None) -> str:
    """Render ``selection`` as a short text block ending with its import link.

    ``link_url`` defaults to a freshly assembled link for ``selection``.
    """
    lines = [TITLE, "─" * 40]

    hardware = [v.value.upper() for v in (selection.cpu, selection.gpu) if v]
    if hardware:
        lines.append(f"Hardware: {' + '.join(hardware)}")
    if selection.dns_provider:
        lines.append(f"DNS: {selection.dns_provider.value}")
    if selection.peripherals:
        lines.append(f"Peripherals: {', '.join(p.value for p in selection.peripherals)}")
    if selection.monitor_software:
        lines.append(f"Monitor software: {', '.join(m.value for m in selection.monitor_software)}")
    if selection.persona:
        persona = personas.get(selection.persona) if personas else None
        lines.append(f"Persona: {persona.display_name if persona else selection.persona}")
    if selection.optimizations:
        lines.append(f"Optimizations: {len(selection.optimizations)} enabled")
    if selection.packages:
        lines.append(f"Software: {len(selection.packages)} packages")

    lines.append("")
    lines.append(f"Import: {link_url or assemble_link(selection).url}")
    return "\n".join(lines)
