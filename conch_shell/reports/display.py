"""Display rules for component types and component names.

The Manta job reports components with field-style keys (``sas_hdd_num``).
``ComponentDisplay`` holds the table that turns those into readable labels
and the set of component types whose per-component breakdown is not shown.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ComponentDisplay:
    """Label lookup and breakdown exclusions for report output."""

    labels: dict[str, str] = field(default_factory=dict)
    # (component name, component type) -> label; wins over ``labels``.
    category_labels: dict[tuple[str, str], str] = field(default_factory=dict)
    excluded_types: frozenset[str] = frozenset()

    def prettify(self, name: str, category: str) -> str:
        """Human label for a component name; unknown names show the type."""
        label = self.category_labels.get((name, category))
        if label is not None:
            return label
        return self.labels.get(name, category)

    def shows_breakdown(self, component_type: str) -> bool:
        return component_type not in self.excluded_types


DEFAULT_DISPLAY = ComponentDisplay(
    labels={
        "bios_firmware_version": "BIOS Firmware Revision",
        "product_name": "Product Name",
        "sas_hdd_num": "Number of SAS HDDs",
        "sas_ssd_num": "Number of SAS SSDs",
        "usb_hdd_num": "Number of USB HDDs",
        "links_up": "Number of Active Links",
        "nics_num": "Number of Network Interfaces",
        "num_peer_switch_ports": "Number of Peer Switch Ports",
        "num_switch_peers": "Number of Switch Peers",
        "switch_peer": "Switch Peer",
        "dimm_count": "DIMM Count",
        "ram_total": "Total RAM Size",
    },
    category_labels={
        ("product_name", "BIOS"): "Firmware Programming Issue",
    },
    excluded_types=frozenset({"SAS_SSD", "SATA_SSD", "SAS_HDD", "CPU"}),
)


def prettify(name: str, category: str) -> str:
    return DEFAULT_DISPLAY.prettify(name, category)
