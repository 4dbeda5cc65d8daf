"""Serialization utilities for network topologies.

This module converts topologies to and from plain dictionaries. Devices are
encoded as a discriminated union tagged by ``kind`` so that any JSON, YAML
or other textual format can carry them without type reflection.
"""

from typing import Any, Dict, List, Optional

from netroute_sim.core.device import Device
from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.exceptions import NetworkSimError, TopologyFormatError
from netroute_sim.core.topology import Topology


def device_to_dict(device: Device) -> Dict[str, Any]:
    """Encode a device.

    Args:
        device: Device to encode.

    Returns:
        Dictionary such as ``{"kind": "PC", "id": "pc1", "name": "Office"}``.
    """
    return {"kind": device.kind.label, "id": device.id, "name": device.name}


def device_from_dict(data: Dict[str, Any]) -> Device:
    """Decode a device encoded by ``device_to_dict``.

    Raises:
        TopologyFormatError: If the kind or id is missing or invalid.
    """
    try:
        kind = DeviceKind.parse(data["kind"])
        return Device(data["id"], data.get("name"), kind)
    except (KeyError, TypeError, AttributeError, NetworkSimError) as exc:
        raise TopologyFormatError(f"Invalid device entry: {data!r}") from exc


def topology_to_dict(topology: Topology) -> Dict[str, Any]:
    """Encode a topology as devices plus directed links.

    Args:
        topology: Topology to encode.

    Returns:
        Dictionary with ``devices`` and ``links`` lists. Links reference
        devices by id.
    """
    devices: List[Dict[str, Any]] = [
        device_to_dict(device) for device in topology.all_devices()
    ]
    links: List[Dict[str, Any]] = [
        {
            "source": link.source.id,
            "target": link.target.id,
            "latency": link.latency,
        }
        for link in topology.all_links()
    ]
    return {"devices": devices, "links": links}


def topology_from_dict(
    data: Dict[str, Any], topology: Optional[Topology] = None
) -> Topology:
    """Decode a topology encoded by ``topology_to_dict``.

    Args:
        data: Encoded topology.
        topology: Topology to fill (a new one if omitted).

    Returns:
        The decoded topology.

    Raises:
        TopologyFormatError: If the data is malformed or a link references
            an unknown device id.
    """
    if not isinstance(data, dict):
        raise TopologyFormatError("Topology data must be a mapping.")
    if topology is None:
        topology = Topology()

    devices: Dict[str, Device] = {}
    for entry in data.get("devices", []):
        device = device_from_dict(entry)
        if device.id in devices:
            raise TopologyFormatError(f"Duplicate device id: {device.id}")
        devices[device.id] = device
        topology.add_device(device)

    for entry in data.get("links", []):
        try:
            source = devices[entry["source"]]
            target = devices[entry["target"]]
            latency = float(entry["latency"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TopologyFormatError(f"Invalid link entry: {entry!r}") from exc
        if latency < 0:
            raise TopologyFormatError(f"Negative latency in link entry: {entry!r}")
        topology.connect(source, target, latency)

    return topology
