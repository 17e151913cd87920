"""
Device sources - Load device snapshots from JSON or YAML files.

A snapshot file holds one device:

    slug: acme-bulb
    name: Acme Smart Bulb
    vendor: Acme
    versions:                      # latest first
      - software_version: "2.1"
        endpoints:
          - endpoint_id: 1
            device_types: [257]
            server_clusters: [3, 4, 6, 8, 98]
            client_clusters: []

A single-version device may list ``endpoints`` at the top level instead
of ``versions``. The slug defaults to the file name.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .models import DeviceSnapshot

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


class DeviceSourceError(ValueError):
    """A file could not be read as a device snapshot."""


def _read(path: Path) -> Any:
    suffix = path.suffix.lower()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if suffix in JSON_SUFFIXES:
                return json.load(f)
            if suffix in YAML_SUFFIXES:
                return yaml.safe_load(f)
    except OSError as e:
        raise DeviceSourceError(f"Cannot read {path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise DeviceSourceError(f"Cannot parse {path}: {e}") from e

    raise DeviceSourceError(f"Unsupported file type: {path.name}")


def parse_device(data: Any, default_slug: str = "") -> DeviceSnapshot:
    """
    Build a snapshot from already-decoded data.

    Raises:
        DeviceSourceError: If the data does not describe a device
    """
    if not isinstance(data, dict):
        raise DeviceSourceError("Device data must be a mapping")
    if "versions" not in data and "endpoints" not in data:
        raise DeviceSourceError("Device data needs 'versions' or 'endpoints'")

    record: Dict[str, Any] = dict(data)
    record.setdefault("slug", default_slug)
    if not record["slug"]:
        raise DeviceSourceError("Device data has no slug")

    return DeviceSnapshot.from_dict(record)


def load_device(path: Union[str, Path]) -> DeviceSnapshot:
    """
    Load one device snapshot from a JSON or YAML file.

    Raises:
        DeviceSourceError: If the file is unreadable or not a snapshot
    """
    path = Path(path)
    data = _read(path)
    try:
        device = parse_device(data, default_slug=path.stem)
    except DeviceSourceError as e:
        raise DeviceSourceError(f"{path}: {e}") from e

    logger.debug(f"Loaded device {device.slug} ({len(device.versions)} versions) from {path.name}")
    return device


def load_devices(directory: Union[str, Path]) -> List[DeviceSnapshot]:
    """
    Load every snapshot file in a directory, sorted by file name.

    Files that fail to load are logged and skipped.

    Raises:
        DeviceSourceError: If ``directory`` is not a directory
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DeviceSourceError(f"Not a directory: {directory}")

    devices = []
    for path in sorted(directory.iterdir()):
        if path.suffix.lower() not in JSON_SUFFIXES | YAML_SUFFIXES:
            continue
        try:
            devices.append(load_device(path))
        except DeviceSourceError as e:
            logger.error(f"Failed to load device: {e}")

    logger.info(f"Loaded {len(devices)} devices from {directory}")
    return devices
