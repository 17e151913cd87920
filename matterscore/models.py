"""
Matter endpoint models and data structures.

Endpoints are parsed from stored telemetry rows. Two row shapes are
accepted:

    Raw telemetry:
        {"endpoint_id": 1, "device_types": [256] or [{"id": 256}],
         "server_clusters": [3, 4, 6], "client_clusters": [],
         "server_cluster_details": [{"id": 6, "feature_map": 1,
                                     "accepted_command_list": [0, 1, 2],
                                     "attribute_list": [0, 16384]}]}

    Explicit clusters:
        {"endpoint_id": 1, "device_type_id": 256,
         "clusters": [{"cluster_id": 6, "side": "server", "feature_map": 1,
                       "commands": [0, 1, 2], "attributes": [0]}]}

Parsing is lenient: a missing or malformed cluster list yields an endpoint
with no clusters, and unparseable cluster entries are skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

SERVER = "server"
CLIENT = "client"


def parse_int(value: Any) -> Optional[int]:
    """Coerce a telemetry value to int, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            return None
    if isinstance(value, dict):
        return parse_int(value.get("id"))
    return None


def parse_int_list(values: Any) -> List[int]:
    if not isinstance(values, (list, tuple)):
        return []
    result = []
    for value in values:
        parsed = parse_int(value)
        if parsed is not None:
            result.append(parsed)
    return result


@dataclass
class ClusterInstance:
    """A cluster implemented on an endpoint, on one side (server or client)."""
    cluster_id: int
    side: str = SERVER
    attributes: List[int] = field(default_factory=list)
    commands: List[int] = field(default_factory=list)
    feature_map: Optional[int] = None

    @property
    def is_server(self) -> bool:
        return self.side == SERVER

    @property
    def has_attribute_list(self) -> bool:
        return bool(self.attributes)

    @property
    def has_command_list(self) -> bool:
        return bool(self.commands)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "side": self.side,
            "attributes": list(self.attributes),
            "commands": list(self.commands),
            "feature_map": self.feature_map,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], side: Optional[str] = None) -> Optional["ClusterInstance"]:
        """Parse one cluster entry. Returns None if it has no usable cluster id."""
        cluster_id = parse_int(data.get("cluster_id", data.get("id")))
        if cluster_id is None:
            return None

        resolved_side = side or data.get("side", SERVER)
        if resolved_side not in (SERVER, CLIENT):
            resolved_side = SERVER

        attributes = data.get("attributes", data.get("attribute_list", []))
        commands = data.get("commands", data.get("accepted_command_list", []))

        return cls(
            cluster_id=cluster_id,
            side=resolved_side,
            attributes=parse_int_list(attributes),
            commands=parse_int_list(commands),
            feature_map=parse_int(data.get("feature_map")),
        )


@dataclass
class Endpoint:
    """A Matter endpoint: one or more device types hosting a set of clusters."""
    endpoint_id: int
    device_type_ids: List[int] = field(default_factory=list)
    clusters: List[ClusterInstance] = field(default_factory=list)

    @property
    def device_type_id(self) -> Optional[int]:
        """Primary device type."""
        return self.device_type_ids[0] if self.device_type_ids else None

    @property
    def is_root(self) -> bool:
        return self.endpoint_id == 0

    def server_cluster_ids(self) -> List[int]:
        return [c.cluster_id for c in self.clusters if c.side == SERVER]

    def client_cluster_ids(self) -> List[int]:
        return [c.cluster_id for c in self.clusters if c.side == CLIENT]

    def get_cluster(self, cluster_id: int, side: str = SERVER) -> Optional[ClusterInstance]:
        """Get a cluster by ID and side."""
        for cluster in self.clusters:
            if cluster.cluster_id == cluster_id and cluster.side == side:
                return cluster
        return None

    def has_cluster(self, cluster_id: int, side: str = SERVER) -> bool:
        return self.get_cluster(cluster_id, side) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpoint_id": self.endpoint_id,
            "device_types": list(self.device_type_ids),
            "clusters": [c.to_dict() for c in self.clusters],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Endpoint":
        """Parse an endpoint from either telemetry row shape."""
        endpoint_id = parse_int(data.get("endpoint_id", data.get("id")))
        if endpoint_id is None:
            endpoint_id = 0

        if "device_types" in data:
            device_type_ids = parse_int_list(data.get("device_types"))
        else:
            single = parse_int(data.get("device_type_id", data.get("device_type")))
            device_type_ids = [single] if single is not None else []

        if "clusters" in data:
            clusters = cls._parse_explicit_clusters(endpoint_id, data.get("clusters"))
        else:
            clusters = cls._parse_telemetry_clusters(endpoint_id, data)

        return cls(endpoint_id=endpoint_id, device_type_ids=device_type_ids, clusters=clusters)

    @staticmethod
    def _parse_explicit_clusters(endpoint_id: int, raw: Any) -> List[ClusterInstance]:
        if not isinstance(raw, list):
            logger.warning(f"Endpoint {endpoint_id}: cluster list is not a list, treating as empty")
            return []

        clusters = []
        for entry in raw:
            cluster = ClusterInstance.from_dict(entry) if isinstance(entry, dict) else None
            if cluster is None:
                logger.warning(f"Endpoint {endpoint_id}: skipping malformed cluster entry {entry!r}")
                continue
            clusters.append(cluster)
        return clusters

    @staticmethod
    def _parse_telemetry_clusters(endpoint_id: int, data: Dict[str, Any]) -> List[ClusterInstance]:
        details: Dict[int, Dict[str, Any]] = {}
        raw_details = data.get("server_cluster_details") or []
        if isinstance(raw_details, list):
            for detail in raw_details:
                if not isinstance(detail, dict):
                    continue
                detail_id = parse_int(detail.get("id"))
                if detail_id is not None:
                    details[detail_id] = detail

        clusters = []
        for side, key in ((SERVER, "server_clusters"), (CLIENT, "client_clusters")):
            raw = data.get(key, [])
            if not isinstance(raw, list):
                logger.warning(f"Endpoint {endpoint_id}: {key} is not a list, treating as empty")
                continue
            for value in raw:
                cluster_id = parse_int(value)
                if cluster_id is None:
                    logger.warning(f"Endpoint {endpoint_id}: skipping malformed cluster id {value!r}")
                    continue
                detail = details.get(cluster_id, {}) if side == SERVER else {}
                clusters.append(ClusterInstance.from_dict({**detail, "id": cluster_id}, side=side))
        return clusters


def parse_endpoints(rows: List[Any]) -> List[Endpoint]:
    """
    Parse endpoint rows, passing through already-parsed Endpoints.

    Raises:
        TypeError: If ``rows`` is not a list or tuple
    """
    if not isinstance(rows, (list, tuple)):
        raise TypeError(f"endpoints must be a list, got {type(rows).__name__}")

    endpoints = []
    for row in rows:
        if isinstance(row, Endpoint):
            endpoints.append(row)
        elif isinstance(row, dict):
            endpoints.append(Endpoint.from_dict(row))
        else:
            logger.warning(f"Skipping endpoint row of type {type(row).__name__}")
    return endpoints


@dataclass
class DeviceVersion:
    """Endpoints reported by one hardware/software version of a device."""
    hardware_version: str = ""
    software_version: str = ""
    endpoints: List[Endpoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hardware_version": self.hardware_version,
            "software_version": self.software_version,
            "endpoints": [ep.to_dict() for ep in self.endpoints],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceVersion":
        raw_endpoints = data.get("endpoints", [])
        if not isinstance(raw_endpoints, list):
            raw_endpoints = []
        return cls(
            hardware_version=str(data.get("hardware_version", "")),
            software_version=str(data.get("software_version", "")),
            endpoints=parse_endpoints(raw_endpoints),
        )


@dataclass
class DeviceSnapshot:
    """
    A device and its reported versions.

    Versions are ordered latest first.
    """
    slug: str
    name: str = ""
    vendor: str = ""
    versions: List[DeviceVersion] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or self.slug

    @property
    def latest_version(self) -> Optional[DeviceVersion]:
        return self.versions[0] if self.versions else None

    @property
    def latest_endpoints(self) -> List[Endpoint]:
        latest = self.latest_version
        return latest.endpoints if latest else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "vendor": self.vendor,
            "versions": [v.to_dict() for v in self.versions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceSnapshot":
        """Deserialize; a top-level ``endpoints`` list becomes a single version."""
        if "versions" in data and isinstance(data["versions"], list):
            versions = [DeviceVersion.from_dict(v) for v in data["versions"] if isinstance(v, dict)]
        else:
            versions = [DeviceVersion.from_dict({"endpoints": data.get("endpoints", [])})]

        return cls(
            slug=str(data["slug"]),
            name=str(data.get("name", "")),
            vendor=str(data.get("vendor", "")),
            versions=versions,
        )
