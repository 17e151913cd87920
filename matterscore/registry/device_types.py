"""
Matter device type reference data.

Each device type carries its cluster requirements (mandatory and optional,
server and client side) plus display metadata used to group devices.

See: Matter Device Library Specification
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

from .clusters import ClusterType as C


class MatterDeviceType(IntEnum):
    """Matter device type IDs."""
    # Utility
    DOOR_LOCK = 0x000A
    DOOR_LOCK_CONTROLLER = 0x000B
    AGGREGATOR = 0x000E
    GENERIC_SWITCH = 0x000F
    POWER_SOURCE = 0x0011
    OTA_REQUESTOR = 0x0012
    BRIDGED_NODE = 0x0013
    OTA_PROVIDER = 0x0014
    CONTACT_SENSOR = 0x0015
    ROOT_NODE = 0x0016

    # Media
    SPEAKER = 0x0022
    CASTING_VIDEO_PLAYER = 0x0023
    BASIC_VIDEO_PLAYER = 0x0028

    # HVAC
    FAN = 0x002B
    AIR_QUALITY_SENSOR = 0x002C
    AIR_PURIFIER = 0x002D

    # Sensors
    WATER_LEAK_DETECTOR = 0x0043

    # Appliances
    ROOM_AIR_CONDITIONER = 0x0072
    ROBOTIC_VACUUM_CLEANER = 0x0074
    SMOKE_CO_ALARM = 0x0076

    # Lighting
    ON_OFF_LIGHT = 0x0100
    DIMMABLE_LIGHT = 0x0101
    ON_OFF_LIGHT_SWITCH = 0x0103
    DIMMER_SWITCH = 0x0104
    COLOR_DIMMER_SWITCH = 0x0105
    LIGHT_SENSOR = 0x0106
    OCCUPANCY_SENSOR = 0x0107
    ON_OFF_PLUG = 0x010A
    DIMMABLE_PLUG = 0x010B
    COLOR_TEMP_LIGHT = 0x010C
    EXTENDED_COLOR_LIGHT = 0x010D

    # Closures
    WINDOW_COVERING = 0x0202
    WINDOW_COVERING_CONTROLLER = 0x0203

    # HVAC
    THERMOSTAT = 0x0301
    TEMPERATURE_SENSOR = 0x0302
    PRESSURE_SENSOR = 0x0305
    FLOW_SENSOR = 0x0306
    HUMIDITY_SENSOR = 0x0307

    # Energy
    ELECTRICAL_SENSOR = 0x0510


@dataclass(frozen=True)
class DeviceTypeMetadata:
    """
    Reference metadata for one device type.

    Cluster requirements are tuples of cluster IDs. ``key_client_clusters``
    are the client-side clusters that earn a controller bonus when scoring.
    System types (root node, OTA, bridged node...) are not scored.
    """
    id: int
    name: str
    category: str = "other"
    display_category: str = "Other"
    spec_version: Optional[str] = None
    icon: str = ""
    description: str = ""
    mandatory_server_clusters: Tuple[int, ...] = ()
    optional_server_clusters: Tuple[int, ...] = ()
    mandatory_client_clusters: Tuple[int, ...] = ()
    optional_client_clusters: Tuple[int, ...] = ()
    key_client_clusters: Tuple[int, ...] = ()
    scored: bool = True
    known: bool = True

    @property
    def mandatory_capabilities(self) -> Tuple[Tuple[str, int], ...]:
        """Mandatory (side, cluster_id) pairs."""
        return tuple(("server", c) for c in self.mandatory_server_clusters) + tuple(
            ("client", c) for c in self.mandatory_client_clusters
        )

    @property
    def optional_capabilities(self) -> Tuple[Tuple[str, int], ...]:
        """Optional (side, cluster_id) pairs."""
        return tuple(("server", c) for c in self.optional_server_clusters) + tuple(
            ("client", c) for c in self.optional_client_clusters
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "display_category": self.display_category,
            "spec_version": self.spec_version,
            "icon": self.icon,
            "description": self.description,
        }


def _ids(*clusters) -> Tuple[int, ...]:
    return tuple(int(c) for c in clusters)


_LIGHT_BASE = _ids(C.IDENTIFY, C.GROUPS, C.ON_OFF, C.SCENES_MANAGEMENT)
_LIGHT_OPTIONAL_CLIENT = _ids(C.OCCUPANCY_SENSING)
_SWITCH_CLIENT = _ids(C.IDENTIFY, C.ON_OFF)


def _system(type_id: int, name: str) -> DeviceTypeMetadata:
    return DeviceTypeMetadata(
        id=type_id, name=name, category="system", display_category="System",
        spec_version="1.0", icon="cpu", scored=False,
    )


# =============================================================================
# DEVICE TYPE TABLE
# =============================================================================

DEVICE_TYPES: Dict[int, DeviceTypeMetadata] = {
    # --- System / utility (never scored) ---
    0x000E: _system(0x000E, "Aggregator"),
    0x0011: _system(0x0011, "Power Source"),
    0x0012: _system(0x0012, "OTA Requestor"),
    0x0013: _system(0x0013, "Bridged Node"),
    0x0014: _system(0x0014, "OTA Provider"),
    0x0016: _system(0x0016, "Root Node"),

    # --- Lighting ---
    0x0100: DeviceTypeMetadata(
        id=0x0100, name="On/Off Light", category="lighting", display_category="Lights",
        spec_version="1.0", icon="lightbulb",
        description="A lighting device that can be switched on and off",
        mandatory_server_clusters=_LIGHT_BASE,
        optional_server_clusters=_ids(C.LEVEL_CONTROL),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),
    0x0101: DeviceTypeMetadata(
        id=0x0101, name="Dimmable Light", category="lighting", display_category="Lights",
        spec_version="1.0", icon="lightbulb",
        description="A light with adjustable brightness",
        mandatory_server_clusters=_LIGHT_BASE + _ids(C.LEVEL_CONTROL),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),
    0x010C: DeviceTypeMetadata(
        id=0x010C, name="Color Temperature Light", category="lighting", display_category="Lights",
        spec_version="1.0", icon="lightbulb",
        description="A dimmable light with tunable white color temperature",
        mandatory_server_clusters=_LIGHT_BASE + _ids(C.LEVEL_CONTROL, C.COLOR_CONTROL),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),
    0x010D: DeviceTypeMetadata(
        id=0x010D, name="Extended Color Light", category="lighting", display_category="Lights",
        spec_version="1.0", icon="lightbulb",
        description="A full color light",
        mandatory_server_clusters=_LIGHT_BASE + _ids(C.LEVEL_CONTROL, C.COLOR_CONTROL),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),

    # --- Plugs ---
    0x010A: DeviceTypeMetadata(
        id=0x010A, name="On/Off Plug-in Unit", category="plugs", display_category="Plugs & Outlets",
        spec_version="1.0", icon="plug",
        description="A smart plug that switches its load on and off",
        mandatory_server_clusters=_LIGHT_BASE,
        optional_server_clusters=_ids(
            C.LEVEL_CONTROL, C.ELECTRICAL_POWER_MEASUREMENT, C.ELECTRICAL_ENERGY_MEASUREMENT,
        ),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),
    0x010B: DeviceTypeMetadata(
        id=0x010B, name="Dimmable Plug-in Unit", category="plugs", display_category="Plugs & Outlets",
        spec_version="1.0", icon="plug",
        description="A smart plug with dimming",
        mandatory_server_clusters=_LIGHT_BASE + _ids(C.LEVEL_CONTROL),
        optional_server_clusters=_ids(C.ELECTRICAL_POWER_MEASUREMENT, C.ELECTRICAL_ENERGY_MEASUREMENT),
        optional_client_clusters=_LIGHT_OPTIONAL_CLIENT,
    ),

    # --- Switches ---
    0x000F: DeviceTypeMetadata(
        id=0x000F, name="Generic Switch", category="switches", display_category="Switches & Controls",
        spec_version="1.0", icon="toggle",
        mandatory_server_clusters=_ids(C.IDENTIFY),
    ),
    0x0103: DeviceTypeMetadata(
        id=0x0103, name="On/Off Light Switch", category="switches", display_category="Switches & Controls",
        spec_version="1.0", icon="toggle",
        mandatory_server_clusters=_ids(C.IDENTIFY),
        mandatory_client_clusters=_SWITCH_CLIENT,
        optional_client_clusters=_ids(C.GROUPS, C.SCENES_MANAGEMENT),
        key_client_clusters=_ids(C.ON_OFF),
    ),
    0x0104: DeviceTypeMetadata(
        id=0x0104, name="Dimmer Switch", category="switches", display_category="Switches & Controls",
        spec_version="1.0", icon="toggle",
        mandatory_server_clusters=_ids(C.IDENTIFY),
        mandatory_client_clusters=_SWITCH_CLIENT + _ids(C.LEVEL_CONTROL),
        optional_client_clusters=_ids(C.GROUPS, C.SCENES_MANAGEMENT),
        key_client_clusters=_ids(C.ON_OFF, C.LEVEL_CONTROL),
    ),
    0x0105: DeviceTypeMetadata(
        id=0x0105, name="Color Dimmer Switch", category="switches", display_category="Switches & Controls",
        spec_version="1.0", icon="toggle",
        mandatory_server_clusters=_ids(C.IDENTIFY),
        mandatory_client_clusters=_SWITCH_CLIENT + _ids(C.LEVEL_CONTROL, C.COLOR_CONTROL),
        optional_client_clusters=_ids(C.GROUPS, C.SCENES_MANAGEMENT),
        key_client_clusters=_ids(C.ON_OFF, C.LEVEL_CONTROL, C.COLOR_CONTROL),
    ),

    # --- Sensors ---
    0x0015: DeviceTypeMetadata(
        id=0x0015, name="Contact Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="door",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.BOOLEAN_STATE),
    ),
    0x0106: DeviceTypeMetadata(
        id=0x0106, name="Light Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="sun",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.ILLUMINANCE_MEASUREMENT),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0107: DeviceTypeMetadata(
        id=0x0107, name="Occupancy Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="motion",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.OCCUPANCY_SENSING),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0302: DeviceTypeMetadata(
        id=0x0302, name="Temperature Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="thermometer",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.TEMPERATURE_MEASUREMENT),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0305: DeviceTypeMetadata(
        id=0x0305, name="Pressure Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="gauge",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.PRESSURE_MEASUREMENT),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0306: DeviceTypeMetadata(
        id=0x0306, name="Flow Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="droplet",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.FLOW_MEASUREMENT),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0307: DeviceTypeMetadata(
        id=0x0307, name="Humidity Sensor", category="sensors", display_category="Sensors",
        spec_version="1.0", icon="droplet",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.RELATIVE_HUMIDITY_MEASUREMENT),
        optional_server_clusters=_ids(C.GROUPS),
    ),
    0x0043: DeviceTypeMetadata(
        id=0x0043, name="Water Leak Detector", category="sensors", display_category="Sensors",
        spec_version="1.3", icon="droplet",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.BOOLEAN_STATE),
    ),
    0x002C: DeviceTypeMetadata(
        id=0x002C, name="Air Quality Sensor", category="sensors", display_category="Sensors",
        spec_version="1.2", icon="wind",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.AIR_QUALITY),
        optional_server_clusters=_ids(
            C.TEMPERATURE_MEASUREMENT, C.RELATIVE_HUMIDITY_MEASUREMENT,
            C.CARBON_DIOXIDE_MEASUREMENT, C.PM25_MEASUREMENT, C.TVOC_MEASUREMENT,
        ),
    ),
    0x0510: DeviceTypeMetadata(
        id=0x0510, name="Electrical Sensor", category="energy", display_category="Energy",
        spec_version="1.3", icon="bolt",
        mandatory_server_clusters=_ids(C.ELECTRICAL_POWER_MEASUREMENT),
        optional_server_clusters=_ids(C.ELECTRICAL_ENERGY_MEASUREMENT),
    ),

    # --- Security ---
    0x000A: DeviceTypeMetadata(
        id=0x000A, name="Door Lock", category="security", display_category="Locks & Security",
        spec_version="1.0", icon="lock",
        description="A smart door lock",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.DOOR_LOCK),
        optional_client_clusters=_ids(C.TIME_SYNCHRONIZATION),
    ),
    0x000B: DeviceTypeMetadata(
        id=0x000B, name="Door Lock Controller", category="security", display_category="Locks & Security",
        spec_version="1.0", icon="lock",
        mandatory_client_clusters=_ids(C.DOOR_LOCK),
        optional_client_clusters=_ids(C.IDENTIFY),
        key_client_clusters=_ids(C.DOOR_LOCK),
    ),
    0x0076: DeviceTypeMetadata(
        id=0x0076, name="Smoke/CO Alarm", category="security", display_category="Locks & Security",
        spec_version="1.2", icon="alarm",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.SMOKE_CO_ALARM),
        optional_server_clusters=_ids(C.RELATIVE_HUMIDITY_MEASUREMENT, C.TEMPERATURE_MEASUREMENT),
    ),

    # --- Closures ---
    0x0202: DeviceTypeMetadata(
        id=0x0202, name="Window Covering", category="closures", display_category="Window Coverings",
        spec_version="1.0", icon="blinds",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.WINDOW_COVERING),
        optional_server_clusters=_ids(C.GROUPS, C.SCENES_MANAGEMENT),
    ),
    0x0203: DeviceTypeMetadata(
        id=0x0203, name="Window Covering Controller", category="closures", display_category="Window Coverings",
        spec_version="1.0", icon="blinds",
        mandatory_client_clusters=_ids(C.WINDOW_COVERING),
        optional_client_clusters=_ids(C.IDENTIFY, C.GROUPS),
        key_client_clusters=_ids(C.WINDOW_COVERING),
    ),

    # --- HVAC ---
    0x0301: DeviceTypeMetadata(
        id=0x0301, name="Thermostat", category="hvac", display_category="Climate",
        spec_version="1.0", icon="thermometer",
        description="A device that controls heating and cooling",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.THERMOSTAT),
        optional_server_clusters=_ids(
            C.GROUPS, C.SCENES_MANAGEMENT, C.THERMOSTAT_UI_CONFIGURATION,
            C.TEMPERATURE_MEASUREMENT, C.RELATIVE_HUMIDITY_MEASUREMENT,
        ),
        optional_client_clusters=_ids(
            C.FAN_CONTROL, C.TEMPERATURE_MEASUREMENT,
            C.RELATIVE_HUMIDITY_MEASUREMENT, C.OCCUPANCY_SENSING,
        ),
        key_client_clusters=_ids(C.FAN_CONTROL, C.TEMPERATURE_MEASUREMENT),
    ),
    0x002B: DeviceTypeMetadata(
        id=0x002B, name="Fan", category="hvac", display_category="Climate",
        spec_version="1.2", icon="fan",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.GROUPS, C.FAN_CONTROL),
        optional_server_clusters=_ids(C.ON_OFF),
    ),
    0x002D: DeviceTypeMetadata(
        id=0x002D, name="Air Purifier", category="hvac", display_category="Climate",
        spec_version="1.2", icon="wind",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.FAN_CONTROL),
        optional_server_clusters=_ids(C.GROUPS, C.ON_OFF),
    ),
    0x0072: DeviceTypeMetadata(
        id=0x0072, name="Room Air Conditioner", category="hvac", display_category="Climate",
        spec_version="1.2", icon="snowflake",
        mandatory_server_clusters=_ids(C.IDENTIFY, C.ON_OFF, C.THERMOSTAT),
        optional_server_clusters=_ids(
            C.GROUPS, C.SCENES_MANAGEMENT, C.FAN_CONTROL,
            C.THERMOSTAT_UI_CONFIGURATION, C.TEMPERATURE_MEASUREMENT,
            C.RELATIVE_HUMIDITY_MEASUREMENT,
        ),
    ),

    # --- Appliances ---
    0x0074: DeviceTypeMetadata(
        id=0x0074, name="Robotic Vacuum Cleaner", category="appliances", display_category="Appliances",
        spec_version="1.2", icon="robot",
        mandatory_server_clusters=_ids(C.IDENTIFY),
    ),

    # --- Media ---
    0x0022: DeviceTypeMetadata(
        id=0x0022, name="Speaker", category="media", display_category="Media",
        spec_version="1.0", icon="speaker",
        mandatory_server_clusters=_ids(C.ON_OFF, C.LEVEL_CONTROL),
    ),
    0x0023: DeviceTypeMetadata(
        id=0x0023, name="Casting Video Player", category="media", display_category="Media",
        spec_version="1.0", icon="tv",
        mandatory_server_clusters=_ids(C.ON_OFF, C.MEDIA_PLAYBACK, C.KEYPAD_INPUT, C.CONTENT_LAUNCHER),
        optional_server_clusters=_ids(C.LEVEL_CONTROL, C.CHANNEL, C.AUDIO_OUTPUT),
    ),
    0x0028: DeviceTypeMetadata(
        id=0x0028, name="Basic Video Player", category="media", display_category="Media",
        spec_version="1.0", icon="tv",
        mandatory_server_clusters=_ids(C.ON_OFF, C.MEDIA_PLAYBACK, C.KEYPAD_INPUT),
        optional_server_clusters=_ids(C.LEVEL_CONTROL, C.CHANNEL, C.AUDIO_OUTPUT),
    ),
}
