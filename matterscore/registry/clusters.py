"""
Matter cluster reference data.

Cluster IDs, names and categories, plus the commands, attributes and
feature bits for the clusters that capability detection looks at.

See: Matter Application Cluster Specification
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class ClusterType(IntEnum):
    """Matter cluster IDs."""
    # General
    IDENTIFY = 0x0003
    GROUPS = 0x0004
    SCENES = 0x0005
    ON_OFF = 0x0006
    LEVEL_CONTROL = 0x0008
    DESCRIPTOR = 0x001D
    BINDING = 0x001E
    BASIC_INFORMATION = 0x0028
    OTA_PROVIDER = 0x0029
    OTA_REQUESTOR = 0x002A
    POWER_SOURCE = 0x002F
    TIME_SYNCHRONIZATION = 0x0038
    BOOLEAN_STATE = 0x0045
    MODE_SELECT = 0x0050
    AIR_QUALITY = 0x005B
    SMOKE_CO_ALARM = 0x005C
    SCENES_MANAGEMENT = 0x0062

    # Energy
    ELECTRICAL_POWER_MEASUREMENT = 0x0090
    ELECTRICAL_ENERGY_MEASUREMENT = 0x0091

    # Closures & HVAC
    DOOR_LOCK = 0x0101
    WINDOW_COVERING = 0x0102
    THERMOSTAT = 0x0201
    FAN_CONTROL = 0x0202
    THERMOSTAT_UI_CONFIGURATION = 0x0204

    # Lighting
    COLOR_CONTROL = 0x0300

    # Measurement
    ILLUMINANCE_MEASUREMENT = 0x0400
    TEMPERATURE_MEASUREMENT = 0x0402
    PRESSURE_MEASUREMENT = 0x0403
    FLOW_MEASUREMENT = 0x0404
    RELATIVE_HUMIDITY_MEASUREMENT = 0x0405
    OCCUPANCY_SENSING = 0x0406
    CARBON_DIOXIDE_MEASUREMENT = 0x040D
    PM25_MEASUREMENT = 0x042A
    TVOC_MEASUREMENT = 0x042E

    # Media
    CHANNEL = 0x0504
    MEDIA_PLAYBACK = 0x0506
    KEYPAD_INPUT = 0x0509
    CONTENT_LAUNCHER = 0x050A
    AUDIO_OUTPUT = 0x050B

    # Legacy energy
    ELECTRICAL_MEASUREMENT = 0x0B04


@dataclass(frozen=True)
class ClusterElement:
    """A command or attribute defined by a cluster."""
    id: int
    name: str
    optional: bool = False


@dataclass(frozen=True)
class ClusterFeature:
    """A bit in a cluster's FeatureMap."""
    bit: int
    code: str
    name: str


@dataclass(frozen=True)
class ClusterMetadata:
    """Reference metadata for one cluster."""
    id: int
    name: str
    category: str = "other"
    spec_version: Optional[str] = None
    commands: Tuple[ClusterElement, ...] = ()
    attributes: Tuple[ClusterElement, ...] = ()
    features: Tuple[ClusterFeature, ...] = ()
    known: bool = True

    @property
    def mandatory_commands(self) -> List[int]:
        return [c.id for c in self.commands if not c.optional]

    @property
    def mandatory_attributes(self) -> List[int]:
        return [a.id for a in self.attributes if not a.optional]

    def get_feature(self, code: str) -> Optional[ClusterFeature]:
        """Get a feature by its short code (e.g. ``SCH``)."""
        for feature in self.features:
            if feature.code == code:
                return feature
        return None


def _cmds(*items) -> Tuple[ClusterElement, ...]:
    return tuple(ClusterElement(*item) for item in items)


def _features(*items) -> Tuple[ClusterFeature, ...]:
    return tuple(ClusterFeature(*item) for item in items)


# =============================================================================
# CLUSTER TABLE
# =============================================================================

CLUSTERS: Dict[int, ClusterMetadata] = {
    0x0003: ClusterMetadata(
        id=0x0003, name="Identify", category="general", spec_version="1.0",
        commands=_cmds((0x00, "Identify"), (0x40, "TriggerEffect", True)),
        attributes=_cmds((0x0000, "IdentifyTime"), (0x0001, "IdentifyType")),
    ),
    0x0004: ClusterMetadata(
        id=0x0004, name="Groups", category="general", spec_version="1.0",
        commands=_cmds(
            (0x00, "AddGroup"), (0x01, "ViewGroup"), (0x02, "GetGroupMembership"),
            (0x03, "RemoveGroup"), (0x04, "RemoveAllGroups"), (0x05, "AddGroupIfIdentifying"),
        ),
        attributes=_cmds((0x0000, "NameSupport"),),
    ),
    0x0005: ClusterMetadata(id=0x0005, name="Scenes", category="general", spec_version="1.0"),
    0x0006: ClusterMetadata(
        id=0x0006, name="On/Off", category="lighting", spec_version="1.0",
        commands=_cmds(
            (0x00, "Off"), (0x01, "On"), (0x02, "Toggle"),
            (0x40, "OffWithEffect", True),
            (0x41, "OnWithRecallGlobalScene", True),
            (0x42, "OnWithTimedOff", True),
        ),
        attributes=_cmds(
            (0x0000, "OnOff"),
            (0x4000, "GlobalSceneControl", True),
            (0x4001, "OnTime", True),
            (0x4002, "OffWaitTime", True),
            (0x4003, "StartUpOnOff", True),
        ),
        features=_features((0, "LT", "Lighting"), (1, "DF", "Dead Front"), (2, "OFFONLY", "Off Only")),
    ),
    0x0008: ClusterMetadata(
        id=0x0008, name="Level Control", category="lighting", spec_version="1.0",
        commands=_cmds(
            (0x00, "MoveToLevel"), (0x01, "Move"), (0x02, "Step"), (0x03, "Stop"),
            (0x04, "MoveToLevelWithOnOff"), (0x05, "MoveWithOnOff"),
            (0x06, "StepWithOnOff"), (0x07, "StopWithOnOff"),
            (0x08, "MoveToClosestFrequency", True),
        ),
        attributes=_cmds(
            (0x0000, "CurrentLevel"),
            (0x0001, "RemainingTime", True),
            (0x0002, "MinLevel", True),
            (0x0003, "MaxLevel", True),
            (0x000F, "Options"),
            (0x0010, "OnOffTransitionTime", True),
            (0x0011, "OnLevel"),
            (0x4000, "StartUpCurrentLevel", True),
        ),
        features=_features((0, "OO", "On/Off"), (1, "LT", "Lighting"), (2, "FQ", "Frequency")),
    ),
    0x001D: ClusterMetadata(id=0x001D, name="Descriptor", category="utility", spec_version="1.0"),
    0x001E: ClusterMetadata(id=0x001E, name="Binding", category="utility", spec_version="1.0"),
    0x0028: ClusterMetadata(id=0x0028, name="Basic Information", category="utility", spec_version="1.0"),
    0x0029: ClusterMetadata(id=0x0029, name="OTA Software Update Provider", category="utility", spec_version="1.0"),
    0x002A: ClusterMetadata(id=0x002A, name="OTA Software Update Requestor", category="utility", spec_version="1.0"),
    0x002F: ClusterMetadata(
        id=0x002F, name="Power Source", category="utility", spec_version="1.0",
        features=_features(
            (0, "WIRED", "Wired"), (1, "BAT", "Battery"),
            (2, "RECHG", "Rechargeable"), (3, "REPLC", "Replaceable"),
        ),
    ),
    0x0038: ClusterMetadata(id=0x0038, name="Time Synchronization", category="utility", spec_version="1.2"),
    0x0045: ClusterMetadata(
        id=0x0045, name="Boolean State", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "StateValue"),),
    ),
    0x0050: ClusterMetadata(id=0x0050, name="Mode Select", category="general", spec_version="1.0"),
    0x005B: ClusterMetadata(id=0x005B, name="Air Quality", category="measurement", spec_version="1.2"),
    0x005C: ClusterMetadata(
        id=0x005C, name="Smoke CO Alarm", category="safety", spec_version="1.2",
        features=_features((0, "SMOKE", "Smoke Alarm"), (1, "CO", "CO Alarm")),
    ),
    0x0062: ClusterMetadata(id=0x0062, name="Scenes Management", category="general", spec_version="1.3"),
    0x0090: ClusterMetadata(id=0x0090, name="Electrical Power Measurement", category="energy", spec_version="1.3"),
    0x0091: ClusterMetadata(
        id=0x0091, name="Electrical Energy Measurement", category="energy", spec_version="1.3",
        features=_features(
            (0, "IMPE", "Imported Energy"), (1, "EXPE", "Exported Energy"),
            (2, "CUME", "Cumulative Energy"), (3, "PERE", "Periodic Energy"),
        ),
    ),
    0x0101: ClusterMetadata(
        id=0x0101, name="Door Lock", category="closures", spec_version="1.0",
        commands=_cmds(
            (0x00, "LockDoor"), (0x01, "UnlockDoor"),
            (0x03, "UnlockWithTimeout", True),
            (0x0B, "SetWeekDaySchedule", True),
            (0x1A, "SetUser", True),
            (0x22, "SetCredential", True),
        ),
        attributes=_cmds(
            (0x0000, "LockState"), (0x0001, "LockType"), (0x0002, "ActuatorEnabled"),
            (0x0003, "DoorState", True),
            (0x0023, "AutoRelockTime", True),
            (0x0025, "OperatingMode"),
        ),
        features=_features(
            (0, "PIN", "PIN Credential"), (1, "RID", "RFID Credential"),
            (2, "FGP", "Finger Credentials"), (4, "WDSCH", "Week Day Access Schedules"),
            (5, "DPS", "Door Position Sensor"), (6, "FACE", "Face Credentials"),
            (8, "USR", "User"), (10, "YDSCH", "Year Day Access Schedules"),
            (11, "HDSCH", "Holiday Schedules"),
        ),
    ),
    0x0102: ClusterMetadata(
        id=0x0102, name="Window Covering", category="closures", spec_version="1.0",
        commands=_cmds(
            (0x00, "UpOrOpen"), (0x01, "DownOrClose"), (0x02, "StopMotion"),
            (0x04, "GoToLiftValue", True), (0x05, "GoToLiftPercentage", True),
            (0x07, "GoToTiltValue", True), (0x08, "GoToTiltPercentage", True),
        ),
        attributes=_cmds(
            (0x0000, "Type"), (0x000A, "OperationalStatus"), (0x0017, "Mode"),
            (0x000E, "CurrentPositionLiftPercent100ths", True),
            (0x000F, "CurrentPositionTiltPercent100ths", True),
        ),
        features=_features(
            (0, "LF", "Lift"), (1, "TL", "Tilt"),
            (2, "PA_LF", "Position Aware Lift"), (3, "ABS", "Absolute Position"),
            (4, "PA_TL", "Position Aware Tilt"),
        ),
    ),
    0x0201: ClusterMetadata(
        id=0x0201, name="Thermostat", category="hvac", spec_version="1.0",
        commands=_cmds(
            (0x00, "SetpointRaiseLower"),
            (0x01, "SetWeeklySchedule", True),
            (0x02, "GetWeeklySchedule", True),
            (0x03, "ClearWeeklySchedule", True),
            (0x06, "SetActiveScheduleRequest", True),
            (0x07, "SetActivePresetRequest", True),
        ),
        attributes=_cmds(
            (0x0000, "LocalTemperature"),
            (0x0001, "OutdoorTemperature", True),
            (0x0011, "OccupiedCoolingSetpoint", True),
            (0x0012, "OccupiedHeatingSetpoint", True),
            (0x001B, "ControlSequenceOfOperation"),
            (0x001C, "SystemMode"),
            (0x0029, "ThermostatRunningState", True),
        ),
        features=_features(
            (0, "HEAT", "Heating"), (1, "COOL", "Cooling"), (2, "OCC", "Occupancy"),
            (3, "SCH", "Scheduling Configuration"), (4, "SB", "Setback"),
            (5, "AUTO", "Auto Mode"), (6, "LTNE", "Local Temperature Not Exposed"),
            (7, "MSCH", "Matter Schedule Configuration"), (8, "PRES", "Presets"),
        ),
    ),
    0x0202: ClusterMetadata(
        id=0x0202, name="Fan Control", category="hvac", spec_version="1.0",
        commands=_cmds((0x00, "Step", True),),
        attributes=_cmds(
            (0x0000, "FanMode"), (0x0001, "FanModeSequence"),
            (0x0002, "PercentSetting"), (0x0003, "PercentCurrent"),
            (0x0004, "SpeedMax", True), (0x0005, "SpeedSetting", True),
        ),
        features=_features(
            (0, "SPD", "Multi-Speed"), (1, "AUT", "Auto"), (2, "RCK", "Rocking"),
            (3, "WND", "Wind"), (4, "STEP", "Step"), (5, "DIR", "Airflow Direction"),
        ),
    ),
    0x0204: ClusterMetadata(id=0x0204, name="Thermostat User Interface Configuration", category="hvac", spec_version="1.0"),
    0x0300: ClusterMetadata(
        id=0x0300, name="Color Control", category="lighting", spec_version="1.0",
        commands=_cmds(
            (0x00, "MoveToHue", True), (0x06, "MoveToHueAndSaturation", True),
            (0x07, "MoveToColor", True), (0x0A, "MoveToColorTemperature", True),
            (0x47, "StopMoveStep", True),
        ),
        attributes=_cmds(
            (0x0000, "CurrentHue", True), (0x0001, "CurrentSaturation", True),
            (0x0003, "CurrentX", True), (0x0004, "CurrentY", True),
            (0x0007, "ColorTemperatureMireds", True),
            (0x0008, "ColorMode"), (0x000F, "Options"),
        ),
        features=_features(
            (0, "HS", "Hue And Saturation"), (1, "EHUE", "Enhanced Hue"),
            (2, "CL", "Color Loop"), (3, "XY", "XY"), (4, "CT", "Color Temperature"),
        ),
    ),
    0x0400: ClusterMetadata(
        id=0x0400, name="Illuminance Measurement", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "MeasuredValue"),),
    ),
    0x0402: ClusterMetadata(
        id=0x0402, name="Temperature Measurement", category="measurement", spec_version="1.0",
        attributes=_cmds(
            (0x0000, "MeasuredValue"), (0x0001, "MinMeasuredValue"),
            (0x0002, "MaxMeasuredValue"), (0x0003, "Tolerance", True),
        ),
    ),
    0x0403: ClusterMetadata(
        id=0x0403, name="Pressure Measurement", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "MeasuredValue"),),
    ),
    0x0404: ClusterMetadata(
        id=0x0404, name="Flow Measurement", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "MeasuredValue"),),
    ),
    0x0405: ClusterMetadata(
        id=0x0405, name="Relative Humidity Measurement", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "MeasuredValue"),),
    ),
    0x0406: ClusterMetadata(
        id=0x0406, name="Occupancy Sensing", category="measurement", spec_version="1.0",
        attributes=_cmds((0x0000, "Occupancy"), (0x0001, "OccupancySensorType")),
    ),
    0x040D: ClusterMetadata(id=0x040D, name="Carbon Dioxide Concentration Measurement", category="measurement", spec_version="1.2"),
    0x042A: ClusterMetadata(id=0x042A, name="PM2.5 Concentration Measurement", category="measurement", spec_version="1.2"),
    0x042E: ClusterMetadata(id=0x042E, name="TVOC Concentration Measurement", category="measurement", spec_version="1.2"),
    0x0504: ClusterMetadata(id=0x0504, name="Channel", category="media", spec_version="1.0"),
    0x0506: ClusterMetadata(
        id=0x0506, name="Media Playback", category="media", spec_version="1.0",
        commands=_cmds(
            (0x00, "Play"), (0x01, "Pause"), (0x02, "Stop"),
            (0x03, "StartOver", True), (0x04, "Previous", True), (0x05, "Next", True),
        ),
        attributes=_cmds((0x0000, "CurrentState"),),
    ),
    0x0509: ClusterMetadata(id=0x0509, name="Keypad Input", category="media", spec_version="1.0"),
    0x050A: ClusterMetadata(id=0x050A, name="Content Launcher", category="media", spec_version="1.0"),
    0x050B: ClusterMetadata(id=0x050B, name="Audio Output", category="media", spec_version="1.0"),
    0x0B04: ClusterMetadata(id=0x0B04, name="Electrical Measurement", category="energy", spec_version="1.0"),
}


# Global attributes (AttributeList, FeatureMap, ClusterRevision, ...) live at
# the top of the attribute id space and are never user-facing.
GLOBAL_ATTRIBUTE_MIN = 0xFFF8
