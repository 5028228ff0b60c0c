"""Motion (id 0) and extended player motion (id 13)."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import MAX_NUM_CARS
from ..layout import F32, I16, RECORD, FieldDef, Record

_DIR_SCALE = 32767.0


@dataclass
class CarMotionData:
    world_position_x: float
    world_position_y: float
    world_position_z: float
    world_velocity_x: float
    world_velocity_y: float
    world_velocity_z: float
    # normalised directions, divide by 32767 (see world_forward_dir)
    world_forward_dir_x: int
    world_forward_dir_y: int
    world_forward_dir_z: int
    world_right_dir_x: int
    world_right_dir_y: int
    world_right_dir_z: int
    g_force_lateral: float
    g_force_longitudinal: float
    g_force_vertical: float
    yaw: float
    pitch: float
    roll: float

    @property
    def world_forward_dir(self) -> tuple[float, float, float]:
        return (self.world_forward_dir_x / _DIR_SCALE,
                self.world_forward_dir_y / _DIR_SCALE,
                self.world_forward_dir_z / _DIR_SCALE)

    @property
    def world_right_dir(self) -> tuple[float, float, float]:
        return (self.world_right_dir_x / _DIR_SCALE,
                self.world_right_dir_y / _DIR_SCALE,
                self.world_right_dir_z / _DIR_SCALE)


@dataclass
class PacketMotionEx:
    """Player car only motion data.

    Appended to the motion packet in 2022, a packet of its own from 2023.
    Wheel arrays are ordered RL, RR, FL, FR.
    """

    suspension_position: list[float]
    suspension_velocity: list[float]
    suspension_acceleration: list[float]
    wheel_speed: list[float]
    wheel_slip_ratio: list[float]
    wheel_slip_angle: list[float] | None          # 2023+
    wheel_lat_force: list[float] | None           # 2023+
    wheel_long_force: list[float] | None          # 2023+
    height_of_cog_above_ground: float | None      # 2023+
    local_velocity_x: float
    local_velocity_y: float
    local_velocity_z: float
    angular_velocity_x: float
    angular_velocity_y: float
    angular_velocity_z: float
    angular_acceleration_x: float
    angular_acceleration_y: float
    angular_acceleration_z: float
    front_wheels_angle: float
    wheel_vert_force: list[float] | None          # 2023+
    front_aero_height: float | None               # 2024+
    rear_aero_height: float | None                # 2024+
    front_roll_angle: float | None                # 2024+
    rear_roll_angle: float | None                 # 2024+
    chassis_yaw: float | None                     # 2024+


@dataclass
class PacketMotion:
    car_motion_data: list[CarMotionData]
    motion_ex: PacketMotionEx | None              # 2022 only


CAR_MOTION = Record("car motion", CarMotionData, [
    FieldDef("world_position_x", F32),
    FieldDef("world_position_y", F32),
    FieldDef("world_position_z", F32),
    FieldDef("world_velocity_x", F32),
    FieldDef("world_velocity_y", F32),
    FieldDef("world_velocity_z", F32),
    FieldDef("world_forward_dir_x", I16),
    FieldDef("world_forward_dir_y", I16),
    FieldDef("world_forward_dir_z", I16),
    FieldDef("world_right_dir_x", I16),
    FieldDef("world_right_dir_y", I16),
    FieldDef("world_right_dir_z", I16),
    FieldDef("g_force_lateral", F32),
    FieldDef("g_force_longitudinal", F32),
    FieldDef("g_force_vertical", F32),
    FieldDef("yaw", F32),
    FieldDef("pitch", F32),
    FieldDef("roll", F32),
])

MOTION_EX = Record("motion ex", PacketMotionEx, [
    FieldDef("suspension_position", F32, count=4),
    FieldDef("suspension_velocity", F32, count=4),
    FieldDef("suspension_acceleration", F32, count=4),
    FieldDef("wheel_speed", F32, count=4),
    FieldDef("wheel_slip_ratio", F32, count=4),
    FieldDef("wheel_slip_angle", F32, count=4, since=2023),
    FieldDef("wheel_lat_force", F32, count=4, since=2023),
    FieldDef("wheel_long_force", F32, count=4, since=2023),
    FieldDef("height_of_cog_above_ground", F32, since=2023),
    FieldDef("local_velocity_x", F32),
    FieldDef("local_velocity_y", F32),
    FieldDef("local_velocity_z", F32),
    FieldDef("angular_velocity_x", F32),
    FieldDef("angular_velocity_y", F32),
    FieldDef("angular_velocity_z", F32),
    FieldDef("angular_acceleration_x", F32),
    FieldDef("angular_acceleration_y", F32),
    FieldDef("angular_acceleration_z", F32),
    FieldDef("front_wheels_angle", F32),
    FieldDef("wheel_vert_force", F32, count=4, since=2023),
    FieldDef("front_aero_height", F32, since=2024),
    FieldDef("rear_aero_height", F32, since=2024),
    FieldDef("front_roll_angle", F32, since=2024),
    FieldDef("rear_roll_angle", F32, since=2024),
    FieldDef("chassis_yaw", F32, since=2024),
])

MOTION = Record("motion", PacketMotion, [
    FieldDef("car_motion_data", RECORD, count=MAX_NUM_CARS, record=CAR_MOTION),
    FieldDef("motion_ex", RECORD, record=MOTION_EX, until=2022),
])
