#!/usr/bin/env python3
"""Listen for the game's UDP telemetry and print the player's car.

Enable UDP telemetry in the game's settings (port 20777, broadcast or this
machine's address), then:
    python examples/udp_client.py
"""

from f1telem import DEFAULT_PORT
from f1telem.transport import UDPTransport

transport = UDPTransport("0.0.0.0", DEFAULT_PORT, timeout=5.0)

try:
    for packet in transport.packets():
        player = packet.header.player_car_index
        if packet.car_telemetry is not None:
            car = packet.car_telemetry.car_telemetry_data[player]
            print(f"speed={car.speed:3d} km/h  gear={car.gear:2d}  "
                  f"rpm={car.engine_rpm:5d}  throttle={car.throttle:.2f}")
        elif packet.event is not None:
            print(f"event {packet.event.code} {packet.event.details}")
except KeyboardInterrupt:
    pass
finally:
    transport.close()
