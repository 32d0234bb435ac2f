"""Example usage of the tagmap library."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tagmap import StructMapError, struct_to_map, tagged


@dataclass
class Limits:
    max_entries: int = tagged("max_entries", default=65536)
    gc_interval_ms: int = tagged("gc_interval_ms", default=5000)


@dataclass
class Tunnel:
    enabled: bool = field(default=False, metadata={"tag": 'config:"tunnel_enabled" json:"enabled"'})
    port: int = tagged("tunnel_port", default=8472)


@dataclass
class Datapath:
    device: str = tagged("device", default="eth0")
    limits: Limits = field(default_factory=Limits)
    tunnel: Optional[Tunnel] = None


# Build the record the way a loader would expect it
datapath = Datapath(device="eth1", tunnel=Tunnel(enabled=True))

print("Values exported under the 'config' tag:")
for key, value in struct_to_map(datapath).items():
    print(f"  {key} = {value!r}")

# A missing nested record is a configuration error, not an empty section
try:
    struct_to_map(Datapath())
except StructMapError as e:
    print(f"\nRejected: {e}")
