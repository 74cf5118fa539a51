#!/usr/bin/env python3
"""Packed message example for tmplpack.

This example demonstrates:
1. Defining a message with a fixed binary layout
2. Encoding and decoding it
3. Per-field sizes
"""

from __future__ import annotations

from typing import ClassVar, Optional

from tmplpack import (
    PackedFloat,
    PackedInt,
    PackedMessage,
    PackedStr,
    decode,
    encode,
    encoded_size,
    field_sizes,
)


class StatusReport(PackedMessage):
    """Vehicle status report."""

    vehicle_id: int = PackedInt("C", description="Vehicle ID")
    depth_cm: int = PackedInt("n", ge=0, le=10000, description="Depth in centimeters")
    heading: float = PackedFloat("g", description="Heading in degrees")
    callsign: str = PackedStr(8, description="Vehicle callsign")

    tmplpack_max_bytes: ClassVar[Optional[int]] = 32


def main() -> None:
    """Run the packed message example."""
    print("=" * 60)
    print("tmplpack Packed Message Example")
    print("=" * 60)
    print()

    msg = StatusReport(vehicle_id=42, depth_cm=2500, heading=270.5, callsign="AUV-7")

    print("1. Field sizes...")
    for name, size in field_sizes(StatusReport).items():
        print(f"   {name}: {size} bytes")
    print(f"   Total: {encoded_size(StatusReport)} bytes")
    print()

    print("2. Encoding...")
    data = encode(msg)
    print(f"   {data.hex()}")
    print()

    print("3. Decoding...")
    decoded = decode(StatusReport, data)
    print(f"   {decoded!r}")
    print(f"   Round trip OK: {decoded == msg}")
    print()


if __name__ == "__main__":
    main()
