#!/usr/bin/env python3
"""Basic usage example for tmplpack.

This example demonstrates:
1. Packing values with a template
2. Unpacking them back
3. Byte order control with < and >
4. Calculating template sizes
"""

from __future__ import annotations

from tmplpack import calcsize, pack, unpack, unpack_first


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("tmplpack Basic Usage Example")
    print("=" * 60)
    print()

    template = "N n C a6 E"
    values = [0xCAFEBABE, 1500, 7, b"probe", 21.5]

    print("1. Packing values...")
    print(f"   Template: {template!r}")
    print(f"   Values:   {values}")
    data = pack(values, template)
    print(f"   Packed:   {data.hex()} ({len(data)} bytes)")
    print()

    print("2. Unpacking...")
    print(f"   Values:   {unpack(data, template)}")
    print(f"   First:    {unpack_first(data, template):#x}")
    print()

    print("3. Byte order...")
    print(f"   L< 1 -> {pack([1], 'L<').hex()}")
    print(f"   L> 1 -> {pack([1], 'L>').hex()}")
    print()

    print("4. Sizes...")
    print(f"   calcsize({template!r}) = {calcsize(template)} bytes")
    print()


if __name__ == "__main__":
    main()
