#!/usr/bin/env python3
"""
Example: Convert an A-Station dump for the V-Station

Converts a .syx file and prints what each message holds.
"""

import sys

sys.path.insert(0, "..")

from pathlib import Path
from stationconv import ConversionError, convert_a_to_v_station


def main():
    if len(sys.argv) < 2:
        print("Usage: convert_dump.py ASTATION.syx [VSTATION.syx]")
        return 1

    source = Path(sys.argv[1])
    output = Path(sys.argv[2]) if len(sys.argv) > 2 else source.with_name(source.stem + "_V.syx")

    print(f"Converting {source}...")
    try:
        result = convert_a_to_v_station(source, output, on_info=lambda line: print(f"  {line}"))
    except ConversionError as e:
        print(f"Error: {e}")
        return 1

    print(f"  Created: {output} ({result.bytes_written} bytes, {result.frames} messages)")
    print("\nDone! The V-Station can now load this file.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
