#!/usr/bin/env python3
"""
Example: Building and reading an attribute cube.

This script demonstrates how to:
1. Build one of the example cubes from configs/cubes.py
2. Walk its rows lazily, or a window of them
3. Materialize the window as a DataFrame with attribute statistics
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
import json
import logging

import pandas as pd

from mdacube.cube.enumerator import EnumeratorConfig, ResolutionPolicy
from mdacube.cube.engine import materialize
from configs.cubes import CUBES


def main():
    parser = argparse.ArgumentParser(description="Print the rows of an example cube")
    parser.add_argument("--cube", choices=sorted(CUBES), default="pricing")
    parser.add_argument("--start", type=int, default=0, help="First row index")
    parser.add_argument("--length", type=int, default=None, help="Number of rows")
    parser.add_argument("--policy", choices=[p.value for p in ResolutionPolicy],
                        default=ResolutionPolicy.MOST_SPECIFIC.value)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    config = EnumeratorConfig(resolution=ResolutionPolicy(args.policy))
    cube = CUBES[args.cube](config)

    print("=" * 60)
    print(f"Cube: {args.cube}")
    print("=" * 60)
    for name in cube.dimension_names:
        print(f"  {name}: {cube.members(name)}")
    print(f"  cells: {cube.count()}")

    result = materialize(cube, start=args.start, length=args.length)

    print("\nRows:")
    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(result.data.to_string(index=False))

    print("\nSummary:")
    print(json.dumps(result.get_summary(), indent=2, default=str))


if __name__ == "__main__":
    main()
