#!/usr/bin/env python3
"""
Example 2: Tuning Positional Tolerance
========================================

The blur radius controls how quickly the mask intensity falls off away
from the reference trail, and so how much positional drift a query can
have while still scoring well. This example sweeps the blur radius and
thickness and prints the score of a query drifted by a fixed offset.

A reference made of two separate strokes is used to show that trails in a
set are drawn independently.

Usage:
    python 02_tolerance_sweep.py [--offset 0.05]
"""

import argparse

from trailmask import TrailSet, create_mask


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--offset", type=float, default=0.05,
                        help="Vertical drift of the query, in normalized units")
    args = parser.parse_args()

    ref = TrailSet.from_trails([
        [[0.1, 0.3], [0.4, 0.3], [0.45, 0.5]],
        [[0.55, 0.5], [0.6, 0.7], [0.9, 0.7]],
    ])
    query = TrailSet.from_trails(
        [[[x, y + args.offset] for x, y in trail.points] for trail in ref]
    )

    mask = create_mask(ref, width=640, height=480, thickness=16, blur_radius=0)

    print(f"Query drift: {args.offset:.3f}\n")
    print(f"{'thickness':>10s} {'blur':>6s} {'score':>7s}")
    for thickness in (8, 16, 32, 64):
        for blur in (0, 8, 16, 32, 64):
            mask.update(thickness=thickness, blur_radius=blur)
            print(f"{thickness:10d} {blur:6d} {mask.compare(query):7.3f}")


if __name__ == "__main__":
    main()
