#!/usr/bin/env python3
"""
Example 1: Compare Trails Against a Reference Mask
====================================================

This example builds a trail mask from a reference trail, then scores a few
query trails against it: a near copy, a drifted copy, an unrelated path,
and a path entirely off the frame.

Usage:
    python 01_compare_trails.py
"""

import numpy as np

from trailmask import Trail, create_mask


def main():
    # Reference: a gentle S-curve across the frame
    t = np.linspace(0.0, 1.0, 40)
    ref = Trail(np.column_stack([0.1 + 0.8 * t, 0.5 + 0.25 * np.sin(2 * np.pi * t)]))

    mask = create_mask(ref, width=512, height=512, thickness=64, blur_radius=32)
    print("--- Mask Summary ---")
    for key, value in mask.summary().items():
        print(f"  {key:15s} {value}")

    rng = np.random.RandomState(0)
    queries = {
        "near copy": ref.points + rng.normal(0, 0.005, ref.points.shape),
        "drifted": ref.points + np.array([0.0, 0.08]),
        "unrelated": np.column_stack([0.5 + 0.0 * t, t]),
        "off frame": ref.points - 2.0,
    }

    print("\n--- Scores ---")
    for name, points in queries.items():
        score = mask.compare(Trail(points))
        print(f"  {name:12s} score={score:.3f}")


if __name__ == "__main__":
    main()
