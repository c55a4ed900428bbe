#!/usr/bin/env python3

import sys

from kdsearch import KDTree, read_points, print_points, parse_point


def load_tree():
    while True:
        filename = input("Enter filename: ").strip()
        try:
            points = read_points(filename)
        except (OSError, ValueError) as e:
            print(f"\n⚠ Could not load '{filename}': {e}")
            continue

        print_points(points)
        tree = KDTree()
        try:
            tree.build(points)
        except ValueError as e:
            print(f"\n⚠ Invalid data: {e}")
            continue

        if tree.root is None:
            print("\n⚠ File has no points, queries are not possible.")
            continue
        return tree


def main():
    print("\n" + "="*60)
    print("KD-Tree Nearest Neighbor Search - Demo")
    print("="*60)
    print("Enter an empty point to exit.\n")

    tree = load_tree()
    print(f"\nBuilt tree: {len(tree)} points, dimension {tree.dimension}, depth {tree.depth}")

    while True:
        line = input("\nEnter point: ")
        if not line.strip():
            print("\nExiting...")
            sys.exit(0)

        try:
            print(f"nearest node = {tree.query(parse_point(line))}")
        except ValueError as e:
            print(f"\n⚠ {e}")


if __name__ == "__main__":
    main()
