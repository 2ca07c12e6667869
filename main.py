#!/usr/bin/env python3
"""
SHAPECORE - 2-D SHAPE OVERLAP DEMO

Scatters random circles, regular polygons and irregular polygons and
reports which pairs overlap.

Usage:
    python main.py --count 20 --seed 7               # Scatter 20 shapes, report overlaps
    python main.py --count 50 --allow-overlap        # Allow overlapping placement
    python main.py --count 30 --method shapely       # Use the Shapely reference check
    python main.py --count 5 --records               # Print structured records
    python main.py --warmup                          # Compile the JIT kernels only
"""

import argparse
import logging
import os
import sys
import time

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# BANNER
# =============================================================================

BANNER = """
+------------------------------------------------------------------+
|   SHAPECORE - circle / regular polygon / irregular polygon       |
|   overlap detection                                              |
+------------------------------------------------------------------+
"""


# =============================================================================
# WARMUP
# =============================================================================

def warmup_jit():
    """Compile all JIT functions before timing anything."""
    from shapecore.kernel import warmup as warmup_kernel
    from shapecore.collision import warmup as warmup_collision

    print("\nWarming up JIT compilation...")
    warmup_kernel()
    warmup_collision()
    print("   JIT warmup complete!")


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_warmup(args):
    print(BANNER)
    warmup_jit()


def cmd_scatter(args):
    """Scatter shapes and report overlapping pairs."""
    from shapecore.collision import check_all_collisions
    from shapecore.factory import scatter_shapes
    from shapecore.records import to_record

    print(BANNER)
    warmup_jit()

    print(f"\nConfiguration:")
    print(f"   Shapes: {args.count}")
    print(f"   Seed: {args.seed}")
    print(f"   Method: {args.method}")
    print(f"   Allow overlap: {args.allow_overlap}")

    start = time.time()
    shapes = scatter_shapes(
        args.count,
        seed=args.seed,
        allow_overlap=args.allow_overlap,
        method=args.method,
    )
    placed = time.time() - start

    counts = {}
    for shape in shapes:
        counts[shape.get_shape_type()] = counts.get(shape.get_shape_type(), 0) + 1

    print(f"\nPlaced {len(shapes)} shapes in {placed:.3f}s")
    for kind, count in counts.items():
        print(f"   {kind}: {count}")

    if args.records:
        print("\nRecords:")
        for shape in shapes:
            print(f"   {to_record(shape)}")

    start = time.time()
    pairs = check_all_collisions(shapes, method=args.method, progress=args.progress)
    elapsed = time.time() - start

    print(f"\nOverlapping pairs: {len(pairs)} ({elapsed:.3f}s)")
    for i, j in pairs:
        print(f"   {shapes[i].id} ({shapes[i].get_shape_type()}) <-> "
              f"{shapes[j].id} ({shapes[j].get_shape_type()})")


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Shapecore 2-D shape overlap demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --count 20 --seed 7
    python main.py --count 30 --method shapely
    python main.py --warmup
        """
    )

    parser.add_argument('--warmup', action='store_true', help='Only compile the JIT kernels')
    parser.add_argument('--count', type=int, default=20, help='Number of shapes to scatter')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--method', choices=['exact', 'sampled', 'shapely'], default='exact',
                        help='Overlap method')
    parser.add_argument('--allow-overlap', action='store_true',
                        help='Do not reject overlapping placements')
    parser.add_argument('--records', action='store_true', help='Print structured records')
    parser.add_argument('--progress', action='store_true', help='Show progress bar')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )

    try:
        if args.warmup:
            cmd_warmup(args)
        else:
            cmd_scatter(args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)

    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
