"""
GMS Filter — Image Pair Script
Matches two images with ORB, filters the matches with GMS and prints
a per-phase summary. Optionally writes a side-by-side match overlay.

Usage:
  python scripts/filter_image_pair.py left.jpg right.jpg --out matches.jpg
"""

import argparse
import sys
from pathlib import Path

from gms_filter.api.middleware.error_handler import ImageLoadError
from gms_filter.core.pipeline import run_gms
from gms_filter.modules.correspondence import compute_orb_matches
from gms_filter.modules.rendering import draw_matches, save_match_overlay
from gms_filter.utils.image_utils import load_image_bgr
from gms_filter.utils.logger import configure_logging, filter_log_context


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ORB + GMS match filtering for an image pair")
    parser.add_argument("image_1", type=Path)
    parser.add_argument("image_2", type=Path)
    parser.add_argument("--out", type=Path, default=None, help="Write match overlay here")
    parser.add_argument("--grid-size", type=int, default=None)
    parser.add_argument("--threshold-factor", type=float, default=None)
    parser.add_argument("--n-features", type=int, default=None)
    parser.add_argument("--show-rejected", action="store_true")
    parser.add_argument("--show-grid", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()

    try:
        img_1 = load_image_bgr(args.image_1)
        img_2 = load_image_bgr(args.image_2)
    except (FileNotFoundError, ImageLoadError) as e:
        print(f"  ✗ {e}")
        return 1

    corr = compute_orb_matches(img_1, img_2, n_features=args.n_features)
    with filter_log_context(image_1=args.image_1.name, image_2=args.image_2.name):
        result = run_gms(
            corr.size_1, corr.size_2,
            corr.keypoints_1, corr.keypoints_2, corr.matches,
            grid_size=args.grid_size,
            threshold_factor=args.threshold_factor,
        )

    print(f"\nGMS — {args.image_1.name} ↔ {args.image_2.name}\n" + "─" * 40)
    print(f"  putative matches: {result.total_matches}")
    for p in result.phases:
        print(
            f"  phase {p.phase} {p.offset}: {p.inlier_count} inliers "
            f"({p.accepted_cells}/{p.occupied_cells} cells)"
        )
    print(f"  inliers: {result.inlier_count} ({result.inlier_ratio:.1%})")

    if args.out is not None:
        kept = set(result.inlier_indices)
        rejected = (
            [m for i, m in enumerate(corr.matches) if i not in kept]
            if args.show_rejected else None
        )
        canvas = draw_matches(
            img_1, corr.keypoints_1, img_2, corr.keypoints_2,
            result.matches,
            rejected=rejected,
            show_grid=args.show_grid,
            grid_size=result.grid_size,
        )
        save_match_overlay(canvas, args.out)
        print(f"  ✓ overlay written to {args.out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
