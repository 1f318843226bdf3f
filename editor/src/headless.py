"""Headless Mobius Renderer: CLI entry point.

Reads mapping files (JSON, as saved by the editor), computes the Mobius
transformation for each and renders its curve families to a PNG, using the
same drawing code as the on-screen canvas.

Usage:
    python -m editor.src.headless <mapping_file> [<mapping_file> ...] [-o OUTPUT_DIR]

Examples:
    python -m editor.src.headless mappings/identity.json
    python -m editor.src.headless a.json b.json -o renders/ --theme light
    python -m editor.src.headless a.json --families cartesian polar --width 1024 --height 768
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

logger = logging.getLogger(__name__)


def _build_parser():
    from constants import CURVE_FAMILY_NAMES, THEMES, WINDOW_HEIGHT, WINDOW_WIDTH

    parser = argparse.ArgumentParser(
        description='Render Mobius transformations of curve families to PNG images (headless).',
    )
    parser.add_argument(
        'input_files',
        nargs='+',
        help='Mapping JSON files to render.',
    )
    parser.add_argument(
        '-o', '--output',
        default='./output',
        help='Output directory for PNG files (default: ./output).',
    )
    parser.add_argument(
        '--width',
        type=int,
        default=WINDOW_WIDTH,
        help=f'Image width in pixels (default: {WINDOW_WIDTH}).',
    )
    parser.add_argument(
        '--height',
        type=int,
        default=WINDOW_HEIGHT,
        help=f'Image height in pixels (default: {WINDOW_HEIGHT}).',
    )
    parser.add_argument(
        '--theme',
        choices=sorted(THEMES),
        default=None,
        help='Color theme (default: the editor default).',
    )
    parser.add_argument(
        '--families',
        nargs='+',
        choices=list(CURVE_FAMILY_NAMES),
        default=None,
        help='Curve families to draw (default: the ones saved in each file).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    return parser


def render_mapping_file(input_path, output_file, extent, theme, service, families=None):
    """Render one mapping file to a PNG.

    Args:
        input_path: Mapping JSON file.
        output_file: PNG path to write.
        extent: Extent2d of the image.
        theme: Theme for background, gridline and curve colors.
        service: TransformationService computing the curves.
        families: Curve family keys overriding the file's own list.

    Returns:
        The GlobalState that was rendered (``exists`` False means only the grid was drawn).
    """
    from components.graph_canvas import render_to_image
    from services.file_operations import load_mapping_from_file, save_image_to_file
    from services.state_dispatch import generate_state, get_used_curves

    points, file_families = load_mapping_from_file(input_path)
    used = get_used_curves(set(families if families is not None else file_families))
    state = generate_state(points, used, service)
    if not state.exists:
        logger.warning("%s: no Mobius transformation exists for this mapping", input_path)

    image = render_to_image(extent, state.curves, theme, background=theme['background'])
    save_image_to_file(image, output_file)
    return state


def main(argv=None):
    args = _build_parser().parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.width <= 0 or args.height <= 0:
        print(f"Error: Image size must be positive, got {args.width}x{args.height}")
        return 1

    missing = [path for path in args.input_files if not os.path.isfile(path)]
    if missing:
        for path in missing:
            print(f"Error: Input file not found: {os.path.abspath(path)}")
        return 1

    # Painting needs a GUI application, but no display
    os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
    from PyQt5.QtGui import QGuiApplication
    app = QGuiApplication.instance() or QGuiApplication([])  # noqa: F841 (kept alive while rendering)

    from models.coord import Extent2d
    from models.theme import default_theme, lookup_theme
    from services.transformation_service import LocalTransformationService

    theme = lookup_theme(args.theme) if args.theme else default_theme()
    extent = Extent2d(args.width, args.height)
    service = LocalTransformationService()
    output_dir = os.path.abspath(args.output)
    os.makedirs(output_dir, exist_ok=True)

    rendered = 0
    failed = 0
    for path in args.input_files:
        stem = os.path.splitext(os.path.basename(path))[0]
        out_file = os.path.join(output_dir, f"{stem}.png")
        try:
            state = render_mapping_file(path, out_file, extent, theme, service, args.families)
            rendered += 1
            note = "" if state.exists else " (no transformation)"
            print(f"  [{rendered}/{len(args.input_files)}] {stem}.png{note}")
        except Exception as e:
            failed += 1
            print(f"  [FAIL] {path}: {e}")
            logger.debug("Render of %s failed", path, exc_info=e)

    print(f"\nDone. Rendered {rendered} image(s) to {output_dir}/")
    if failed:
        print(f"  ({failed} failed)")
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
