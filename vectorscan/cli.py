"""Vectorize photographs into DXF and SVG outlines.

Usage:
    vectorscan photo.jpg --output out
    vectorscan photos/ --output out --recursive --preset coarse --format dxf

Each image is binarized (fixed threshold), its borders traced and reduced to
polygons, and the result written as ``<name>.dxf`` and/or ``<name>.svg``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import cv2
from tqdm import tqdm

from .binarize import DEFAULT_THRESHOLD
from .errors import InvalidImage, InvalidParameter, IoError, VectorScanError
from .export import default_base_name, export_all
from .geometry import Image
from .pipeline import run

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp"}

PRESETS: Dict[str, Dict[str, float]] = {
    "fine": dict(threshold=DEFAULT_THRESHOLD, epsilon=1.0),
    "balanced": dict(threshold=DEFAULT_THRESHOLD, epsilon=2.0),
    "coarse": dict(threshold=DEFAULT_THRESHOLD, epsilon=4.0),
}

FORMATS = {"dxf": ("dxf",), "svg": ("svg",), "both": ("dxf", "svg")}

# ---- image loading ----------------------------------------------------------


def load_image(path: Path) -> Image:
    """Decode ``path`` with OpenCV into an RGB ``Image``."""
    img = cv2.imread(path.as_posix(), cv2.IMREAD_COLOR)
    if img is None:
        raise InvalidImage(f"cannot decode image {path}")
    return Image.from_array(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))


def find_images(in_path: Path, recursive: bool = False) -> List[Path]:
    if in_path.is_file():
        return [in_path]
    if not in_path.is_dir():
        raise InvalidParameter(f"input {in_path} does not exist")
    glob = "**/*" if recursive else "*"
    return sorted(f for f in in_path.glob(glob) if f.is_file() and f.suffix.lower() in IMAGE_SUFFIXES)


def output_names(files: Sequence[Path], root: Path) -> Dict[Path, str]:
    """Base names for folder input, unique even across subfolders and suffixes."""
    names: Dict[Path, str] = {}
    used = set()
    for f in files:
        name = "_".join(f.relative_to(root).with_suffix("").parts)
        if name in used:
            alt, n = f"{name}_{f.suffix.lstrip('.').lower()}", 2
            while alt in used:
                alt, n = f"{name}_{n}", n + 1
            logger.warning("%s: output name %s already taken, using %s", f, name, alt)
            name = alt
        used.add(name)
        names[f] = name
    return names

# ---- processing -------------------------------------------------------------


def process_image(path: Path, outdir: Path, args: argparse.Namespace,
                  base_name: str) -> Dict[str, int]:
    result = run(load_image(path), args.threshold, args.epsilon)
    doc = result.document
    written = export_all(doc, outdir, base_name, FORMATS[args.format])
    if args.preview:
        preview = outdir / f"{base_name}_binary.png"
        if not cv2.imwrite(preview.as_posix(), result.binary.pixels):
            raise IoError(f"cannot write preview {preview}")
        written.append(preview)
    for p in written:
        logger.info("saved %s", p)
    return {"polygons": len(doc), "vertices": doc.vertex_count}

# ---- argument parsing -------------------------------------------------------


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="vectorscan", description="Vectorize photographs to DXF/SVG outlines")
    p.add_argument("input", help="Input image file or folder")
    p.add_argument("-o", "--output", default="out", help="Output folder")
    p.add_argument("--recursive", action="store_true", help="Recurse into folders")
    p.add_argument("--threshold", type=int, default=None, help="Binarization cutoff 0-255")
    p.add_argument("--epsilon", type=float, default=None, help="Simplification tolerance in pixels")
    p.add_argument("--preset", choices=sorted(PRESETS), default="balanced")
    p.add_argument("--format", choices=sorted(FORMATS), default="both")
    p.add_argument("--name", default=None, help="Output base name (single input only)")
    p.add_argument("--preview", action="store_true", help="Also save the binarized image")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    for k, v in PRESETS[args.preset].items():
        if getattr(args, k) is None:
            setattr(args, k, v)
    if not 0 <= args.threshold <= 255:
        p.error(f"--threshold must be within [0, 255], got {args.threshold}")
    if args.epsilon < 0:
        p.error(f"--epsilon must be >= 0, got {args.epsilon}")
    return args

# ---- entrypoint -------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    outdir = Path(args.output)
    try:
        files = find_images(Path(args.input), args.recursive)
        if args.name and len(files) != 1:
            raise InvalidParameter("--name needs exactly one input image")
        single = Path(args.input).is_file()
        names = {} if single else output_names(files, Path(args.input))
        iterator = tqdm(files, desc="vectorising", disable=len(files) < 2)
        for f in iterator:
            base = args.name or names.get(f) or default_base_name()
            stats = process_image(f, outdir, args, base)
            logger.info("%s: %d polygons, %d vertices", f.name, stats["polygons"], stats["vertices"])
    except VectorScanError as exc:
        logger.error("%s", exc)
        return 1
    if not files:
        logger.warning("no images found in %s", args.input)
    return 0


if __name__ == "__main__":
    sys.exit(main())
