from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="OCR boxes (JSON) -> family card record (JSON)",
    )
    parser.add_argument(
        "--boxes",
        type=Path,
        required=True,
        help="Path to a JSON array of OCR boxes (text, x, y, w, h, cx, cy)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output path (default: <boxes>.kk.json, or <boxes>.txt with --spatial-text)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite the output file if it already exists",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the result to stdout instead of a file",
    )
    parser.add_argument(
        "--spatial-text",
        action="store_true",
        help="Write the row/column text layout instead of the structured record",
    )
    return parser.parse_args(argv)


def _default_out_path(boxes_path: Path, *, spatial_text: bool) -> Path:
    if spatial_text:
        return boxes_path.with_suffix(".txt")
    return boxes_path.with_name(f"{boxes_path.stem}.kk.json")


def main(argv: list[str]) -> int:
    args = _parse_args(argv)

    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))

    boxes_path: Path = args.boxes
    if not boxes_path.exists():
        print(f"ERROR: Boxes file not found: {boxes_path}", file=sys.stderr)
        return 2
    if not boxes_path.is_file():
        print(f"ERROR: Not a file: {boxes_path}", file=sys.stderr)
        return 2

    if args.stdout and args.out is not None:
        print("ERROR: Cannot use --stdout with --out", file=sys.stderr)
        return 2

    out_path = (
        args.out
        if args.out is not None
        else _default_out_path(boxes_path, spatial_text=args.spatial_text)
    )
    if not args.stdout:
        if out_path.exists() and not args.overwrite:
            print(
                f"ERROR: Output already exists: {out_path} (use --overwrite to replace)",
                file=sys.stderr,
            )
            return 2
        out_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        payload = boxes_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: Failed to read boxes: {exc}", file=sys.stderr)
        return 1

    try:
        from kkextract.boxes import parse_boxes
        from kkextract.config import get_settings
        from kkextract.extractor import ERROR_KEY, extract_family_card_json
        from kkextract.spatial_text import to_spatial_text
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: Failed to import app modules: {exc}", file=sys.stderr)
        return 1

    try:
        settings = get_settings()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=settings.log_level, format="%(levelname)s - %(message)s")

    exit_code = 0
    if args.spatial_text:
        try:
            boxes = parse_boxes(payload)
        except ValueError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        if len(boxes) > settings.max_boxes:
            print(
                f"ERROR: Too many boxes ({len(boxes)}), max_boxes={settings.max_boxes}",
                file=sys.stderr,
            )
            return 1
        output = to_spatial_text(boxes)
    else:
        result = extract_family_card_json(payload, max_boxes=settings.max_boxes)
        if ERROR_KEY in result:
            print(f"ERROR: Extraction failed: {result[ERROR_KEY]}", file=sys.stderr)
            exit_code = 1
        output = json.dumps(result, ensure_ascii=False, indent=2) + "\n"

    if args.stdout:
        sys.stdout.write(output)
        return exit_code

    try:
        out_path.write_text(output, encoding="utf-8", newline="\n")
    except OSError as exc:
        print(f"ERROR: Failed to write output: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote: {out_path}", file=sys.stderr)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
