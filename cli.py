#!/usr/bin/env python
"""
Command-line interface for Cadastre Collector

Usage:
    python cli.py fetch --code 44790310 --output parcels.json
    python cli.py batch --input regions.csv --output ./reports/
    python cli.py measure --input parcels.geojson --output report.json
    python cli.py export --output project.json
    python cli.py import --input project.json
"""

import os
import sys
import json
import csv
import time
import argparse
from dataclasses import replace
from datetime import datetime

from loguru import logger

from cadastre.config import get_config, validate_config
from cadastre.exceptions import CadastreError
from cadastre.pipeline import ParcelMeasurementPipeline
from cadastre.collectors.vworld import FeatureCollection
from cadastre.storage import ProjectStore


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def _configure(args):
    """Command-line overrides applied to a copy of the shared config"""
    config = get_config()
    vworld = config.vworld
    if getattr(args, "max_pages", None):
        vworld = replace(vworld, max_pages=args.max_pages)
    config = replace(
        config,
        vworld=vworld,
        preloaded_dir=getattr(args, "preloaded_dir", None) or config.preloaded_dir
    )
    validate_config(config)
    return config


def _lands_from_report(report):
    return {
        parcel.pnu or parcel.feature_id: {
            "area_sqm": parcel.area_sqm,
            "perimeter_m": parcel.perimeter_m,
            "properties": parcel.properties,
        }
        for parcel in report.parcels
    }


def cmd_fetch(args):
    """Collect and measure one region"""
    setup_logging(args.verbose)

    try:
        config = _configure(args)
        pipeline = ParcelMeasurementPipeline(config=config)
        report = pipeline.run(args.code)

        if report.status == "failed":
            logger.error(f"Failed to load region {args.code}: {report.reason}")
            return 1
        if report.status == "empty":
            logger.warning(f"No cadastral data for region {args.code}")
            return 0

        output_path = args.output or os.path.join(
            config.output_dir,
            f"cadastre_{args.code}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        )
        pipeline.save(report, output_path)
        logger.info(f"✓ Generated: {output_path}")

        if args.save_state:
            ProjectStore(config.storage).save_state(args.project_name or args.code, _lands_from_report(report))

        if args.summary:
            summary = {
                "region_code": report.region_code,
                "parcels": report.parcel_count,
                "total_area_sqm": round(report.total_area_sqm, 2),
                "total_perimeter_m": round(report.total_perimeter_m, 2),
            }
            print(json.dumps(summary, indent=2))

        return 0

    except (CadastreError, ValueError) as e:
        logger.error(f"Failed to fetch region: {e}")
        return 1


def cmd_batch(args):
    """Collect and measure several regions listed in a CSV file"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    codes = []
    with open(args.input, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            code = (row.get("code") or "").strip()
            if code:
                codes.append(code)
            else:
                logger.warning(f"Skipping row without code: {row}")

    if not codes:
        logger.error("No region codes found in CSV")
        return 1

    try:
        config = _configure(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Processing {len(codes)} regions...")
    os.makedirs(args.output, exist_ok=True)

    pipeline = ParcelMeasurementPipeline(config=config)
    success = 0
    failed = 0

    for i, code in enumerate(codes, 1):
        logger.info(f"[{i}/{len(codes)}] {code}")

        report = pipeline.run(code)
        if report.status == "failed":
            logger.error(f"  ✗ Failed: {report.reason}")
            failed += 1
        else:
            filepath = os.path.join(args.output, f"{code}.json")
            pipeline.save(report, filepath)
            logger.info(f"  ✓ {code}.json ({report.parcel_count} parcels)")
            success += 1

        # Rate limiting
        if i < len(codes):
            time.sleep(args.delay)

    logger.info(f"\nComplete: {success} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


def cmd_measure(args):
    """Measure parcels of a local GeoJSON FeatureCollection"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            data = json.load(f)
        collection = FeatureCollection.from_geojson(data)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {args.input}: {e}")
        return 1

    if not len(collection):
        logger.warning(f"No parcels in {args.input}")
        return 0

    region_code = args.code or os.path.splitext(os.path.basename(args.input))[0]
    pipeline = ParcelMeasurementPipeline()
    report = pipeline.measure_collection(region_code, collection)

    if args.output:
        pipeline.save(report, args.output)
    else:
        for parcel in report.parcels:
            print(f"{parcel.pnu or parcel.feature_id}\t{parcel.perimeter_m:.2f}m\t{parcel.area_sqm:.2f}m²")

    return 0


def cmd_export(args):
    """Export the quick store project state to a project file"""
    setup_logging(args.verbose)

    store = ProjectStore(get_config().storage)
    state = store.load_state()
    if state is None:
        logger.error("No saved project state to export")
        return 1

    try:
        path = store.export_project(state, args.output)
    except CadastreError as e:
        logger.error(str(e))
        return 1

    logger.info(f"✓ Exported {len(state.lands)} parcels to {path}")
    return 0


def cmd_import(args):
    """Load a project file into the quick store"""
    setup_logging(args.verbose)

    store = ProjectStore(get_config().storage)
    try:
        state = store.import_project(args.input)
        store.save_state(state.project_name, state.lands)
    except CadastreError as e:
        logger.error(str(e))
        return 1

    logger.info(f"✓ Imported project '{state.project_name}' ({len(state.lands)} parcels)")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Cadastre Collector CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Fetch and measure one region:
    python cli.py fetch --code 44790310 --output parcels.json

  Batch from CSV (column: code):
    python cli.py batch --input regions.csv --output ./reports/

  Measure a local GeoJSON file:
    python cli.py measure --input parcels.geojson

  Export / import project state:
    python cli.py export --output project.json
    python cli.py import --input project.json
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Collect and measure a region")
    fetch_parser.add_argument("--code", "-c", required=True, help="Legal district code prefix (e.g. 44790310)")
    fetch_parser.add_argument("--output", "-o", help="Output JSON report")
    fetch_parser.add_argument("--preloaded-dir", help="Directory of <code>.geojson datasets")
    fetch_parser.add_argument("--max-pages", type=int, help="Maximum pages to request")
    fetch_parser.add_argument("--save-state", action="store_true", help="Save parcels to the quick store")
    fetch_parser.add_argument("--project-name", help="Project name for --save-state")
    fetch_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    fetch_parser.set_defaults(func=cmd_fetch)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Collect and measure regions from a CSV file")
    batch_parser.add_argument("--input", "-i", required=True, help="Input CSV file (column: code)")
    batch_parser.add_argument("--output", "-o", default="output", help="Output directory")
    batch_parser.add_argument("--preloaded-dir", help="Directory of <code>.geojson datasets")
    batch_parser.add_argument("--delay", type=float, default=2.0, help="Delay between regions (seconds)")
    batch_parser.set_defaults(func=cmd_batch)

    # Measure command
    measure_parser = subparsers.add_parser("measure", help="Measure parcels of a GeoJSON file")
    measure_parser.add_argument("--input", "-i", required=True, help="Input GeoJSON FeatureCollection")
    measure_parser.add_argument("--code", "-c", help="Region code for the report")
    measure_parser.add_argument("--output", "-o", help="Output JSON report (prints a table if not specified)")
    measure_parser.set_defaults(func=cmd_measure)

    # Export command
    export_parser = subparsers.add_parser("export", help="Export saved project state to a file")
    export_parser.add_argument("--output", "-o", help="Project file path")
    export_parser.set_defaults(func=cmd_export)

    # Import command
    import_parser = subparsers.add_parser("import", help="Import a project file into the quick store")
    import_parser.add_argument("--input", "-i", required=True, help="Project file path")
    import_parser.set_defaults(func=cmd_import)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
