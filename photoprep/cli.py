"""
Command Line Interface for the photography asset pipeline.
"""

import argparse
import logging
import sys
from typing import List, Mapping, Optional

import urllib3

from .config import IMAGE_BACKENDS, STORE_BACKENDS, PrepareConfig, UploadConfig
from .errors import PipelineError
from .image_processor import create_image_processor
from .object_store import create_object_store
from .preparer import Preparer
from .progress import RunProgress
from .publisher import Publisher
from .reporter import Reporter


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('sh').setLevel(logging.WARNING)

    return logging.getLogger('photoprep')


def get_prepare_config(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]] = None
) -> PrepareConfig:
    """Get prepare configuration from environment and CLI overrides."""
    config = PrepareConfig.from_env(environ)

    if args.source_dir:
        config.source_dir = args.source_dir
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.manifest_file:
        config.manifest_path = args.manifest_file
    if args.seed is not None:
        config.shuffle_seed = args.seed
    if args.image_backend:
        config.image_backend = args.image_backend

    return config


def get_upload_config(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]] = None
) -> UploadConfig:
    """Get upload configuration from environment and CLI overrides."""
    config = UploadConfig.from_env(environ)

    if args.input_dir:
        config.input_dir = args.input_dir
    if args.prefix:
        config.prefix = args.prefix
    if args.store:
        config.store = args.store

    return config


def cmd_prepare(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> int:
    """Execute prepare command."""
    logger = setup_logging(args.verbose)

    try:
        config = get_prepare_config(args, environ)
        logger.info(f"Source: {config.source_dir}")
        logger.info(f"Output: {config.output_dir}")
        logger.info(f"Manifest: {config.manifest_path}")
        logger.info(f"Max edge: {config.max_edge:g}px, quality: {config.jpeg_quality:g}")

        processor = create_image_processor(config.image_backend, logger=logger)
        preparer = Preparer(config, processor, logger=logger)

        progress = None
        if not args.quiet:
            progress = RunProgress(show_files=args.show_files, logger=logger)

        manifest = preparer.run(progress=progress)

        if not args.quiet:
            print()
            Reporter(logger=logger).report_prepare(manifest, config, preparer.stats)

        return 0

    except PipelineError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Prepare failed: {e}")
        return 1


def cmd_upload(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> int:
    """Execute upload command."""
    logger = setup_logging(args.verbose)

    try:
        config = get_upload_config(args, environ)
        logger.info(f"Input: {config.input_dir}")
        logger.info(f"Store: {config.store}")
        logger.info(f"Cache max-age: {config.cache_max_age:g}s")

        errors = config.validate()
        if errors:
            for error in errors:
                logger.error(f"Error: {error}")
            return 1

        if config.store == 's3' and not config.s3.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        store = create_object_store(config, logger=logger)
        publisher = Publisher(config, store, logger=logger)

        progress = None
        if not args.quiet:
            progress = RunProgress(show_files=args.show_files, logger=logger)

        targets = publisher.run(progress=progress)

        if not args.quiet:
            Reporter(logger=logger).report_upload(targets, config, store.list_hint(config.remote_prefix))

        return 0

    except PipelineError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Upload failed: {e}")
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='photoprep',
        description='Prepare and publish photography assets for the portfolio site',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. Prepare: python -m photoprep prepare [source_dir] [output_dir] [manifest_file]
  2. Upload:  python -m photoprep upload [input_dir] [prefix]

Prepare environment:
  MAX_EDGE, JPEG_QUALITY, CLEAN_OUTPUT=0, RANDOMIZE_ORDER=0, BLOB_BASE_URL,
  SHUFFLE_SEED, IMAGE_BACKEND

Upload environment:
  CACHE_MAX_AGE, BLOB_READ_WRITE_TOKEN, BLOB_STORE,
  S3_ENDPOINT, S3_BUCKET, S3_ACCESS_KEY, S3_SECRET_KEY, S3_REGION, S3_VERIFY_SSL
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Prepare command
    prep_parser = subparsers.add_parser('prepare', help='Resize source photos and write the manifest')
    prep_parser.add_argument('source_dir', nargs='?', help='Directory of original photos')
    prep_parser.add_argument('output_dir', nargs='?', help='Directory for processed JPEGs')
    prep_parser.add_argument('manifest_file', nargs='?', help='Manifest file to write (.json or .ts)')
    prep_parser.add_argument('--seed', type=int, help='Seed for a reproducible shuffle')
    prep_parser.add_argument('--image-backend', choices=IMAGE_BACKENDS,
                             help='Override IMAGE_BACKEND')
    prep_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress and summary output')
    prep_parser.add_argument('--show-files', action='store_true',
                             help='Print each file as it is processed')
    prep_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    # Upload command
    up_parser = subparsers.add_parser('upload', help='Upload processed photos to blob storage')
    up_parser.add_argument('input_dir', nargs='?', help='Directory of processed photos')
    up_parser.add_argument('prefix', nargs='?', help='Remote path prefix')
    up_parser.add_argument('--store', choices=STORE_BACKENDS, help='Override BLOB_STORE')
    up_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress and summary output')
    up_parser.add_argument('--show-files', action='store_true',
                           help='Print each file as it is uploaded')
    up_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'prepare':
        return cmd_prepare(parsed_args)
    elif parsed_args.command == 'upload':
        return cmd_upload(parsed_args)

    return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
