"""CLI entry point: run `monobundle` or `python -m monobundle` next to a build.toml."""

import logging
import sys
from pathlib import Path


def main(argv=None) -> int:
    import argparse
    from .driver import BundleDriver
    from .packaging.manifest import load_manifest
    from .runtime.errors import BundleError
    from .shared.errors import MonobundleError, format_exception
    from .utils.config import BUILD_FILE

    parser = argparse.ArgumentParser(prog="monobundle", description="Bundle Python sources into one script.")
    parser.add_argument("-m", "--manifest", type=Path, default=Path(BUILD_FILE), help=f"Build manifest (default: {BUILD_FILE})")
    parser.add_argument("-p", "--project", action="append", dest="projects", help="Only build the named project (repeatable)")
    parser.add_argument("--check", action="store_true", help="Also run each entry point in-process after building")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        manifest = load_manifest(args.manifest)
        driver = BundleDriver(require_function=manifest.require_function)
        results = driver.build_all(manifest, args.projects)
        for result in results:
            sys.stdout.write(f"{result.output_path}\n")
            if args.check:
                driver.check(result.project)
    except (MonobundleError, BundleError) as e:
        sys.stderr.write(format_exception(e) + "\n")
        return 1

    if not results:
        sys.stderr.write("monobundle: error: no projects were built\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
