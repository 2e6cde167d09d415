import sys
from pathlib import Path

from txfilter.config import Config
from txfilter.core.definitions import render_filters
from txfilter.core.exceptions import FilterError
from txfilter.logger import logger, setup_logger


def main():
    """
    Entry point for the command line interface

    Builds every filter defined in the TOML config and prints its wire
    encoding, one filter per entry.
    """
    config_path = None
    if len(sys.argv) > 1:
        config_path = Path(sys.argv[1])
        if not config_path.exists():
            logger.error(f"Config file not found: {config_path}")
            sys.exit(1)

    config = Config(config_path)
    setup_logger(config.logging)

    if not config.filters:
        logger.warning("No filters configured")
        return

    try:
        rendered = render_filters(config)
    except FilterError as e:
        logger.error(f"Error building filters: {e}")
        sys.exit(1)

    for encoded in rendered.values():
        print(encoded)


if __name__ == "__main__":
    main()
