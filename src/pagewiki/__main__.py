"""Entry point for pagewiki."""

import logging
import sys

from .app import run_app
from .config import Config


def setup_logging(config: Config) -> None:
    """Send log records to a file; the terminal belongs to the UI."""
    config.data_directory.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.get_log_path(),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Main entry point for pagewiki."""
    try:
        config = Config.load()
        setup_logging(config)

        run_app(config)

        # Remember the root that was active on exit
        config.save()
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
