import argparse
import os

from local_config import Settings, global_config
from local_config.logging import logger

EXAMPLES_DIR = os.path.dirname(os.path.abspath(__file__))


def main():
    parser = argparse.ArgumentParser(description="local_config walkthrough")
    parser.add_argument("--config", type=str,
                        default=os.path.join(EXAMPLES_DIR, "test_global_settings.toml"),
                        help="Config file to load directly.")
    args = parser.parse_args()

    # Load configuration from an explicit file
    config = Settings(args.config)
    print(config)
    print(config.get_string("file.name"))
    print(f"file path: {config.get_path('delist.delist_db_file')}")

    # Process-wide configuration from the file named by DEFAULT_GLOBAL_CONFIG
    os.environ.setdefault("DEFAULT_GLOBAL_CONFIG", args.config)
    settings = global_config().get()
    logger.info(f"Global config dir: {settings.config_dir}")
    print(settings.get_string("delist.delist_db_file"))


if __name__ == "__main__":
    main()
