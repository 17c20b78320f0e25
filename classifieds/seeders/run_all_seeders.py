import logging
import subprocess
import sys

from classifieds.core.logging import setup_logging

logger = logging.getLogger(__name__)


def run_seeder(module_name: str):
    logger.info("Running seeder: %s", module_name)
    try:
        result = subprocess.run(
            [sys.executable, "-m", module_name],
            check=True,
            capture_output=True,
            text=True,
        )
        if result.stderr:
            logger.info(result.stderr.strip())
        logger.info("Seeder finished: %s", module_name)
    except subprocess.CalledProcessError as e:
        logger.error("Seeder failed: %s (return code %s)", module_name, e.returncode)
        logger.error("Error output:\n%s", e.stderr)
        raise


def main():
    setup_logging()
    seeders_in_order = [
        "classifieds.seeders.seed_users",
        "classifieds.seeders.seed_categories",
        "classifieds.seeders.seed_locations",
        "classifieds.seeders.seed_listings",
    ]

    for seeder in seeders_in_order:
        try:
            run_seeder(seeder)
        except subprocess.CalledProcessError:
            break  # stop on first failure


if __name__ == "__main__":
    main()
